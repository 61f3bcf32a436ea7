"""
Descriptor engine: resolves an ImageSpec into grid, resolution variants and placeholder.

Usage:

    engine = DescriptorEngine(LayoutConfig.from_env())
    spec = (
        engine.builder()
        .with_file("kittens/cute.jpg")
        .with_size(1024, 768)  # skips probing the file
        .cols("col-6 col-lg-4")
        .hires(2)
        .build()
    )
    resolved = engine.resolve(spec)
    resolved.candidates(engine.filename_resolver)
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from responsive_images.config import LayoutConfig
from responsive_images.errors import ConfigurationError, SourceUnavailable
from responsive_images.grid.columns import normalize_signature, parse_columns
from responsive_images.grid.ratio import adjust_grid, parse_ratio, ratio_percent, wrapper_kind
from responsive_images.grid.resolver import GridCache, GridResolver
from responsive_images.io.image_probe import ImageProbe
from responsive_images.models import (
    FilenameResolver,
    Grid,
    ImageSpec,
    ResolvedImage,
    SourceImage,
)
from responsive_images.resolution.expander import ResolutionExpander, normalize_hires
from responsive_images.resolution.lqip import pixel_choice, select_lqip
from responsive_images.utils.engine_logger import get_logger


MISSING_IMAGE_ALT = "Missing image"


def split_extension(file_name: str) -> tuple:
    """Split "path/name.ext" into ("path/name", "ext")."""
    name, dot, ext = file_name.rpartition(".")
    if not dot or not name or not ext or "/" in ext:
        raise ConfigurationError(f"File name needs an extension: {file_name}")
    return name, ext


class ImageSpecBuilder:
    """
    Immutable builder for ImageSpec.

    Every method returns a new builder, so a partially configured builder can
    be reused across a loop without leaking state between images.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self._options: Dict[str, Any] = dict(options or {})

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "ImageSpecBuilder":
        """Builder seeded with the configured defaults."""
        return cls({
            "hires": normalize_hires(config.default_hires),
            "hires_height": config.default_hires_height,
            "lqip": config.default_lqip,
            "ratio": parse_ratio(config.default_ratio),
            "ratio_crop": config.default_ratio_crop,
            "max_resolution_factor": config.default_max_resolution,
            "resolution_step": config.default_resolution_step,
            "container_max_height": config.default_container_max_height,
        })

    def _with(self, **updates) -> "ImageSpecBuilder":
        options = dict(self._options)
        options.update(updates)
        return ImageSpecBuilder(options)

    def options(self, **options) -> "ImageSpecBuilder":
        """
        Set options by name.

        Raises:
            ConfigurationError: On an unknown option name.
        """
        unknown = sorted(set(options) - set(ImageSpec.model_fields))
        if unknown:
            raise ConfigurationError(f"Unknown image option(s): {', '.join(unknown)}")
        if "ratio" in options:
            options["ratio"] = parse_ratio(options["ratio"])
        if "hires" in options:
            options["hires"] = normalize_hires(options["hires"])
        if "cols" in options and options["cols"] is None:
            options["cols"] = ()
        return self._with(**options)

    def with_file(self, src: str, dest: Optional[str] = None) -> "ImageSpecBuilder":
        """Source file; dest renames the public-facing file."""
        name, ext = split_extension(src)
        dest_name, dest_ext = split_extension(dest) if dest else (None, None)
        return self._with(src=name, ext=ext, dest=dest_name, dest_ext=dest_ext)

    def with_size(self, width: int, height: int) -> "ImageSpecBuilder":
        """Source dimensions, to avoid probing the file."""
        return self._with(width=width, height=height)

    def cols(self, classes: Any = None) -> "ImageSpecBuilder":
        return self.options(cols=classes)

    def ratio(self, value: Any, crop: bool = False) -> "ImageSpecBuilder":
        """
        Aspect ratio of the image box.

        Args:
            value: False/None to disable, True for the source ratio, a number
                (height/width) or "W/H".
            crop: Crop the image to the box instead of containing it.
        """
        return self._with(ratio=parse_ratio(value), ratio_crop=crop)

    def hires(self, value: Any, resolution_step: Optional[float] = None) -> "ImageSpecBuilder":
        """Max factor (<= 10), max pixel width (> 10), "source", or falsy for 1x only."""
        updates = {"hires": normalize_hires(value)}
        if resolution_step is not None:
            updates["resolution_step"] = resolution_step
        return self._with(**updates)

    def hires_height(self, value: Any) -> "ImageSpecBuilder":
        return self._with(hires_height=value)

    def max_resolution(self, factor: float) -> "ImageSpecBuilder":
        return self._with(max_resolution_factor=factor)

    def lqip(self, policy: Any) -> "ImageSpecBuilder":
        return self._with(lqip=policy)

    def max_height(self, height: Optional[int]) -> "ImageSpecBuilder":
        return self._with(container_max_height=height)

    def alt(self, text: str) -> "ImageSpecBuilder":
        return self._with(alt=text)

    def build(self) -> ImageSpec:
        """
        Validate and freeze the options.

        Raises:
            ConfigurationError: If required options are missing or invalid.
        """
        if "src" not in self._options:
            raise ConfigurationError("You must call with_file()")
        try:
            return ImageSpec(**self._options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid image options: {e}") from e


class DescriptorEngine:
    """
    Runs the descriptor pipeline for one render session.

    The grid cache lives on the engine; create one engine per request.
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        cache: Optional[GridCache] = None,
        probe: Optional[ImageProbe] = None,
        filename_resolver: Optional[FilenameResolver] = None
    ):
        """
        Initialize the engine.

        Args:
            config: Layout configuration (defaults to LayoutConfig()).
            cache: Grid cache for this session.
            probe: Image probe used when a spec has no dimensions.
            filename_resolver: (name, ext, width) -> URL for srcset candidates.
        """
        self.config = config or LayoutConfig()
        self.table = self.config.breakpoint_table()
        self.cache = cache if cache is not None else GridCache()
        self.probe = probe or ImageProbe(self.config.image_root)
        self.filename_resolver = filename_resolver or self.config.dynamic_image_filename
        self.logger = get_logger()

    def builder(self) -> ImageSpecBuilder:
        return ImageSpecBuilder.from_config(self.config)

    def source_for(self, spec: ImageSpec) -> SourceImage:
        """Supplied dimensions, or probe the file."""
        return spec.source or self.probe.probe(spec.file_name)

    def grid_for(self, spec: ImageSpec) -> Grid:
        """Grid for the spec's columns, from the cache when possible."""
        fractions = parse_columns(spec.cols, self.config.grid_columns, set(self.table.names()))
        signature = normalize_signature(fractions)
        key = GridCache.key(
            self.table,
            signature,
            self.config.grid_columns,
            self.config.gutter_width,
            spec.container_max_height,
        )

        grid = self.cache.get(key)
        if grid is not None:
            self.logger.log_grid(signature, grid, cache_hit=True)
            return grid

        resolver = GridResolver(
            self.table,
            grid_columns=self.config.grid_columns,
            gutter_width=self.config.gutter_width,
            container_max_height=spec.container_max_height,
        )
        grid = resolver.resolve(fractions)
        self.cache.put(key, grid)
        self.logger.log_grid(signature, grid, cache_hit=False)
        return grid

    def resolve(self, spec: ImageSpec) -> ResolvedImage:
        """
        Resolve a spec into everything the markup layer needs.

        Args:
            spec: Image options.

        Returns:
            ResolvedImage.

        Raises:
            ConfigurationError: On invalid resolution or LQIP options.
            SourceUnavailable: If dimensions must be probed and the file is unusable.
        """
        source = self.source_for(spec)
        grid = adjust_grid(self.grid_for(spec), spec.ratio, spec.ratio_crop, source)

        expander = ResolutionExpander(
            max_resolution_factor=spec.max_resolution_factor,
            resolution_step=spec.resolution_step,
            hires=spec.hires,
            hires_height=spec.hires_height,
        )
        resolutions = expander.expand(grid, source)
        self.logger.log_resolutions(spec.file_name, resolutions)

        return ResolvedImage(
            name=spec.public_name,
            ext=spec.public_ext,
            source=source,
            grid=grid,
            resolutions=resolutions,
            lqip=select_lqip(resolutions, spec.lqip, source),
            wrapper=wrapper_kind(spec.ratio, spec.ratio_crop, source),
            ratio_percent=ratio_percent(spec.ratio, source),
            alt=spec.alt,
        )

    def resolve_or_fallback(self, spec: ImageSpec) -> ResolvedImage:
        """
        Resolve a spec, substituting a placeholder when the source is unavailable.

        The failure is logged and never propagated to the page.
        """
        try:
            return self.resolve(spec)
        except SourceUnavailable as e:
            self.logger.warning(str(e), path=str(e.path) if e.path else spec.file_name)
            return ResolvedImage.missing_image(
                spec.public_name,
                spec.public_ext,
                pixel_choice(),
                alt=MISSING_IMAGE_ALT,
            )


def resolve(
    spec: ImageSpec,
    config: Optional[LayoutConfig] = None,
    cache: Optional[GridCache] = None
) -> ResolvedImage:
    """Resolve a single spec with a throwaway engine."""
    return DescriptorEngine(config, cache=cache).resolve(spec)
