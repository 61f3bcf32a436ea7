"""
Data models and schemas for the responsive image descriptor engine.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from responsive_images.errors import ConfigurationError


XS = "xs"
HIRES_SOURCE = "source"

# (logical name, extension, width) -> public URL
FilenameResolver = Callable[[str, str, int], str]


class Orientation(str, Enum):
    """Source image orientation."""
    SQUARE = "square"
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class WrapperKind(str, Enum):
    """Structural wrapper required around the rendered element."""
    NONE = "none"
    RATIO = "ratio"  # ratio equals the source ratio, padding only
    CROP = "crop"
    CONTAIN = "contain"


class LqipKind(str, Enum):
    """How the placeholder source is delivered."""
    WIDTH = "width"
    INLINE = "inline"
    FILE = "file"


class Breakpoint(BaseModel):
    """A named screen-width threshold."""
    model_config = ConfigDict(frozen=True)

    name: str
    container_width: int
    activation_width: int


class BreakpointTable(BaseModel):
    """Breakpoints ordered from the largest container to the smallest."""
    model_config = ConfigDict(frozen=True)

    version: str
    breakpoints: Tuple[Breakpoint, ...]

    @model_validator(mode="after")
    def _check_descending(self) -> "BreakpointTable":
        if not self.breakpoints:
            raise ValueError(f"Breakpoint table v{self.version} is empty")
        for bigger, smaller in zip(self.breakpoints, self.breakpoints[1:]):
            if smaller.container_width >= bigger.container_width:
                raise ValueError(
                    f"Containers must be ordered largest to smallest: "
                    f"{bigger.name} ({bigger.container_width}) before {smaller.name} ({smaller.container_width})"
                )
            if smaller.activation_width >= bigger.activation_width:
                raise ValueError(
                    f"Activation widths must decrease with container widths: "
                    f"{bigger.name} ({bigger.activation_width}) before {smaller.name} ({smaller.activation_width})"
                )
        return self

    @classmethod
    def from_widths(
        cls,
        version: str,
        containers: Dict[str, int],
        activations: Dict[str, int]
    ) -> "BreakpointTable":
        """
        Build a table from parallel name → width mappings.

        Args:
            version: Layout version label.
            containers: Breakpoint name → container width, largest first.
            activations: Breakpoint name → media query min-width.

        Returns:
            Validated BreakpointTable.
        """
        missing = set(containers) ^ set(activations)
        if missing:
            raise ConfigurationError(
                f"Breakpoint names differ between containers and activations: {sorted(missing)}"
            )
        try:
            return cls(
                version=str(version),
                breakpoints=tuple(
                    Breakpoint(name=name, container_width=width, activation_width=activations[name])
                    for name, width in containers.items()
                )
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def names(self) -> List[str]:
        return [bp.name for bp in self.breakpoints]

    def get(self, name: str) -> Breakpoint:
        """Get a breakpoint by name."""
        for bp in self.breakpoints:
            if bp.name == name:
                return bp
        raise KeyError(f"Unknown breakpoint: {name}")

    def container(self, name: str) -> int:
        """Container width for a breakpoint name; the implicit xs size is 0."""
        if name == XS:
            return 0
        return self.get(name).container_width

    def activation(self, name: str) -> int:
        if name == XS:
            return 0
        return self.get(name).activation_width

    @property
    def smallest(self) -> Breakpoint:
        return self.breakpoints[-1]


class ColumnFraction(BaseModel):
    """A column span (numerator of the grid) scoped to a breakpoint."""
    model_config = ConfigDict(frozen=True)

    numerator: int = Field(ge=1)
    breakpoint: str = XS

    @property
    def is_xs(self) -> bool:
        return self.breakpoint == XS


class GridEntry(BaseModel):
    """Target container size at one breakpoint."""
    model_config = ConfigDict(frozen=True)

    width: int
    height: Optional[int] = None

    def scaled(self, factor: float) -> "GridEntry":
        """Scale both dimensions, rounding half up to the nearest pixel."""
        return GridEntry(
            width=round_half_up(self.width * factor),
            height=round_half_up(self.height * factor) if self.height is not None else None
        )


# activation width -> target size, biggest media query first
Grid = Dict[int, GridEntry]

# activation width -> {resolution factor -> pixel width}
ResolutionDict = Dict[int, Dict[float, int]]


class SourceImage(BaseModel):
    """Native dimensions of the source image."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @property
    def ratio(self) -> float:
        """Height over width, rounded to 5 places."""
        return round(self.height / self.width, 5)

    @property
    def orientation(self) -> Orientation:
        if self.width > self.height:
            return Orientation.LANDSCAPE
        if self.width < self.height:
            return Orientation.PORTRAIT
        return Orientation.SQUARE


class NaturalRatio(BaseModel):
    """Use the source image's own ratio."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["natural"] = "natural"

    def resolve(self, source: SourceImage) -> float:
        return source.ratio


class FixedRatio(BaseModel):
    """A forced height/width ratio, e.g. 1.0 for a square crop."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    value: float = Field(gt=0)

    def resolve(self, source: SourceImage) -> float:
        return self.value


class AspectRatio(BaseModel):
    """An aspect written as W/H or W:H."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["aspect"] = "aspect"
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @property
    def value(self) -> float:
        return round(self.height / self.width, 5)

    def resolve(self, source: SourceImage) -> float:
        return self.value


RatioSpec = Union[NaturalRatio, FixedRatio, AspectRatio]


class LqipChoice(BaseModel):
    """The chosen placeholder source."""
    model_config = ConfigDict(frozen=True)

    kind: LqipKind
    width: Optional[int] = None
    data_uri: Optional[str] = None
    file: Optional[str] = None


class ImageSpec(BaseModel):
    """
    Every recognized render option for one image.

    Build specs with ImageSpecBuilder, which reports bad options as
    ConfigurationError. Constructing ImageSpec directly accepts the same loose
    ratio and hires values but raises pydantic's ValidationError.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    src: str
    ext: str
    dest: Optional[str] = None
    dest_ext: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    cols: Tuple[str, ...] = ()
    ratio: Optional[Union[NaturalRatio, FixedRatio, AspectRatio]] = None
    ratio_crop: bool = False
    hires: Any = HIRES_SOURCE
    hires_height: Any = None
    max_resolution_factor: float = 2.0
    resolution_step: float = 0.5
    lqip: Any = XS
    container_max_height: Optional[int] = Field(default=None, gt=0)
    alt: str = ""

    @field_validator("cols", mode="before")
    @classmethod
    def _split_cols(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(value.split())
        return tuple(value)

    @field_validator("ratio", mode="before")
    @classmethod
    def _parse_ratio(cls, value):
        from responsive_images.grid.ratio import parse_ratio
        return parse_ratio(value)

    @field_validator("hires", mode="before")
    @classmethod
    def _normalize_hires(cls, value):
        from responsive_images.resolution.expander import normalize_hires
        return normalize_hires(value)

    @property
    def public_name(self) -> str:
        return self.dest or self.src

    @property
    def public_ext(self) -> str:
        return self.dest_ext or self.ext

    @property
    def file_name(self) -> str:
        return f"{self.src}.{self.ext}"

    @property
    def source(self) -> Optional[SourceImage]:
        """Supplied dimensions, if both were given."""
        if self.width and self.height:
            return SourceImage(width=self.width, height=self.height)
        return None


class ResolvedImage(BaseModel):
    """Everything the markup layer needs to assemble the element."""
    model_config = ConfigDict(frozen=True)

    name: str
    ext: str
    source: Optional[SourceImage] = None
    grid: Grid = Field(default_factory=dict)
    resolutions: ResolutionDict = Field(default_factory=dict)
    lqip: LqipChoice
    wrapper: WrapperKind = WrapperKind.NONE
    ratio_percent: Optional[float] = None
    alt: str = ""
    missing: bool = False

    @property
    def orientation(self) -> Optional[Orientation]:
        return self.source.orientation if self.source else None

    @property
    def requires_crop_wrapper(self) -> bool:
        return self.wrapper == WrapperKind.CROP

    @property
    def default_width(self) -> Optional[int]:
        """Largest width of the biggest media query; never upscaled."""
        for factors in self.resolutions.values():
            if factors:
                return max(factors.values())
        return None

    def candidates(self, resolver: FilenameResolver) -> Dict[int, List[Tuple[str, float]]]:
        """
        Build srcset candidates with the public filename resolver.

        Identical URLs within one breakpoint are kept once, at the highest
        factor that produced them.

        Args:
            resolver: Callable (name, ext, width) -> URL.

        Returns:
            Activation width -> list of (url, factor), highest factor first.
        """
        result: Dict[int, List[Tuple[str, float]]] = {}
        for activation, factors in self.resolutions.items():
            seen = set()
            entries = []
            for factor in sorted(factors, reverse=True):
                url = resolver(self.name, self.ext, factors[factor])
                if url in seen:
                    continue
                seen.add(url)
                entries.append((url, factor))
            result[activation] = entries
        return result

    @classmethod
    def missing_image(cls, name: str, ext: str, lqip: LqipChoice, alt: str = "Missing image") -> "ResolvedImage":
        """Safe substitute when the source cannot be read."""
        return cls(name=name, ext=ext, lqip=lqip, alt=alt, missing=True)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -round_half_up(-value)
    return int(value + 0.5)
