"""Color values for bar overrides and gap rectangles."""

from dataclasses import dataclass, replace
from typing import Union

# Channel values as (r, g, b)
NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "yellow": (255, 255, 0),
    "gold": (255, 215, 0),
    "orange": (255, 165, 0),
    "red": (255, 0, 0),
    "crimson": (220, 20, 60),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "dodgerblue": (30, 144, 255),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "fuchsia": (255, 0, 255),
    "purple": (128, 0, 128),
    "white": (255, 255, 255),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "black": (0, 0, 0),
}


def _check_channel(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"Color channel '{name}' must be an integer in 0-255, got {value!r}")


@dataclass(frozen=True)
class Color:
    """RGBA color with 8-bit channels."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            _check_channel(name, getattr(self, name))

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """Look up a named color, ignoring case, spaces and underscores."""
        key = name.strip().lower().replace(" ", "").replace("_", "")
        if key not in NAMED_COLORS:
            raise ValueError(f"Unknown color name '{name}'")
        return cls(*NAMED_COLORS[key])

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse '#RRGGBB' or '#AARRGGBB'.

        The eight digit form puts alpha first, matching how charting hosts
        serialize their color parameters.
        """
        digits = value.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Hex color must have 6 or 8 digits, got '{value}'")
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as e:
            raise ValueError(f"Invalid hex color '{value}': {e}") from e

        if len(channels) == 3:
            return cls(*channels)
        alpha, r, g, b = channels
        return cls(r, g, b, alpha)

    @classmethod
    def parse(cls, value: Union["Color", str]) -> "Color":
        """Build a color from a Color, a hex string or a color name."""
        if isinstance(value, Color):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Color must be a name or hex string, got {type(value).__name__}")
        if value.strip().startswith("#"):
            return cls.from_hex(value)
        return cls.from_name(value)

    def with_alpha(self, alpha: int) -> "Color":
        """Same RGB with the given alpha (0 transparent, 255 opaque)."""
        _check_channel("a", alpha)
        return replace(self, a=alpha)

    def to_hex(self) -> str:
        """Format as '#AARRGGBB'."""
        return f"#{self.a:02X}{self.r:02X}{self.g:02X}{self.b:02X}"
