"""Default configuration parameters for the FVG highlighter."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FVGParams:
    """Host-exposed indicator parameters."""
    color: str = "Yellow"                 # Bar override and rectangle base color
    minimum_gap_pips: int = 3             # Min gap width in pips
    show_rectangles: bool = True          # Draw gap rectangles
    rectangle_opacity: int = 50           # Rectangle alpha, 0-255
    enabled: bool = True                  # Master switch


@dataclass(frozen=True)
class InstrumentParams:
    """Per-instrument properties."""
    pip_size: float = 0.0001              # Price units per pip


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    fvg: FVGParams
    instrument: InstrumentParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        fvg=FVGParams(),
        instrument=InstrumentParams(),
        logging=LoggingParams(),
    )
