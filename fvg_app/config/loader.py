"""
Layered configuration for the FVG highlighter.

Three tiers, later ones winning:

1. Global defaults (config.defaults)
2. Per-instrument entries in <config_dir>/instruments.yaml
3. Per-session overrides handed over by the host when it attaches
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config

INSTRUMENTS_FILE = "instruments.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Merges defaults, instrument entries and session overrides."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Loader over config_dir, the repository's config/ by default."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    @property
    def instruments_file(self) -> Path:
        return self.config_dir / INSTRUMENTS_FILE

    def _read_instruments(self) -> dict[str, Any]:
        if not self.instruments_file.exists():
            return {}

        with open(self.instruments_file) as f:
            document = yaml.safe_load(f) or {}

        instruments = document.get("instruments") if isinstance(document, dict) else None
        if instruments is None:
            instruments = {}
        if not isinstance(instruments, dict):
            raise ConfigurationError(
                f"{self.instruments_file}: 'instruments' must be a mapping",
                context={"path": str(self.instruments_file)}
            )
        return instruments

    def load_instrument_config(self, instrument_id: str) -> dict[str, Any]:
        """
        Overrides declared for one instrument.

        Instrument ids match case-insensitively; unknown ids get no
        overrides.
        """
        instruments = self._read_instruments()
        wanted = instrument_id.upper()
        for key, entry in instruments.items():
            if str(key).upper() == wanted:
                return entry or {}
        return {}

    def list_instruments(self) -> list[str]:
        """Instrument ids declared in the instruments file."""
        return sorted(str(key) for key in self._read_instruments())

    def merge_config(
        self,
        instrument_id: str,
        session_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Build the effective configuration for one instrument.

        Raises:
            ConfigurationError: If the instrument entry or the session
                overrides name a section the defaults do not have
        """
        config = asdict(self.defaults)

        for source, overrides in (
            (f"instrument {instrument_id}", self.load_instrument_config(instrument_id)),
            ("session", session_overrides or {}),
        ):
            unknown = sorted(set(overrides) - set(config))
            if unknown:
                raise ConfigurationError(
                    f"Unknown configuration sections in {source} overrides: {', '.join(unknown)}",
                    errors=unknown,
                    context={"instrument_id": instrument_id}
                )
            config = _merge_sections(config, overrides)

        return config


def _merge_sections(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = {section: dict(values) for section, values in base.items()}
    for section, values in overrides.items():
        if not isinstance(values, dict):
            raise ConfigurationError(
                f"Configuration section '{section}' must be a mapping",
                errors=[section]
            )
        merged[section].update(values)
    return merged
