"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from ..rendering.colors import Color
from .defaults import FVGParams, InstrumentParams, LoggingParams

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unknown_fields(params: dict[str, Any], params_cls: type) -> list[ValidationError]:
    known = {f.name for f in fields(params_cls)}
    return [
        ValidationError(field=key, message="Unknown parameter", value=params[key])
        for key in params if key not in known
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_fvg_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator parameters."""
        errors = _unknown_fields(params, FVGParams)

        if "color" in params:
            value = params["color"]
            try:
                Color.parse(value)
            except ValueError as e:
                errors.append(ValidationError(
                    field="color",
                    message=f"Must be a color name or hex string ({e})",
                    value=value
                ))

        if "minimum_gap_pips" in params:
            value = params["minimum_gap_pips"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="minimum_gap_pips",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "rectangle_opacity" in params:
            value = params["rectangle_opacity"]
            if not _is_int(value) or not 0 <= value <= 255:
                errors.append(ValidationError(
                    field="rectangle_opacity",
                    message="Must be an integer between 0 and 255",
                    value=value
                ))

        for flag in ("show_rectangles", "enabled"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=flag,
                    message="Must be a boolean",
                    value=params[flag]
                ))

        return errors

    @staticmethod
    def validate_instrument_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate instrument parameters."""
        errors = _unknown_fields(params, InstrumentParams)

        if "pip_size" in params:
            value = params["pip_size"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="pip_size",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = _unknown_fields(params, LoggingParams)

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "fvg" in config:
            errors.extend(ConfigValidator.validate_fvg_params(config["fvg"]))

        if "instrument" in config:
            errors.extend(ConfigValidator.validate_instrument_params(config["instrument"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
