"""Configuration validation utilities."""

import logging
from dataclasses import dataclass, fields
from typing import Any

from .defaults import CatalogParams, DateParams, LoggingParams

SECTION_PARAMS = {
    "catalog": CatalogParams,
    "dates": DateParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_known_keys(config: dict[str, Any]) -> list[ValidationError]:
        """Report sections and fields that DefaultConfig does not define."""
        errors = []

        for section, params in config.items():
            if section not in SECTION_PARAMS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue

            known = {f.name for f in fields(SECTION_PARAMS[section])}
            for key, value in params.items():
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_catalog_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate catalog parameters."""
        errors = []

        if "path" in params:
            value = params["path"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="path",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "url" in params:
            value = params["url"]
            if value is not None and (
                not isinstance(value, str) or not value.startswith(("http://", "https://"))
            ):
                errors.append(ValidationError(
                    field="url",
                    message="Must be null or an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_date_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate date parameters."""
        errors = []

        if "lookback_years" in params:
            value = params["lookback_years"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(ValidationError(
                    field="lookback_years",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or not isinstance(
                getattr(logging, value.upper(), None), int
            ):
                errors.append(ValidationError(
                    field="level",
                    message="Must be a standard logging level name",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_known_keys(config)

        if isinstance(config.get("catalog"), dict):
            errors.extend(ConfigValidator.validate_catalog_params(config["catalog"]))

        if isinstance(config.get("dates"), dict):
            errors.extend(ConfigValidator.validate_date_params(config["dates"]))

        if isinstance(config.get("logging"), dict):
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
