"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates merged configuration dictionaries."""

    @staticmethod
    def validate_payment_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate simulated payment parameters."""
        errors = []

        if "price" in params:
            value = params["price"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="payment.price",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "simulation_delay_seconds" in params:
            value = params["simulation_delay_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="payment.simulation_delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "currency" in params:
            value = params["currency"]
            if not isinstance(value, str) or len(value) != 3:
                errors.append(ValidationError(
                    field="payment.currency",
                    message="Must be a three-letter currency code",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_notification_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate notification parameters."""
        errors = []

        if "visible_seconds" in params:
            value = params["visible_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="notification.visible_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_persistence_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate persistence parameters."""
        errors = []

        for name in ("storage_key", "db_path"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=f"persistence.{name}",
                        message="Must be a non-empty string",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_catalog_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate catalog fetch parameters."""
        errors = []

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="catalog.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_sections(sections: Any) -> list[ValidationError]:
        """Validate the catalog section list."""
        if not isinstance(sections, list):
            return [ValidationError(field="sections", message="Must be a list", value=sections)]

        errors = []
        seen: set[str] = set()

        for position, entry in enumerate(sections):
            if not isinstance(entry, dict):
                errors.append(ValidationError(
                    field=f"sections[{position}]",
                    message="Must be a mapping",
                    value=entry
                ))
                continue

            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append(ValidationError(
                    field=f"sections[{position}].name",
                    message="Must be a non-empty string",
                    value=name
                ))
            elif name in seen:
                errors.append(ValidationError(
                    field=f"sections[{position}].name",
                    message="Must be unique",
                    value=name
                ))
            else:
                seen.add(name)

            resource = entry.get("resource")
            if resource is not None and not isinstance(resource, str):
                errors.append(ValidationError(
                    field=f"sections[{position}].resource",
                    message="Must be a string",
                    value=resource
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        errors.extend(cls.validate_catalog_params(config.get("catalog") or {}))
        errors.extend(cls.validate_payment_params(config.get("payment") or {}))
        errors.extend(cls.validate_notification_params(config.get("notification") or {}))
        errors.extend(cls.validate_persistence_params(config.get("persistence") or {}))
        errors.extend(cls.validate_sections(config.get("sections", [])))

        return errors
