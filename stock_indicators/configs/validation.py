"""Configuration validation helpers with readable error messages."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..exceptions import ConfigurationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigValidationError(ConfigurationError):
    """Configuration validation error carrying the underlying pydantic errors."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, config_path: Optional[str] = None):
        field = None
        if errors:
            field = ".".join(str(x) for x in errors[0].get("loc", [])) or None
        super().__init__(message, field=field, errors=errors, config_path=config_path)
        self.message = message

    def __str__(self) -> str:
        return self.format_errors()

    def format_errors(self) -> str:
        """Format validation errors into a user-friendly string."""
        lines = []

        if self.config_path:
            lines.append(f"Configuration file: {self.config_path}")

        lines.append(self.message)

        for i, error in enumerate(self.errors, 1):
            loc = " -> ".join(str(x) for x in error.get("loc", []))
            lines.append(f"  [{i}] {loc or '<root>'}: {error.get('msg', 'Unknown error')}")
            if error.get("input") is not None:
                lines.append(f"      Provided value: {error['input']!r}")
            hint = self._get_error_hint(error, loc)
            if hint:
                lines.append(f"      Hint: {hint}")

        return "\n".join(lines)

    def _get_error_hint(self, error: Dict[str, Any], field_path: str) -> Optional[str]:
        """Get a helpful hint based on error type and field."""
        error_type = error.get("type", "").lower()
        field_lower = field_path.lower()

        if "missing" in error_type:
            return "This field is required."
        if "enum" in error_type:
            if "ma_type" in field_lower:
                return "Use a smoothing kind such as 'simple', 'exponential', 'wilders' or 'weighted'."
            if "input_name" in field_lower:
                return "Use an input such as 'close', 'typical_price' or 'full_typical_price'."
        if "greater_than" in error_type:
            if "length" in field_lower:
                return "Window lengths must be positive integers."
            ctx = error.get("ctx", {})
            if "gt" in ctx:
                return f"Value must be greater than {ctx['gt']}."
            if "ge" in ctx:
                return f"Value must be greater than or equal to {ctx['ge']}."
        if "extra_forbidden" in error_type:
            return "Unknown parameter for this indicator."
        if "overbought" in str(error.get("msg", "")):
            return "overbought must be strictly greater than oversold."
        return None


def validate_file_exists(path: str, config_type: str = "config") -> None:
    """Validate that a configuration file exists.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"{config_type.capitalize()} file not found: {path}")

    if not path_obj.is_file():
        raise ValueError(f"Path exists but is not a file: {path}")


def validate_yaml_format(path: str) -> Dict[str, Any]:
    """Parse a YAML file and return its mapping.

    Raises:
        ConfigValidationError: If the YAML is invalid or not a mapping
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML format: {e}", config_path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Top-level YAML value must be a mapping, got {type(data).__name__}", config_path=path
        )
    return data


def wrap_validation_error(
    e: Exception, config_type: str = "Configuration", config_path: Optional[str] = None
) -> ConfigValidationError:
    """Wrap a pydantic ValidationError (or any exception) in ConfigValidationError."""
    if isinstance(e, ValidationError):
        message = f"{config_type} validation failed. Please fix the following errors:"
        return ConfigValidationError(message, e.errors(include_url=False), config_path=config_path)
    return ConfigValidationError(f"{config_type} validation failed: {e}", [], config_path=config_path)


def build_config(model_class: Type[ModelT], **params: Any) -> ModelT:
    """Instantiate a config model, converting validation failures to ConfigValidationError."""
    try:
        return model_class(**params)
    except ValidationError as e:
        raise wrap_validation_error(e, model_class.__name__) from e
