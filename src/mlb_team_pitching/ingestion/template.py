"""${VAR} substitution for YAML configuration values."""

import os
import re
from datetime import date, timedelta
from typing import Any

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class TemplateResolver:
    """Resolve ${VAR} placeholders in configuration values.

    Supported variables:
    - ${TODAY} / ${YESTERDAY} - ISO dates relative to today
    - ${YEAR} - Current year, handy for season boundaries
    - ${ENV:NAME} - Environment variable (error if unset)
    - Any keyword passed to the constructor (e.g. TEAM_ID=139)
    """

    def __init__(self, today: date | None = None, **custom_vars):
        self.today = today or date.today()
        self.custom_vars = custom_vars

    def resolve(self, value: Any) -> Any:
        """Resolve placeholders in a string, or recursively in a dict or list."""
        if isinstance(value, str):
            return _VAR_PATTERN.sub(lambda m: self._lookup(m.group(1).strip()), value)
        elif isinstance(value, dict):
            return {k: self.resolve(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self.resolve(item) for item in value]
        return value

    def _lookup(self, var_name: str) -> str:
        if var_name == "TODAY":
            return self.today.isoformat()
        if var_name == "YESTERDAY":
            return (self.today - timedelta(days=1)).isoformat()
        if var_name == "YEAR":
            return str(self.today.year)

        if var_name.startswith("ENV:"):
            env_var = var_name.split(":", 1)[1]
            value = os.getenv(env_var)
            if value is None:
                raise ValueError(f"Environment variable not found: {env_var}")
            return value

        if var_name in self.custom_vars:
            return str(self.custom_vars[var_name])

        raise ValueError(f"Unknown template variable: {var_name}")


def resolve_config(config: dict[str, Any], **custom_vars) -> dict[str, Any]:
    """Resolve all placeholders in a config dict.

    Example:
        >>> resolve_config({"end_date": "${TODAY}"}, today=date(2025, 7, 4))
        {'end_date': '2025-07-04'}
    """
    today = custom_vars.pop("today", None)
    return TemplateResolver(today=today, **custom_vars).resolve(config)
