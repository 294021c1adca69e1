"""Reading layout scripts from disk or from already-parsed JSON.

Every failure, from a missing file to an out-of-range step field, surfaces as
a single ConfigError whose details point at the offending place: a line and
column for broken JSON, a dotted path such as ``steps[3].count`` otherwise.
"""

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabinet_designer.application.config.schema import LayoutConfiguration
from cabinet_designer.domain import Cabinet, LayoutConstants
from cabinet_designer.domain.constants import DEFAULT_CONSTANTS


class ConfigError(Exception):
    """A layout script that cannot be used.

    Attributes:
        message: Summary shown to the user.
        error_type: One of file_not_found, permission_denied, file_read_error,
            json_parse or validation.
        path: Script file, None for scripts passed as dictionaries.
        details: One dict per problem; ``path``/``message``/``value`` for
            validation, ``line``/``column``/``message`` for JSON syntax.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """``("steps", 2, "add_rod", "section")`` -> ``steps[2].add_rod.section``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _problems(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _summary(problems: list[dict[str, Any]]) -> str:
    lines = [f"Layout script has {len(problems)} problem(s):"]
    for problem in problems:
        line = f"  - {problem['path']}: {problem['message']}"
        value = problem.get("value")
        # Whole objects are too noisy to echo back
        if value is not None and not isinstance(value, dict):
            line += f" (got: {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> LayoutConfiguration:
    try:
        config = LayoutConfiguration.model_validate(data)
    except PydanticValidationError as e:
        problems = _problems(e)
        raise ConfigError(_summary(problems), "validation", path, problems)

    # Overrides are only checked for consistency once combined with defaults
    try:
        config_to_constants(config)
    except ValueError as e:
        problems = [{"path": "constants", "message": str(e), "value": None}]
        raise ConfigError(_summary(problems), "validation", path, problems)
    return config


def _read_script(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"Layout script not found: {path}", "file_not_found", path)

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            f"Cannot read layout script {path}: permission denied", "permission_denied", path
        )
    except OSError as e:
        raise ConfigError(f"Cannot read layout script {path}: {e}", "file_read_error", path)

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Layout script {path} is not valid JSON: {e.msg} at line {e.lineno}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def load_config(path: Path) -> LayoutConfiguration:
    """Read and validate a layout script file.

    Raises:
        ConfigError: see ConfigError.error_type for the failure category.
    """
    return _validate(_read_script(path), path)


def load_config_from_dict(data: dict[str, Any]) -> LayoutConfiguration:
    """Validate a layout script that is already parsed, e.g. an API body."""
    return _validate(data)


def config_to_constants(config: LayoutConfiguration) -> LayoutConstants:
    """Engine constants: defaults, the script's overrides and its history size.

    Raises:
        ValueError: If the combined constants are inconsistent.
    """
    overrides = config.constants.model_dump(exclude_none=True)
    return replace(DEFAULT_CONSTANTS, max_history=config.history.max_size, **overrides)


def config_to_cabinet(config: LayoutConfiguration) -> Cabinet:
    dims = config.cabinet
    return Cabinet(
        width=dims.width,
        height=dims.height,
        depth=dims.depth,
        base=dims.base,
        constants=config_to_constants(config),
    )
