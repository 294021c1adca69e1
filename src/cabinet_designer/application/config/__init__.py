"""Layout script schema and loading.

Public API:
    - LayoutConfiguration: Root layout script model
    - CabinetDimensionsConfig: Carcass dimensions
    - EngineConstantsConfig: Engine overrides
    - HistoryConfig: Undo/redo history settings
    - LayoutStep: Discriminated union of editing steps
    - load_config: Load a layout script from a JSON file
    - load_config_from_dict: Load a layout script from a dictionary
    - config_to_constants / config_to_cabinet: Convert to domain objects
    - ConfigError: Exception for configuration errors

Example:
    >>> from pathlib import Path
    >>> from cabinet_designer.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("wardrobe.json"))
    ...     print(f"{len(config.steps)} steps")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cabinet_designer.application.config.loader import (
    ConfigError,
    config_to_cabinet,
    config_to_constants,
    load_config,
    load_config_from_dict,
)
from cabinet_designer.application.config.schema import (
    SUPPORTED_VERSIONS,
    AddDividerStep,
    AddRodStep,
    AddRodsStep,
    AddShelfStep,
    AddStandStep,
    CabinetDimensionsConfig,
    DivideSectionStep,
    EngineConstantsConfig,
    HistoryConfig,
    LayoutConfiguration,
    LayoutStep,
    MoveDividerStep,
    MoveRodStep,
    RedoStep,
    RemoveDividerStep,
    RemoveRodStep,
    ResizeStep,
    UndoStep,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "AddDividerStep",
    "AddRodStep",
    "AddRodsStep",
    "AddShelfStep",
    "AddStandStep",
    "CabinetDimensionsConfig",
    "ConfigError",
    "DivideSectionStep",
    "EngineConstantsConfig",
    "HistoryConfig",
    "LayoutConfiguration",
    "LayoutStep",
    "MoveDividerStep",
    "MoveRodStep",
    "RedoStep",
    "RemoveDividerStep",
    "RemoveRodStep",
    "ResizeStep",
    "UndoStep",
    "config_to_cabinet",
    "config_to_constants",
    "load_config",
    "load_config_from_dict",
]
