"""CLI command implementations for the cabinet designer.

This package contains subcommands for the cabinet-designer CLI, including:
- validate: Validate a layout script
"""

from cabinet_designer.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
