"""CLI command implementations for the membermesh application.

This package contains subcommands for the membermesh CLI, including:
- validate-settings: Validate a settings file
"""

from membermesh.cli.commands.validate import validate_settings_command

__all__ = ["validate_settings_command"]
