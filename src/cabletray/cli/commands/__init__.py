"""CLI command implementations for the cabletray application.

This package contains subcommands for the cabletray CLI, including:
- validate: Validate a snapshot file
"""

from cabletray.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
