"""chainhash CLI package."""

from .app import DEMO_PAIRS, build_table, configure_logging, console_main, emit_success, main
from .commands import CLIContext, register_subcommands

__all__ = [
    "CLIContext",
    "DEMO_PAIRS",
    "build_table",
    "configure_logging",
    "console_main",
    "emit_success",
    "main",
    "register_subcommands",
]
