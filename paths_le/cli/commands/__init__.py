"""Sub-command modules; each exposes ``register_commands(subparsers)``."""

from . import analyze, extract, postprocess, validate

COMMAND_MODULES = (extract, validate, analyze, postprocess)

__all__ = ["COMMAND_MODULES", "analyze", "extract", "postprocess", "validate"]
