"""Runtime engine exports."""

from .display import TerminalDisplay
from .loop import RuntimeBootstrap, RuntimeEngine, run_countdown

__all__ = ["RuntimeBootstrap", "RuntimeEngine", "TerminalDisplay", "run_countdown"]
