"""Prompt and UI utilities."""

from xctl.core.utils.prompt.prompt import PromptHandler, console
from xctl.core.utils.prompt.stats_ui import StatsUI

__all__ = ["console", "PromptHandler", "StatsUI"]
