"""Utility functions and helpers."""

from xctl.core.utils.prompt import PromptHandler, StatsUI
from xctl.core.utils.utils import format_bytes, generate_uuid

__all__ = ["format_bytes", "generate_uuid", "PromptHandler", "StatsUI"]
