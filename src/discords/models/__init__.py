"""Pydantic models describing discovery results."""

from .discord import Discord, DiscordReport

__all__ = ["Discord", "DiscordReport"]
