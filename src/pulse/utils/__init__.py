"""Utility helpers for Pulse."""

from .time_provider import (
    DefaultTimeProvider,
    FakeTimeProvider,
    TimeProvider,
    get_default_time_provider,
    reset_default_time_provider,
    set_default_time_provider,
)

__all__ = [
    "DefaultTimeProvider",
    "FakeTimeProvider",
    "TimeProvider",
    "get_default_time_provider",
    "reset_default_time_provider",
    "set_default_time_provider",
]
