"""Shared type definitions for pawprint."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Output path of a representation; the key for per-rep timings
OutputPath: TypeAlias = str

# Name of a content filter (e.g. "markdown", "erb")
FilterName: TypeAlias = str

# Callable subscribed to an event bus
Handler: TypeAlias = Callable[..., Any]

# Source of monotonic timestamps in seconds
Clock: TypeAlias = Callable[[], float]
