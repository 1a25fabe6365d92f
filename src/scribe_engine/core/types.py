"""Shared type aliases for the engine."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

# Injected wherever a component needs "now" (task due dates, age from DOB)
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
