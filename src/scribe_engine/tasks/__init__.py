"""Follow-up task suggestion generation."""

from __future__ import annotations

from scribe_engine.tasks.generator import (
    TaskSuggestionGenerator,
    add_months,
    extract_timeframes,
    merge_task_suggestions,
)
from scribe_engine.tasks.triggers import (
    CLINICAL_TRIGGERS,
    REGIONAL_TRIGGERS,
    TaskTemplate,
    TaskTrigger,
)

__all__ = [
    "TaskSuggestionGenerator",
    "add_months",
    "extract_timeframes",
    "merge_task_suggestions",
    "CLINICAL_TRIGGERS",
    "REGIONAL_TRIGGERS",
    "TaskTemplate",
    "TaskTrigger",
]
