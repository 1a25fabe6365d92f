"""Follow-up task suggestions from transcript content.

Pure pattern-trigger engine: trigger phrase in, task templates out.  The
only time dependence is the due-date computation, which goes through the
injected clock, so repeated calls with a fixed clock are identical.
"""

from __future__ import annotations

import calendar
import hashlib
import logging
import re
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from scribe_engine.classification.classifier import split_sentences
from scribe_engine.core.config import TaskConfig
from scribe_engine.core.negation import first_affirmed
from scribe_engine.core.types import Clock, utc_now
from scribe_engine.models import (
    SessionRecord,
    TaskPriority,
    TaskSuggestion,
    TaskType,
    TranscriptionAnalysis,
)
from scribe_engine.tasks.triggers import (
    CLINICAL_TRIGGERS,
    FOLLOW_UP_CUES,
    MEDICATION_TRIGGER,
    REFERRAL_TRIGGER,
    REGIONAL_TRIGGERS,
    URGENT_TRIGGER,
    TaskTemplate,
    TaskTrigger,
)

log = logging.getLogger(__name__)

_NUMBER_WORDS = {
    "a": 1, "an": 1, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11,
    "twelve": 12,
}
_AMOUNT = r"\d+|" + "|".join(_NUMBER_WORDS)
_IN_TIMEFRAME = re.compile(
    rf"\b(?:in|within|after)\s+(?:a(?:nother)?\s+)?(?P<n>{_AMOUNT})[\s-]*(?P<unit>day|week|month)s?(?:'s)?\b",
    re.IGNORECASE,
)
_NEXT_TIMEFRAME = re.compile(r"\bnext\s+(?P<unit>week|month)\b", re.IGNORECASE)

_UNIT_DAYS = {"day": 1, "week": 7, "month": 31}


def _task_id(source: str, description: str) -> str:
    digest = hashlib.sha1(f"{source}\x00{description}".encode("utf-8")).hexdigest()
    return f"task-{digest[:12]}"


def add_months(moment: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month."""
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def extract_timeframes(content: str, max_days: Optional[int] = None) -> list[tuple[int, str]]:
    """Return ``(amount, unit)`` follow-up timeframes, in order of mention.

    Only sentences that talk about a follow-up ("come back in 2 weeks",
    "review next month") count, so symptom durations such as "cough for
    2 weeks" are not mistaken for appointments.
    Timeframes longer than ``max_days`` (a month counted as 31 days) are
    dropped.
    """
    found: list[tuple[int, str]] = []
    for sentence in split_sentences(content, min_chars=0):
        if not FOLLOW_UP_CUES.search(sentence):
            continue
        for match in _IN_TIMEFRAME.finditer(sentence):
            raw = match.group("n").lower()
            amount = int(raw) if raw.isdigit() else _NUMBER_WORDS[raw]
            unit = match.group("unit").lower()
            if max_days is not None and amount * _UNIT_DAYS[unit] > max_days:
                log.debug("Ignoring follow-up timeframe of %d %s(s)", amount, unit)
                continue
            item = (amount, unit)
            if amount > 0 and item not in found:
                found.append(item)
        for match in _NEXT_TIMEFRAME.finditer(sentence):
            item = (1, match.group("unit").lower())
            if item not in found:
                found.append(item)
    return found


def merge_task_suggestions(*task_lists: Iterable[TaskSuggestion]) -> list[TaskSuggestion]:
    """Concatenate task lists, keeping the first task for each description.

    The key is the exact, case-sensitive description string.
    """
    merged: list[TaskSuggestion] = []
    seen: set[str] = set()
    for tasks in task_lists:
        for task in tasks:
            if task.description in seen:
                continue
            seen.add(task.description)
            merged.append(task)
    return merged


class _Collector:
    """Accumulates templates for one call, unique by description."""

    def __init__(self, source: str, created_at: datetime, default_due: datetime) -> None:
        self._source = source
        self._created_at = created_at
        self._default_due = default_due
        self.tasks: list[TaskSuggestion] = []
        self._seen: set[str] = set()

    def add(self, template: TaskTemplate, due_date: Optional[datetime] = None) -> None:
        if template.description in self._seen:
            return
        self._seen.add(template.description)
        self.tasks.append(
            TaskSuggestion(
                id=_task_id(self._source, template.description),
                type=template.type,
                description=template.description,
                priority=template.priority,
                due_date=due_date or self._default_due,
                created_at=self._created_at,
            )
        )


def _matched_patterns(trigger: TaskTrigger, content: str) -> list[str]:
    return [p for p in trigger.patterns if first_affirmed(p, content)]


class TaskSuggestionGenerator:
    """Suggests follow-up tasks from transcript content."""

    def __init__(self, config: Optional[TaskConfig] = None, clock: Clock = utc_now) -> None:
        self._config = config or TaskConfig()
        self._clock = clock

    def analyze_transcription(self, content: str) -> list[TaskSuggestion]:
        """Clinical, follow-up, medication and referral tasks for ``content``."""
        return self.analyze(content).suggested_tasks

    def regional_suggestions(self, content: str, region: Optional[str] = None) -> list[TaskSuggestion]:
        """Region-specific tasks (medical aid, public referral, screening)."""
        region = (region or self._config.region).lower()
        triggers = REGIONAL_TRIGGERS.get(region)
        if triggers is None:
            log.debug("No regional task triggers for region %r", region)
            return []
        collector = self._collector(f"regional:{region}")
        if content and content.strip():
            for trigger in triggers:
                if _matched_patterns(trigger, content):
                    for template in trigger.tasks:
                        collector.add(template)
        return collector.tasks

    def analyze(self, content: str) -> TranscriptionAnalysis:
        """Tasks plus the condition groups mentioned and an overall urgency."""
        collector = self._collector("transcript")
        if not content or not content.strip():
            return TranscriptionAnalysis()

        urgency = TaskPriority.LOW
        conditions: list[str] = []

        if _matched_patterns(URGENT_TRIGGER, content):
            urgency = TaskPriority.URGENT
            for template in URGENT_TRIGGER.tasks:
                collector.add(template)

        for trigger in CLINICAL_TRIGGERS:
            matched = _matched_patterns(trigger, content)
            if not matched:
                continue
            if trigger.condition and trigger.condition not in conditions:
                conditions.append(trigger.condition)
            for template in trigger.tasks:
                collector.add(template)
            if len(matched) > 2 and urgency is TaskPriority.LOW:
                urgency = TaskPriority.MEDIUM

        timeframes = extract_timeframes(content, self._config.max_follow_up_days)
        for amount, unit in timeframes:
            plural = "s" if amount != 1 else ""
            template = TaskTemplate(
                type=TaskType.FOLLOW_UP,
                description=f"Follow-up appointment in {amount} {unit}{plural}",
                priority=TaskPriority.MEDIUM if unit == "month" else TaskPriority.HIGH,
            )
            collector.add(template, due_date=self._due_in(amount, unit))
        if timeframes and urgency is TaskPriority.LOW:
            urgency = TaskPriority.MEDIUM

        for trigger in (MEDICATION_TRIGGER, REFERRAL_TRIGGER):
            if _matched_patterns(trigger, content):
                for template in trigger.tasks:
                    collector.add(template)

        if urgency is TaskPriority.LOW and len(collector.tasks) > 2:
            urgency = TaskPriority.MEDIUM

        log.debug(
            "Suggested %d task(s), %d condition group(s), urgency=%s",
            len(collector.tasks), len(conditions), urgency.value,
        )
        return TranscriptionAnalysis(
            suggested_tasks=collector.tasks,
            extracted_conditions=conditions,
            urgency=urgency,
        )

    def suggestions_for_sessions(self, sessions: Sequence[SessionRecord]) -> list[TaskSuggestion]:
        """Tasks for every session, stamped with provenance and merged.

        Sessions are processed in the order given; when two sessions yield
        the same description, the earlier session's task is kept.
        """
        per_session: list[list[TaskSuggestion]] = []
        for session in sessions:
            tasks = self.analyze_transcription(session.content) + self.regional_suggestions(session.content)
            per_session.append([
                t.model_copy(update={
                    "id": _task_id(session.id, t.description),
                    "session_id": session.id,
                    "session_title": session.title or None,
                })
                for t in tasks
            ])
        return merge_task_suggestions(*per_session)

    def _collector(self, source: str) -> _Collector:
        now = self._clock()
        return _Collector(source, now, now + timedelta(days=self._config.default_due_days))

    def _due_in(self, amount: int, unit: str) -> Optional[datetime]:
        now = self._clock()
        try:
            if unit == "day":
                return now + timedelta(days=amount)
            if unit == "week":
                return now + timedelta(weeks=amount)
            return add_months(now, amount)
        except (OverflowError, ValueError):
            log.warning("Follow-up in %d %s(s) is out of range, using default due date", amount, unit)
            return None
