"""Temporal state evaluation for schedulable records."""
from typing import Any, Optional

from django_schedulable import conf
from django_schedulable.config import SCHEDULED, ScheduleConfig
from django_schedulable.exceptions import ScheduleConfigError


def field_value(record: Any, field_name: str):
    """Read a timestamp from a record, mapping blank values to None."""
    value = getattr(record, field_name)
    if value is None or value == '':
        return None
    return value


class ScheduleEvaluator:
    """
    Answers temporal-state questions about a record at a reference instant.

    Comparisons are strict throughout: a timestamp equal to ``now`` has not
    been crossed yet, so it is neither scheduled nor started nor ended.

    Usage:
        evaluator = ScheduleEvaluator(ScheduleConfig('published_at', 'expired_at'))
        evaluator.is_started(news_item)            # against SCHEDULABLE_CLOCK
        evaluator.is_ended(news_item, now=instant)  # against an explicit instant
    """

    def __init__(self, config: ScheduleConfig):
        self.config = config

    def _resolve_now(self, now):
        return conf.now() if now is None else now

    def is_scheduled(self, record: Any, field: Optional[str] = None, now=None) -> bool:
        """True if the field's value lies strictly after ``now``.

        ``field`` defaults to the start field; pass the end field to ask
        whether the window's close is still ahead.
        """
        value = field_value(record, field or self.config.start_field)
        if value is None:
            return False
        return value > self._resolve_now(now)

    def is_started(self, record: Any, now=None) -> bool:
        """True if the window has opened and not yet closed."""
        start = field_value(record, self.config.start_field)
        if start is None:
            return False

        now = self._resolve_now(now)
        if not start < now:
            return False
        if not self.config.has_end:
            return True

        end = field_value(record, self.config.end_field)
        return end is None or end > now

    def is_ended(self, record: Any, now=None) -> bool:
        """True if the end value lies strictly before ``now``."""
        if not self.config.has_end:
            raise ScheduleConfigError(
                f"Schedule on '{self.config.start_field}' has no end field"
            )
        end = field_value(record, self.config.end_field)
        if end is None:
            return False
        return end < self._resolve_now(now)

    def state(self, record: Any, now=None) -> dict:
        """
        Every derived state of the record, keyed by state name.

        Returns:
            e.g. {'scheduled': False, 'published': True, 'expired': False}
        """
        now = self._resolve_now(now)
        states = {
            SCHEDULED: self.is_scheduled(record, now=now),
            self.config.start_name: self.is_started(record, now=now),
        }
        if self.config.has_end:
            states[self.config.end_name] = self.is_ended(record, now=now)
        return states
