"""Filter descriptors for querying schedulable records.

Descriptors only describe predicates. The Django query layer consumes them
through ``FilterDescriptor.to_q()``; other consumers can walk ``clauses``
directly.
"""
from dataclasses import dataclass
from operator import gt, lt
from typing import Any

from django.db.models import Q

from django_schedulable.config import SCHEDULED, ScheduleConfig
from django_schedulable.evaluator import field_value
from django_schedulable.exceptions import ScheduleConfigError


class _Now:
    """Bound-value source meaning 'the reference instant'."""

    def __repr__(self):
        return 'NOW'


NOW = _Now()

GT = 'gt'
LT = 'lt'
ISNULL = 'isnull'

COMPARATORS = {GT: gt, LT: lt}
OPERATORS = (GT, LT, ISNULL)


@dataclass(frozen=True)
class Comparison:
    """A single field comparison, e.g. ``published_at < NOW``."""

    field: str
    operator: str
    bound: Any = NOW

    def __post_init__(self):
        if self.operator not in OPERATORS:
            raise ScheduleConfigError(
                f"Unsupported operator '{self.operator}' for '{self.field}'; "
                f"expected one of: {', '.join(OPERATORS)}"
            )

    def resolve(self, now):
        """Bound value with NOW replaced by the reference instant."""
        return now if self.bound is NOW else self.bound

    def to_q(self, now) -> Q:
        return Q(**{f"{self.field}__{self.operator}": self.resolve(now)})

    def matches(self, record, now) -> bool:
        value = field_value(record, self.field)
        if self.operator == ISNULL:
            return (value is None) == bool(self.resolve(now))
        if value is None:
            return False
        return COMPARATORS[self.operator](value, self.resolve(now))


@dataclass(frozen=True)
class FilterDescriptor:
    """
    Named predicate over a record's timestamps.

    ``clauses`` is a conjunction: every clause must hold, and a clause holds
    when any of its comparisons does.
    """

    name: str
    clauses: tuple
    ordering: tuple = ()

    @property
    def fields(self) -> tuple:
        """Fields compared by this descriptor, in clause order."""
        seen = []
        for clause in self.clauses:
            for comparison in clause:
                if comparison.field not in seen:
                    seen.append(comparison.field)
        return tuple(seen)

    def to_q(self, now) -> Q:
        """Translate into a Django Q object bound to ``now``."""
        q = Q()
        for clause in self.clauses:
            alternatives = Q()
            for comparison in clause:
                alternatives |= comparison.to_q(now)
            q &= alternatives
        return q

    def matches(self, record, now) -> bool:
        """Evaluate the predicate against an in-memory record."""
        return all(
            any(comparison.matches(record, now) for comparison in clause)
            for clause in self.clauses
        )


def build_filters(config: ScheduleConfig) -> dict[str, FilterDescriptor]:
    """
    Build the filter descriptors for a schedule.

    Returns:
        Dict keyed by state name: 'scheduled', the start name and, when an
        end field is configured, the end name.
    """
    start, end = config.start_field, config.end_field

    filters = {
        SCHEDULED: FilterDescriptor(
            name=SCHEDULED,
            clauses=((Comparison(start, GT),),),
            ordering=(f"-{start}",),
        ),
    }

    if config.has_end:
        started_clauses = (
            (Comparison(start, LT),),
            (Comparison(end, ISNULL, True), Comparison(end, GT)),
        )
    else:
        started_clauses = ((Comparison(start, LT),),)

    filters[config.start_name] = FilterDescriptor(
        name=config.start_name,
        clauses=started_clauses,
        ordering=(f"-{start}",),
    )

    if config.has_end:
        filters[config.end_name] = FilterDescriptor(
            name=config.end_name,
            clauses=((Comparison(end, LT),),),
            ordering=(f"-{end}",),
        )

    return filters
