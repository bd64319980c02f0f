"""Schedule configuration and display-name derivation."""
import re
from dataclasses import dataclass, field
from typing import Optional

from django_schedulable.conf import get_default_start_field
from django_schedulable.exceptions import ScheduleConfigError

# Trailing timestamp suffix: published_at -> published, authorized_on -> authorized
SUFFIX_PATTERN = re.compile(r'_(at|on)$')

SCHEDULED = 'scheduled'


def display_name(field_name: str) -> str:
    """
    Human-readable name for a timestamp field.

    Examples:
        >>> display_name('published_at')
        'published'
        >>> display_name('unauthorized_on')
        'unauthorized'
        >>> display_name('starts')
        'starts'
    """
    return SUFFIX_PATTERN.sub('', field_name)


def gerund(name: str) -> str:
    """
    Turn a display name into a gerund for messages.

    Past participles and third-person forms are reduced to their stem first.

    Examples:
        >>> gerund('published')
        'publishing'
        >>> gerund('authorized')
        'authorizing'
        >>> gerund('opens')
        'opening'
        >>> gerund('closes')
        'closing'
    """
    if name.endswith('ing'):
        return name
    if name.endswith('ed') and len(name) > 3:
        return f"{name[:-2]}ing"

    stem = name
    if stem.endswith('s') and not stem.endswith('ss'):
        stem = stem[:-1]
    if stem.endswith('e') and not stem.endswith('ee'):
        stem = stem[:-1]
    return f"{stem}ing"


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Start/end timestamp configuration for a schedulable record type.

    Built once per record type and shared by the evaluator, the validator
    and the filter descriptors.

    Usage:
        class NewsItem(SchedulableMixin, models.Model):
            published_at = models.DateTimeField(null=True, blank=True)
            expired_at = models.DateTimeField(null=True, blank=True)

            schedule = ScheduleConfig('published_at', 'expired_at')
    """

    start_field: str
    end_field: Optional[str] = None
    end_required: bool = False

    start_name: str = field(init=False, repr=False)
    end_name: Optional[str] = field(init=False, repr=False)
    start_gerund: str = field(init=False, repr=False)

    def __post_init__(self):
        if not self.start_field:
            raise ScheduleConfigError("A schedule requires a start field")
        if self.end_required and not self.end_field:
            raise ScheduleConfigError(
                f"end_required is set for '{self.start_field}' but no end field is configured"
            )
        if self.end_field and self.end_field == self.start_field:
            raise ScheduleConfigError(
                f"Start and end fields must differ (both are '{self.start_field}')"
            )

        # frozen dataclass: derived names go through object.__setattr__
        start_name = display_name(self.start_field)
        end_name = display_name(self.end_field) if self.end_field else None
        object.__setattr__(self, 'start_name', start_name)
        object.__setattr__(self, 'end_name', end_name)
        object.__setattr__(self, 'start_gerund', gerund(start_name))

        names = [n for n in (SCHEDULED, start_name, end_name) if n]
        if len(set(names)) != len(names):
            raise ScheduleConfigError(
                f"Derived state names collide: {', '.join(names)}. "
                "Rename the timestamp fields."
            )

    @property
    def has_end(self) -> bool:
        """Whether an end field is configured."""
        return bool(self.end_field)

    @property
    def state_names(self) -> tuple:
        """Names of every derived state, in descriptor order."""
        if self.has_end:
            return (SCHEDULED, self.start_name, self.end_name)
        return (SCHEDULED, self.start_name)


def schedulable(*fields, start=None, end=None, end_required=False) -> ScheduleConfig:
    """
    Build a ScheduleConfig from positional and keyword options.

    Positional fields fill ``start`` then ``end`` when those keywords are not
    given. The start field defaults to SCHEDULABLE_DEFAULT_START_FIELD.

    Examples:
        schedulable()                                   # published_at only
        schedulable(end='expired_at')                   # published_at .. expired_at
        schedulable('authorized_on', 'unauthorized_on', end_required=True)
    """
    remaining = list(fields)
    if not start and remaining:
        start = remaining.pop(0)
    if not end and remaining:
        end = remaining.pop(0)
    if remaining:
        raise ScheduleConfigError(
            f"Unexpected schedule fields: {', '.join(map(str, remaining))}"
        )

    return ScheduleConfig(
        start_field=start or get_default_start_field(),
        end_field=end or None,
        end_required=end_required,
    )
