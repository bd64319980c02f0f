"""Configuration helpers for django-schedulable.

All settings can be overridden in your Django settings.py.

Example:
    # settings.py
    SCHEDULABLE_DEFAULT_START_FIELD = 'starts_at'
    SCHEDULABLE_CLOCK = 'myproject.clock.now'
"""

from django.conf import settings
from django.utils.module_loading import import_string


DEFAULT_START_FIELD = 'published_at'
DEFAULT_CLOCK = 'django.utils.timezone.now'


def get_setting(name: str, default=None):
    """Get a setting with SCHEDULABLE_ prefix."""
    return getattr(settings, f"SCHEDULABLE_{name}", default)


def get_default_start_field() -> str:
    """Start field used when a schedule is declared without one."""
    return get_setting('DEFAULT_START_FIELD', DEFAULT_START_FIELD)


def get_clock():
    """Return the callable that supplies the reference instant."""
    clock = get_setting('CLOCK', DEFAULT_CLOCK)
    if isinstance(clock, str):
        return import_string(clock)
    return clock


def now():
    """Current reference instant according to SCHEDULABLE_CLOCK."""
    return get_clock()()


# =============================================================================
# DEFAULT SETTINGS REFERENCE
# =============================================================================

# SCHEDULABLE_DEFAULT_START_FIELD = 'published_at'  # start field for bare schedulable()
# SCHEDULABLE_CLOCK = 'django.utils.timezone.now'  # dotted path or callable
