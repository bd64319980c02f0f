"""Exceptions for django-schedulable."""
from django.core.exceptions import ImproperlyConfigured


class SchedulableError(Exception):
    """Base exception for schedulable errors."""
    pass


class ScheduleConfigError(SchedulableError, ImproperlyConfigured):
    """Schedule configuration is invalid or a state is undefined for it."""
    pass


class UnknownStateError(SchedulableError, KeyError):
    """No filter descriptor exists under the requested name."""
    pass
