"""django-schedulable: Start/end schedule windows for Django models."""

__version__ = "0.1.0"

__all__ = [
    # Config
    "ScheduleConfig",
    "schedulable",
    # Evaluation
    "ScheduleEvaluator",
    # Validation
    "schedule_errors",
    "validate_schedule",
    # Filters
    "FilterDescriptor",
    "Comparison",
    "NOW",
    "build_filters",
    # Django integration
    "SchedulableMixin",
    "SchedulableQuerySet",
    # Exceptions
    "SchedulableError",
    "ScheduleConfigError",
    "UnknownStateError",
]


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("ScheduleConfig", "schedulable"):
        from django_schedulable import config
        return getattr(config, name)
    if name == "ScheduleEvaluator":
        from django_schedulable import evaluator
        return getattr(evaluator, name)
    if name in ("schedule_errors", "validate_schedule"):
        from django_schedulable import validators
        return getattr(validators, name)
    if name in ("FilterDescriptor", "Comparison", "NOW", "build_filters"):
        from django_schedulable import filters
        return getattr(filters, name)
    if name == "SchedulableMixin":
        from django_schedulable import mixins
        return getattr(mixins, name)
    if name == "SchedulableQuerySet":
        from django_schedulable import querysets
        return getattr(querysets, name)
    if name in ("SchedulableError", "ScheduleConfigError", "UnknownStateError"):
        from django_schedulable import exceptions
        return getattr(exceptions, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
