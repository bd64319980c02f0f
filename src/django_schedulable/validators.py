"""Structural validation of schedule timestamps."""
import logging
from typing import Any

from django.utils.text import capfirst

from django_schedulable.config import ScheduleConfig
from django_schedulable.evaluator import field_value

logger = logging.getLogger(__name__)


def late_end_message(config: ScheduleConfig) -> str:
    return f"{capfirst(config.end_name)} needs to come later than the {config.start_gerund} date"


def missing_start_message(config: ScheduleConfig) -> str:
    return f"{capfirst(config.end_name)} not allowed without a {config.start_gerund} date"


def missing_end_message(config: ScheduleConfig) -> str:
    return f"{capfirst(config.end_name)} required with a {config.start_name} date"


def schedule_errors(record: Any, config: ScheduleConfig) -> dict[str, list[str]]:
    """
    Collect schedule violations for a record.

    Rules (all reported on the end field):
    - end present and start present: end must be strictly later than start
    - end present: start must be present
    - end_required: a present start needs a present end

    The first two are mutually exclusive. The required-end rule is checked
    independently of them.

    Args:
        record: Object exposing the configured timestamp attributes
        config: The record type's ScheduleConfig

    Returns:
        Dict of field name -> list of messages, empty when the record is valid
    """
    errors: dict[str, list[str]] = {}
    if not config.has_end:
        return errors

    start = field_value(record, config.start_field)
    end = field_value(record, config.end_field)
    messages = []

    if end is not None and start is not None and end <= start:
        messages.append(late_end_message(config))
    elif end is not None and start is None:
        messages.append(missing_start_message(config))

    if config.end_required and end is None and start is not None:
        messages.append(missing_end_message(config))

    if messages:
        errors[config.end_field] = messages
    return errors


def validate_schedule(record: Any, config: ScheduleConfig, errors=None) -> dict[str, list[str]]:
    """
    Validate a record and report violations into an error sink.

    The sink is either an object with ``add_error(field, message)`` (a Django
    Form, for instance) or a dict of lists, the shape ValidationError accepts.
    Nothing is raised here; hosts decide how to surface the errors.

    Returns:
        The errors found by this pass (see schedule_errors)
    """
    found = schedule_errors(record, config)
    if not found:
        return found

    logger.debug(f"Schedule validation failed for {record!r}: {found}")

    if errors is None:
        return found

    for field_name, messages in found.items():
        for message in messages:
            if hasattr(errors, 'add_error'):
                errors.add_error(field_name, message)
            else:
                errors.setdefault(field_name, []).append(message)
    return found
