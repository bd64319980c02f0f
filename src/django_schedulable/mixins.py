"""Schedule mixin for Django models."""
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError

from django_schedulable.evaluator import ScheduleEvaluator
from django_schedulable.exceptions import ScheduleConfigError
from django_schedulable.validators import validate_schedule


class SchedulableMixin:
    """
    Mixin adding schedule states and validation to a Django model.

    The model declares its own timestamp fields and a ``schedule`` class
    attribute naming them:

        class Admin(SchedulableMixin, models.Model):
            authorized_on = models.DateTimeField(null=True, blank=True)
            unauthorized_on = models.DateTimeField(null=True, blank=True)

            schedule = schedulable('authorized_on', 'unauthorized_on', end_required=True)

        admin.is_started()      # authorized?
        admin.is_ended()        # unauthorized?
        admin.full_clean()      # raises ValidationError on unauthorized_on

    Place the mixin before models.Model so clean_fields() runs in the MRO.
    When a form leaves out the end field, schedule errors are reported as
    non-field errors.
    """

    schedule = None

    @property
    def schedule_evaluator(self) -> ScheduleEvaluator:
        if self.schedule is None:
            raise ScheduleConfigError(
                f"{self.__class__.__name__} has no 'schedule' configuration"
            )
        return ScheduleEvaluator(self.schedule)

    def is_scheduled(self, field=None, now=None) -> bool:
        """Check if ``field`` (default: start field) lies in the future."""
        return self.schedule_evaluator.is_scheduled(self, field=field, now=now)

    def is_started(self, now=None) -> bool:
        return self.schedule_evaluator.is_started(self, now=now)

    def is_ended(self, now=None) -> bool:
        return self.schedule_evaluator.is_ended(self, now=now)

    def schedule_state(self, now=None) -> dict:
        """All derived states keyed by name, e.g. {'scheduled': False, 'published': True}."""
        return self.schedule_evaluator.state(self, now=now)

    def clean_fields(self, exclude=None):
        """Validate schedule timestamps as part of full_clean()."""
        errors = {}
        try:
            super().clean_fields(exclude=exclude)
        except ValidationError as e:
            errors = e.update_error_dict(errors)

        config = self.schedule_evaluator.config
        # timestamps that failed field validation are not compared
        if config.start_field not in errors and config.end_field not in errors:
            found = validate_schedule(self, config)
            for field_name, messages in found.items():
                key = NON_FIELD_ERRORS if exclude and field_name in exclude else field_name
                errors.setdefault(key, []).extend(messages)

        if errors:
            raise ValidationError(errors)
