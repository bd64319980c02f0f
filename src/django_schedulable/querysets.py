"""QuerySet helpers for schedule-based queries."""
from django.db import models

from django_schedulable import conf
from django_schedulable.exceptions import ScheduleConfigError, UnknownStateError
from django_schedulable.filters import build_filters


class SchedulableQuerySet(models.QuerySet):
    """
    QuerySet for models carrying a ``schedule`` ScheduleConfig.

    Each method applies the matching filter descriptor and its default
    ordering (newest first on the compared field).

    Usage:
        class NewsItem(SchedulableMixin, models.Model):
            ...
            schedule = ScheduleConfig('published_at', 'expired_at')
            objects = SchedulableQuerySet.as_manager()

        NewsItem.objects.scheduled()      # published_at > now
        NewsItem.objects.started()        # published_at < now AND (expired_at IS NULL OR expired_at > now)
        NewsItem.objects.ended()          # expired_at < now
        NewsItem.objects.by_state('published', now=instant)
    """

    def _config(self):
        config = getattr(self.model, 'schedule', None)
        if config is None:
            raise ScheduleConfigError(
                f"{self.model.__name__} has no 'schedule' configuration"
            )
        return config

    def _apply(self, config, name, now):
        filters = build_filters(config)
        try:
            descriptor = filters[name]
        except KeyError:
            raise UnknownStateError(
                f"Unknown schedule state '{name}' for {self.model.__name__}; "
                f"expected one of: {', '.join(filters)}"
            ) from None
        if now is None:
            now = conf.now()
        return self.filter(descriptor.to_q(now)).order_by(*descriptor.ordering)

    def by_state(self, name, now=None):
        """
        Return records in the named state at ``now``.

        Args:
            name: A state name ('scheduled', the start name or the end name)
            now: Reference instant, defaults to SCHEDULABLE_CLOCK

        Raises:
            UnknownStateError: If no descriptor exists under ``name``
        """
        return self._apply(self._config(), name, now)

    def scheduled(self, now=None):
        """Return records whose start lies after ``now``."""
        return self.by_state('scheduled', now=now)

    def started(self, now=None):
        """Return records whose window is open at ``now``."""
        config = self._config()
        return self._apply(config, config.start_name, now)

    def ended(self, now=None):
        """Return records whose end lies before ``now``."""
        config = self._config()
        if not config.has_end:
            raise ScheduleConfigError(
                f"{self.model.__name__} schedule has no end field"
            )
        return self._apply(config, config.end_name, now)
