"""Tests for ScheduleEvaluator."""
import pytest
from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace
from django.utils import timezone
from freezegun import freeze_time

from django_schedulable.config import ScheduleConfig
from django_schedulable.evaluator import ScheduleEvaluator
from django_schedulable.exceptions import ScheduleConfigError
from tests.clock import FIXED_NOW

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=dt_timezone.utc)


def news_item(published_at=None, expired_at=None):
    return SimpleNamespace(published_at=published_at, expired_at=expired_at)


@pytest.fixture
def forever():
    """Evaluator with a start field only."""
    return ScheduleEvaluator(ScheduleConfig("published_at"))


@pytest.fixture
def windowed():
    """Evaluator with start and end fields."""
    return ScheduleEvaluator(ScheduleConfig("published_at", "expired_at"))


class TestIsScheduled:
    """Test suite for is_scheduled()."""

    def test_absent_start_is_not_scheduled(self, forever):
        """A record without a start value is not scheduled."""
        assert forever.is_scheduled(news_item(), now=NOW) is False

    def test_future_start_is_scheduled(self, forever):
        """A start after now is scheduled."""
        item = news_item(published_at=NOW + timedelta(minutes=10))
        assert forever.is_scheduled(item, now=NOW) is True

    def test_past_start_is_not_scheduled(self, forever):
        """A start before now is not scheduled."""
        item = news_item(published_at=NOW - timedelta(minutes=10))
        assert forever.is_scheduled(item, now=NOW) is False

    def test_start_equal_to_now_is_not_scheduled(self, forever):
        """The boundary instant is not in the future."""
        assert forever.is_scheduled(news_item(published_at=NOW), now=NOW) is False

    def test_end_field_can_be_queried(self, windowed):
        """is_scheduled() accepts the end field explicitly."""
        item = news_item(
            published_at=NOW - timedelta(minutes=10),
            expired_at=NOW + timedelta(minutes=5),
        )
        assert windowed.is_scheduled(item, field="expired_at", now=NOW) is True
        assert windowed.is_scheduled(item, now=NOW) is False

    def test_blank_string_is_absent(self, forever):
        """Blank form input counts as no value."""
        assert forever.is_scheduled(news_item(published_at=""), now=NOW) is False


class TestIsStarted:
    """Test suite for is_started()."""

    def test_forever_scenario(self, forever):
        """Future start is scheduled, moving it to the past starts it."""
        item = news_item(published_at=NOW + timedelta(minutes=10))
        assert forever.is_scheduled(item, now=NOW) is True
        assert forever.is_started(item, now=NOW) is False

        item.published_at = NOW - timedelta(minutes=10)
        assert forever.is_scheduled(item, now=NOW) is False
        assert forever.is_started(item, now=NOW) is True

    def test_absent_start_is_not_started(self, windowed):
        """No start means not started, even with an end in the future."""
        item = news_item(expired_at=NOW + timedelta(days=1))
        assert windowed.is_started(item, now=NOW) is False

    def test_start_equal_to_now_is_not_started(self, windowed):
        """The boundary instant is not yet started."""
        assert windowed.is_started(news_item(published_at=NOW), now=NOW) is False

    def test_open_ended_window_is_started(self, windowed):
        """A past start with no end is started."""
        item = news_item(published_at=NOW - timedelta(days=1))
        assert windowed.is_started(item, now=NOW) is True

    def test_window_scenario(self, windowed):
        """An open window closes once its end passes."""
        item = news_item(
            published_at=NOW - timedelta(minutes=10),
            expired_at=NOW + timedelta(minutes=5),
        )
        assert windowed.is_started(item, now=NOW) is True
        assert windowed.is_ended(item, now=NOW) is False

        item.expired_at = NOW - timedelta(minutes=5)
        assert windowed.is_started(item, now=NOW) is False
        assert windowed.is_ended(item, now=NOW) is True

    def test_end_equal_to_now_is_not_started(self, windowed):
        """End at exactly now no longer counts as open (end > now)."""
        item = news_item(published_at=NOW - timedelta(days=1), expired_at=NOW)
        assert windowed.is_started(item, now=NOW) is False

    def test_end_ignored_without_end_field(self, forever):
        """A start-only schedule never looks at other attributes."""
        item = news_item(
            published_at=NOW - timedelta(days=2),
            expired_at=NOW - timedelta(days=1),
        )
        assert forever.is_started(item, now=NOW) is True


class TestIsEnded:
    """Test suite for is_ended()."""

    def test_absent_end_is_not_ended(self, windowed):
        """No end value means not ended."""
        item = news_item(published_at=NOW - timedelta(days=1))
        assert windowed.is_ended(item, now=NOW) is False

    def test_end_equal_to_now_is_not_ended(self, windowed):
        """The boundary instant is not yet ended."""
        item = news_item(published_at=NOW - timedelta(days=1), expired_at=NOW)
        assert windowed.is_ended(item, now=NOW) is False

    def test_future_end_is_not_ended(self, windowed):
        """An end after now has not passed."""
        item = news_item(expired_at=NOW + timedelta(seconds=1))
        assert windowed.is_ended(item, now=NOW) is False

    def test_past_end_without_start_is_ended(self, windowed):
        """is_ended() depends on the end value only."""
        item = news_item(expired_at=NOW - timedelta(seconds=1))
        assert windowed.is_ended(item, now=NOW) is True

    def test_requires_end_field(self, forever):
        """Asking for the ended state without an end field is a config error."""
        with pytest.raises(ScheduleConfigError):
            forever.is_ended(news_item(), now=NOW)


class TestState:
    """Test suite for state()."""

    def test_state_keys_follow_field_names(self, windowed):
        """state() is keyed by the derived state names."""
        item = news_item(published_at=NOW - timedelta(hours=1))

        assert windowed.state(item, now=NOW) == {
            "scheduled": False,
            "published": True,
            "expired": False,
        }

    def test_state_without_end(self, forever):
        """A start-only schedule reports two states."""
        item = news_item(published_at=NOW + timedelta(hours=1))

        assert forever.state(item, now=NOW) == {
            "scheduled": True,
            "published": False,
        }

    def test_admin_window(self):
        """States are named after the configured fields."""
        evaluator = ScheduleEvaluator(
            ScheduleConfig("authorized_on", "unauthorized_on", end_required=True)
        )
        admin = SimpleNamespace(
            authorized_on=NOW - timedelta(days=2),
            unauthorized_on=NOW - timedelta(days=1),
        )

        assert evaluator.state(admin, now=NOW) == {
            "scheduled": False,
            "authorized": False,
            "unauthorized": True,
        }


class TestReferenceInstant:
    """Test suite for the default reference instant."""

    @freeze_time("2025-06-15 12:00:00")
    def test_defaults_to_timezone_now(self, forever):
        """Without now=, the Django clock is used."""
        item = news_item(published_at=timezone.now() + timedelta(minutes=10))
        assert forever.is_scheduled(item) is True

        item.published_at = timezone.now() - timedelta(minutes=10)
        assert forever.is_started(item) is True

    @freeze_time("2025-06-15 12:00:00")
    def test_boundary_with_frozen_clock(self, forever):
        """A start equal to the frozen now is neither scheduled nor started."""
        item = news_item(published_at=timezone.now())

        assert forever.is_scheduled(item) is False
        assert forever.is_started(item) is False

    def test_clock_setting(self, settings, forever):
        """SCHEDULABLE_CLOCK supplies now when none is passed."""
        settings.SCHEDULABLE_CLOCK = "tests.clock.fixed_now"
        item = news_item(published_at=FIXED_NOW - timedelta(seconds=1))

        assert forever.is_started(item) is True
        assert forever.is_started(item, now=FIXED_NOW - timedelta(days=1)) is False

    def test_clock_setting_accepts_callable(self, settings, forever):
        """SCHEDULABLE_CLOCK may be a callable instead of a dotted path."""
        settings.SCHEDULABLE_CLOCK = lambda: FIXED_NOW
        item = news_item(published_at=FIXED_NOW + timedelta(seconds=1))

        assert forever.is_scheduled(item) is True
