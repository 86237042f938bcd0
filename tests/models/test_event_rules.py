"""Tests for event time-window rules and visibility."""

from datetime import UTC, datetime, timedelta

import pytest

from eventgram.models.event import has_valid_duration
from eventgram.models.post import can_create_or_update_post

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)
HOUR = timedelta(hours=1)


class TestHasValidDuration:
    """Tests for has_valid_duration."""

    @pytest.mark.parametrize(
        "start,end",
        [(None, NOW + HOUR), (NOW, None), (None, None)],
    )
    def test_unset_bound_is_invalid(self, start, end) -> None:
        assert has_valid_duration(start, end, NOW) is False

    def test_start_after_end_is_invalid(self) -> None:
        assert has_valid_duration(NOW + 2 * HOUR, NOW + HOUR, NOW) is False

    def test_end_in_past_is_invalid(self) -> None:
        assert has_valid_duration(NOW - 2 * HOUR, NOW - HOUR, NOW) is False

    def test_end_equal_to_now_is_valid(self) -> None:
        assert has_valid_duration(NOW - HOUR, NOW, NOW) is True

    def test_longer_than_a_week_is_invalid(self) -> None:
        start = NOW + HOUR
        assert has_valid_duration(start, start + timedelta(hours=169), NOW) is False

    def test_exactly_a_week_is_valid(self) -> None:
        start = NOW + HOUR
        assert has_valid_duration(start, start + timedelta(hours=168), NOW) is True

    def test_starting_beyond_four_weeks_is_invalid(self) -> None:
        start = NOW + timedelta(hours=673)
        assert has_valid_duration(start, start + HOUR, NOW) is False

    def test_starting_at_four_weeks_is_valid(self) -> None:
        start = NOW + timedelta(hours=672)
        assert has_valid_duration(start, start + HOUR, NOW) is True

    def test_custom_limits(self) -> None:
        assert (
            has_valid_duration(
                NOW, NOW + 3 * HOUR, NOW, max_length=2 * HOUR
            )
            is False
        )
        assert (
            has_valid_duration(
                NOW + 2 * HOUR, NOW + 3 * HOUR, NOW, max_start_future=HOUR
            )
            is False
        )

    def test_naive_datetimes_are_treated_as_utc(self) -> None:
        naive_now = NOW.replace(tzinfo=None)
        assert has_valid_duration(naive_now - HOUR, naive_now + HOUR, NOW) is True


class TestIsActive:
    """Tests for Event.is_active."""

    def test_started_and_not_ended_is_active(self, make_event) -> None:
        event = make_event(start=NOW - HOUR, end=NOW + HOUR)
        assert event.is_active(NOW) is True

    def test_not_yet_started_is_inactive(self, make_event) -> None:
        event = make_event(start=NOW + timedelta(minutes=10), end=NOW + HOUR)
        assert event.is_active(NOW) is False

    def test_ended_is_inactive(self, make_event) -> None:
        event = make_event(start=NOW - 2 * HOUR, end=NOW - HOUR)
        assert event.is_active(NOW) is False

    def test_zero_length_event_is_never_active(self, make_event) -> None:
        event = make_event(start=NOW, end=NOW)
        assert event.is_active(NOW) is False

    def test_boundaries_are_exclusive(self, make_event) -> None:
        event = make_event(start=NOW - HOUR, end=NOW + HOUR)
        assert event.is_active(NOW - HOUR) is False
        assert event.is_active(NOW + HOUR) is False

    def test_overlong_event_is_inactive(self, make_event) -> None:
        event = make_event(start=NOW - HOUR, end=NOW + timedelta(hours=200))
        assert event.is_active(NOW) is False


class TestEventValidity:
    """Tests for Event.is_valid and visibility."""

    def test_complete_event_is_valid(self, make_event) -> None:
        assert make_event().is_valid(NOW) is True

    def test_missing_description_is_invalid(self, make_event) -> None:
        assert make_event(description="").is_valid(NOW) is False

    def test_missing_creator_is_invalid(self, make_event) -> None:
        assert make_event(creator="").is_valid(NOW) is False

    def test_is_ended(self, make_event) -> None:
        event = make_event(start=NOW - 2 * HOUR, end=NOW - HOUR)
        assert event.is_ended(NOW) is True
        assert make_event().is_ended(NOW) is False

    def test_public_event_visible_to_anyone(self, make_event) -> None:
        event = make_event(private=False)
        assert event.can_view(None) is True
        assert event.can_view("user-2") is True

    def test_private_event_visible_to_creator_only(self, make_event) -> None:
        event = make_event(private=True, creator="user-1")
        assert event.can_view("user-1") is True
        assert event.can_view("user-2") is False
        assert event.can_view(None) is False


class TestPostEligibility:
    """Tests for can_create_or_update_post."""

    def test_active_event_accepts_posts(self, make_event) -> None:
        assert can_create_or_update_post(make_event(), NOW) is True

    def test_missing_event_rejects_posts(self) -> None:
        assert can_create_or_update_post(None, NOW) is False

    def test_future_event_rejects_posts(self, make_event) -> None:
        event = make_event(start=NOW + HOUR, end=NOW + 2 * HOUR)
        assert can_create_or_update_post(event, NOW) is False

    def test_ended_event_rejects_posts(self, make_event) -> None:
        event = make_event(start=NOW - 2 * HOUR, end=NOW - HOUR)
        assert can_create_or_update_post(event, NOW) is False
