"""Unit tests for the deferred request model."""

from datetime import timedelta

import pytest

from modules.deadletter import DeferredRequest
from tests.support import T0


class TestDeferredRequest:
    """Tests for DeferredRequest validation and derived state."""

    def test_defaults(self):
        request = DeferredRequest(function="echo")

        assert request.body == b""
        assert request.query == ""
        assert request.headers == {}
        assert request.max_retries == 0
        assert request.restart_delay == timedelta(seconds=4)
        assert request.id is None
        assert request.retries == 0
        assert request.sent is False
        assert request.last_attempt_time.tzinfo is not None

    @pytest.mark.parametrize("function", ["", "   "])
    def test_function_is_required(self, function):
        with pytest.raises(ValueError, match="function is required"):
            DeferredRequest(function=function)

    def test_body_must_be_bytes(self):
        with pytest.raises(ValueError, match="body must be bytes"):
            DeferredRequest(function="echo", body="text")  # type: ignore[arg-type]

    def test_negative_max_retries_rejected(self):
        with pytest.raises(ValueError, match="max_retries"):
            DeferredRequest(function="echo", max_retries=-1)

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError, match="retries"):
            DeferredRequest(function="echo", retries=-1)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError, match="restart_delay"):
            DeferredRequest(function="echo", restart_delay=timedelta(seconds=-1))

    def test_delay_past_calendar_range_rejected(self):
        with pytest.raises(ValueError, match="restart_delay is too large"):
            DeferredRequest(
                function="echo",
                restart_delay=timedelta(seconds=300_000_000_000),
                last_attempt_time=T0,
            )

    def test_overflowing_deadline_is_never_due(self, deferred_request_factory):
        request = deferred_request_factory(delay_seconds=0)
        request.restart_delay = timedelta(days=999_999_999)

        assert request.is_due(T0 + timedelta(days=365)) is False

    def test_deadline_is_last_attempt_plus_delay(self, deferred_request_factory):
        request = deferred_request_factory(delay_seconds=4)

        assert request.deadline == T0 + timedelta(seconds=4)

    def test_is_due_at_and_after_deadline(self, deferred_request_factory):
        request = deferred_request_factory(delay_seconds=4)

        assert request.is_due(T0 + timedelta(seconds=3)) is False
        assert request.is_due(T0 + timedelta(seconds=4)) is True
        assert request.is_due(T0 + timedelta(seconds=10)) is True

    def test_zero_delay_is_due_immediately(self, deferred_request_factory):
        request = deferred_request_factory(delay_seconds=0)

        assert request.is_due(T0) is True

    def test_sent_request_is_never_due(self, deferred_request_factory):
        request = deferred_request_factory(delay_seconds=0)
        request.sent = True

        assert request.is_due(T0 + timedelta(hours=1)) is False

    def test_unbounded_request_is_never_exhausted(self, deferred_request_factory):
        request = deferred_request_factory(max_retries=0, retries=1000)

        assert request.is_exhausted is False

    def test_bounded_request_exhausted_at_budget(self, deferred_request_factory):
        request = deferred_request_factory(max_retries=2, retries=1)
        assert request.is_exhausted is False

        request.retries = 2
        assert request.is_exhausted is True

    def test_delay_seconds_truncates_to_whole_seconds(self):
        request = DeferredRequest(
            function="echo", restart_delay=timedelta(seconds=2, milliseconds=900)
        )

        assert request.delay_seconds == 2
