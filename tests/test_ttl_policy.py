"""Tests for TTL resolution and expiry checks."""

from datetime import datetime, timedelta, timezone

import pytest

from cachefolio.exceptions import InvalidArgumentError
from cachefolio.policy.ttl import (
    expires_at,
    get_ttl_remaining,
    is_expired,
    resolve_ttl,
)


class TestResolveTTL:
    """Test TTL normalization."""

    def test_none_never_expires(self):
        """Test that None means no expiry."""
        assert resolve_ttl(None) == (None, False)

    def test_integer_seconds(self):
        assert resolve_ttl(60) == (60, False)

    def test_zero_is_not_rejected(self):
        """Test that zero TTL is accepted (expires on read)."""
        assert resolve_ttl(0) == (0, False)

    def test_negative_is_expired(self):
        """Test that a negative TTL signals immediate expiry."""
        assert resolve_ttl(-5) == (-5, True)

    def test_float_truncated(self):
        assert resolve_ttl(2.9) == (2, False)

    def test_timedelta(self):
        """Test relative durations."""
        assert resolve_ttl(timedelta(minutes=5)) == (300, False)

    def test_negative_timedelta_expired(self):
        seconds, expired = resolve_ttl(timedelta(seconds=-30))
        assert seconds == -30
        assert expired is True

    def test_datetime_in_future(self, clock):
        """Test absolute expiry instants are converted to seconds-from-now."""
        target = datetime.fromtimestamp(clock.now + 120, tz=timezone.utc)
        assert resolve_ttl(target) == (120, False)

    def test_datetime_in_past(self, clock):
        target = datetime.fromtimestamp(clock.now - 10, tz=timezone.utc)
        assert resolve_ttl(target) == (-10, True)

    @pytest.mark.parametrize(
        "ttl", ["60", True, [60], object(), float("inf"), float("-inf"), float("nan")]
    )
    def test_invalid_types_rejected(self, ttl):
        """Test that non-numeric, non-duration or non-finite input raises."""
        with pytest.raises(InvalidArgumentError):
            resolve_ttl(ttl)


class TestExpiry:
    """Test expiry computations."""

    def test_expires_at_absolute(self):
        assert expires_at(60, now=1000) == 1060

    def test_expires_at_none(self):
        assert expires_at(None, now=1000) is None

    def test_expires_at_uses_clock(self, clock):
        assert expires_at(10) == clock.now + 10

    def test_none_ttl_never_expires(self):
        assert is_expired(0, None, now=10**12) is False

    def test_zero_ttl_expired_immediately(self):
        """Test that ttl=0 is expired even at the moment of writing."""
        assert is_expired(1000, 0, now=1000) is True

    def test_within_window(self):
        assert is_expired(1000, 60, now=1060) is False

    def test_after_window(self):
        assert is_expired(1000, 60, now=1061) is True

    def test_remaining(self):
        assert get_ttl_remaining(1000, 60, now=1030) == 30

    def test_remaining_never_negative(self):
        assert get_ttl_remaining(1000, 60, now=5000) == 0

    def test_remaining_none(self):
        assert get_ttl_remaining(1000, None, now=5000) is None
