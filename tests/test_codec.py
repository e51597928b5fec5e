"""Tests for the cache envelope codec."""

import io

import orjson
import pytest

from cachefolio.codec import decode_record, encode_record, make_record
from cachefolio.exceptions import EnvelopeDecodeError, InvalidArgumentError


class TestMakeRecord:
    """Test record construction."""

    def test_stamped_with_clock(self, clock):
        """Test that records carry the current time."""
        record = make_record("v", 30)
        assert record == {"stored_at": clock.now, "ttl": 30, "value": "v"}

    def test_explicit_timestamp(self):
        assert make_record(1, None, stored_at=5)["stored_at"] == 5


class TestEncodeDecode:
    """Test envelope serialization."""

    def test_preserves_nested_payload(self):
        """Test that composite values survive encoding."""
        value = {
            "flag": True,
            "count": 3,
            "ratio": 0.25,
            "name": "ada",
            "missing": None,
            "items": [1, [2, 3], {"deep": False}],
        }
        record = make_record(value, 60, stored_at=100)
        assert decode_record(encode_record(record)) == record

    def test_tuples_become_lists(self):
        record = make_record((1, 2), None, stored_at=1)
        assert decode_record(encode_record(record))["value"] == [1, 2]

    @pytest.mark.parametrize("value", [{1: "a"}, [{"ok": {(1, 2): "b"}}]])
    def test_non_string_keys_rejected(self, value):
        """Test that dict keys which would come back as strings are refused."""
        with pytest.raises(InvalidArgumentError, match="non-string key"):
            encode_record(make_record(value, None, stored_at=1))

    @pytest.mark.parametrize(
        "value", [float("inf"), float("-inf"), float("nan"), {"x": [1.0, float("nan")]}]
    )
    def test_non_finite_floats_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="not serializable"):
            encode_record(make_record(value, None, stored_at=1))

    def test_integer_beyond_64_bits_rejected(self):
        with pytest.raises(InvalidArgumentError):
            encode_record(make_record(2**64, None, stored_at=1))

    def test_file_handle_rejected(self):
        """Test that OS handles cannot be stored."""
        with pytest.raises(InvalidArgumentError, match="not serializable"):
            encode_record(make_record(io.BytesIO(b"x"), None, stored_at=1))

    def test_arbitrary_object_rejected(self):
        with pytest.raises(InvalidArgumentError):
            encode_record(make_record(object(), None, stored_at=1))


class TestDecodeFailures:
    """Test that malformed envelopes raise EnvelopeDecodeError."""

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"not json",
            b"\xff\xfe",
            b"[1, 2, 3]",
            b'"text"',
        ],
    )
    def test_garbage(self, data):
        with pytest.raises(EnvelopeDecodeError):
            decode_record(data)

    @pytest.mark.parametrize("field", ["stored_at", "ttl", "value"])
    def test_missing_field(self, field):
        """Test that each envelope field is required."""
        record = {"stored_at": 1, "ttl": None, "value": 1}
        del record[field]
        with pytest.raises(EnvelopeDecodeError, match=field):
            decode_record(orjson.dumps(record))

    def test_bad_field_types(self):
        with pytest.raises(EnvelopeDecodeError):
            decode_record(orjson.dumps({"stored_at": "now", "ttl": None, "value": 1}))
        with pytest.raises(EnvelopeDecodeError):
            decode_record(orjson.dumps({"stored_at": 1, "ttl": "1", "value": 1}))
