"""Tests for the decoding error hierarchy."""

import copy
import pickle

import pytest

from ruuvi_decoders.errors import (
    AmbiguousAdvertisementError,
    DecodeError,
    InvalidEventError,
    InvalidHexError,
    InvalidLengthError,
    NotFoundError,
    TruncatedAdvertisementError,
    UnsupportedFormatError,
)

ERRORS = [
    InvalidHexError("zz"),
    InvalidLengthError(24, 23),
    InvalidLengthError(message="Empty data"),
    UnsupportedFormatError(0x63),
    NotFoundError(0x0499),
    TruncatedAdvertisementError(9, 7),
    AmbiguousAdvertisementError(2),
    InvalidEventError("Event has no advertisement data"),
]


class TestMessages:

    def test_invalid_hex(self):
        assert str(InvalidHexError("zz")) == "Invalid hex string: 'zz'"

    def test_invalid_length(self):
        assert str(InvalidLengthError(24, 23)) == "Invalid data length: Expected 24 bytes, got 23"

    def test_invalid_length_custom_message(self):
        assert str(InvalidLengthError(message="Empty data")) == "Invalid data length: Empty data"

    def test_unsupported_format(self):
        assert str(UnsupportedFormatError(0x63)) == "Unsupported data format: 0x63"

    def test_not_found(self):
        assert str(NotFoundError(0x0499)) == "No manufacturer data for company 0x0499"

    def test_truncated(self):
        error = TruncatedAdvertisementError(9, 7)
        assert str(error) == "Invalid data length: AD structure ends at byte 9, advertisement has 7"
        assert error.expected == 9
        assert error.actual == 7

    def test_ambiguous(self):
        assert str(AmbiguousAdvertisementError(2)) == "Found 2 Ruuvi manufacturer data structures"


class TestSerialization:
    """Errors cross process boundaries unchanged."""

    @pytest.mark.parametrize("error", ERRORS, ids=lambda e: type(e).__name__)
    def test_pickle(self, error):
        restored = pickle.loads(pickle.dumps(error))
        assert type(restored) is type(error)
        assert str(restored) == str(error)
        assert restored.args == error.args

    @pytest.mark.parametrize("error", ERRORS, ids=lambda e: type(e).__name__)
    def test_copy(self, error):
        assert str(copy.copy(error)) == str(error)

    def test_pickle_keeps_fields(self):
        restored = pickle.loads(pickle.dumps(UnsupportedFormatError(0x63)))
        assert restored.data_format == 0x63
        restored = pickle.loads(pickle.dumps(TruncatedAdvertisementError(9, 7)))
        assert (restored.expected, restored.actual) == (9, 7)


class TestHierarchy:

    @pytest.mark.parametrize("error", ERRORS, ids=lambda e: type(e).__name__)
    def test_all_are_decode_errors(self, error):
        assert isinstance(error, DecodeError)

    def test_truncated_is_length_error(self):
        assert isinstance(TruncatedAdvertisementError(9, 7), InvalidLengthError)
