"""Errors raised while decoding Ruuvi BLE data.

Each error keeps its structured arguments in `args` and builds the message
in `__str__`, so instances survive pickling (process pools) and copying.
"""


class DecodeError(Exception):
    """Base class for all decoding errors."""

    pass


class InvalidHexError(DecodeError):
    """Input text is not valid hex."""

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Invalid hex string: {self.text!r}"


class InvalidLengthError(DecodeError):
    """A buffer is shorter or longer than decoding requires."""

    def __init__(
        self,
        expected: int | None = None,
        actual: int | None = None,
        message: str | None = None,
    ):
        super().__init__(expected, actual, message)
        self.expected = expected
        self.actual = actual
        self.message = message

    def __str__(self) -> str:
        message = self.message
        if message is None:
            message = f"Expected {self.expected} bytes, got {self.actual}"
        return f"Invalid data length: {message}"


class UnsupportedFormatError(DecodeError):
    """Payload carries a data format this package does not decode."""

    def __init__(self, data_format: int):
        super().__init__(data_format)
        self.data_format = data_format

    def __str__(self) -> str:
        return f"Unsupported data format: 0x{self.data_format:02X}"


class ExtractError(DecodeError):
    """Ruuvi payload could not be extracted from an advertisement."""

    pass


class NotFoundError(ExtractError):
    """No Ruuvi manufacturer specific data in the advertisement."""

    def __init__(self, company_id: int):
        super().__init__(company_id)
        self.company_id = company_id

    def __str__(self) -> str:
        return f"No manufacturer data for company 0x{self.company_id:04X}"


class TruncatedAdvertisementError(ExtractError, InvalidLengthError):
    """An AD structure declares more bytes than the advertisement holds."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            expected,
            actual,
            f"AD structure ends at byte {expected}, advertisement has {actual}",
        )
        self.args = (expected, actual)


class AmbiguousAdvertisementError(ExtractError):
    """More than one AD structure carries the Ruuvi company identifier."""

    def __init__(self, count: int):
        super().__init__(count)
        self.count = count

    def __str__(self) -> str:
        return f"Found {self.count} Ruuvi manufacturer data structures"


class InvalidEventError(DecodeError):
    """Gateway event message is malformed."""

    pass
