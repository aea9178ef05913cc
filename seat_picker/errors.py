from __future__ import annotations


class SeatPickerError(Exception):
    pass


class InvalidLayoutError(SeatPickerError):
    """Malformed venue configuration. Fatal at initialization."""


class UnknownSeatError(SeatPickerError):
    pass


class SelectionLimitExceeded(SeatPickerError):
    pass


class InconsistentStateError(SeatPickerError):
    pass
