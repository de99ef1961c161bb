"""Exception hierarchy raised by the computation engine."""

from typing import Optional

from boxsim.constants import ErrorCode


class BoxSimError(Exception):
    """Base error carrying a machine-readable error code."""

    def __init__(self, message: str, code: ErrorCode):
        super().__init__(message)
        self.message = message
        self.code = code


class OutOfRange(BoxSimError):
    """A requested role or response type is not present in a collection."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.OUT_OF_RANGE)


class FileAccessError(BoxSimError):
    """An identifier could not be resolved to driver data."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.FILE_ACCESS_ERROR)


class DriverCreationError(BoxSimError):
    """A driver record is missing a field, mistyped, or of an unknown type.

    `path` is the dotted location of the offending field when known,
    e.g. ``thiele_small_parameters.fs``.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.DRIVER_CREATION_ERROR)
        self.path = path


class InvalidDriverRoleError(DriverCreationError):
    """The record's speaker type does not match the role it was loaded for."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"Driver type '{actual}' does not match expected role '{expected}'",
            path="general_info.speaker_type",
        )
        self.expected = expected
        self.actual = actual


class EnclosureCreationError(BoxSimError):
    """An enclosure record is malformed or names an unknown enclosure type."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.ENCLOSURE_CREATION_ERROR)
        self.path = path


class SetupCreationError(BoxSimError):
    """A saved acoustic setup record is malformed; `path` locates the bad key."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.SETUP_CREATION_ERROR)
        self.path = path


class ComputationError(BoxSimError):
    """A formula hit an undefined point (division by zero, log of <= 0)."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.COMPUTATION_ERROR)
