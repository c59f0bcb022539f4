class IntakeError(Exception):
    """Base class for errors raised by the intake stores and API."""

    status_code = 500


class ValidationError(IntakeError):
    status_code = 400


class NotFoundError(IntakeError):
    status_code = 404


class StorageError(IntakeError):
    """An underlying read/write failed. Writes raise it, reads degrade instead."""

    status_code = 500
