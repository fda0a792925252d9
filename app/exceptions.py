from enum import Enum


class UnauthorizedError(Exception):
    pass


class MissingFieldsError(Exception):
    def __init__(self, fields):
        super().__init__("Missing required fields")
        self.fields = fields


class NotFoundError(Exception):
    pass


class InvalidStatusError(ValueError):
    def __init__(self, status):
        super().__init__(f"Invalid status value: {status}")
        self.status = status


class StorageFailure(Exception):
    """The database rejected or failed a write; the session has been rolled back."""


class RejectionReason(Enum):
    """Expected outcomes of a refused registration attempt."""

    NOT_FOUND = "not_found"
    EVENT_FULL = "event_full"
    REGISTRATION_CLOSED = "registration_closed"
    REGISTRANT_TYPE_NOT_ALLOWED = "registrant_type_not_allowed"
    ALREADY_REGISTERED = "already_registered"
