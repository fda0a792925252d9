from enum import Enum


class EventStatus(Enum):
    OPEN = "open"
    REGISTRATION_CLOSED = "registration_closed"
    FULL = "full"
    PAST = "past"
    EDITING = "editing"


class UserRole(Enum):
    ADMIN = "admin"
    STAFF = "staff"
    USER = "user"
    ATTENDEE = "attendee"


class AllowedRegistrants(Enum):
    ATTENDEE = "attendee"
    USER = "user"
    BOTH = "both"


class AuthType(Enum):
    EMAIL = "email"
    OAUTH = "oauth"


class EditAction(Enum):
    PUBLISH = "publish"
    SAVE = "save"
    DELETE = "delete"
