"""
Seat-capacity and registration rules for events.

Everything here is a pure function of its arguments. Callers pass ``now``
explicitly when they need a fixed instant (tests, a single request that
evaluates several rules); otherwise the current UTC time is used.
"""
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, List, Optional

from app.models.enums import EventStatus, UserRole, AllowedRegistrants
from app.utils.time import utcnow, ensure_utc


CHILD = "child"
PARENT_SELF = "parent_self"

# Whether a registration uses up one of the event's seats, keyed by
# (registrant kind, role of the registering parent). Staff and admins who
# sign themselves up are supervising, not attending.
SEAT_CONSUMPTION = {
    (CHILD, UserRole.ADMIN): True,
    (CHILD, UserRole.STAFF): True,
    (CHILD, UserRole.USER): True,
    (CHILD, UserRole.ATTENDEE): True,
    (PARENT_SELF, UserRole.ADMIN): False,
    (PARENT_SELF, UserRole.STAFF): False,
    (PARENT_SELF, UserRole.USER): True,
    (PARENT_SELF, UserRole.ATTENDEE): True,
}

ALLOWED_MODES = {
    CHILD: {AllowedRegistrants.ATTENDEE, AllowedRegistrants.BOTH},
    PARENT_SELF: {AllowedRegistrants.USER, AllowedRegistrants.BOTH},
}

CENTS = Decimal("100")


def registration_deadline(event) -> Optional[datetime]:
    """Instant after which new registrations are refused."""
    if event.start_time is None:
        return None
    return ensure_utc(event.start_time) - timedelta(hours=event.cutoff_hours or 0)


def derive_status(event, now: Optional[datetime] = None) -> EventStatus:
    """
    Compute the status to display for an event.

    Rules are checked in order and the first match wins:
    an explicit editing flag, then past, full, registration closed, open.
    The stored ``status`` column is not consulted.

    Args:
        event: Anything exposing ``start_time``, ``cutoff_hours``,
               ``remaining_seats`` and ``is_editing``.
        now: The instant to evaluate at. Defaults to the current UTC time.

    Returns:
        The derived EventStatus.
    """
    now = ensure_utc(now) if now else utcnow()

    if event.is_editing:
        return EventStatus.EDITING
    if now >= ensure_utc(event.start_time):
        return EventStatus.PAST
    if event.remaining_seats <= 0:
        return EventStatus.FULL
    if now > registration_deadline(event):
        return EventStatus.REGISTRATION_CLOSED
    return EventStatus.OPEN


def is_registration_open(event, now: Optional[datetime] = None) -> bool:
    now = ensure_utc(now) if now else utcnow()
    return now <= registration_deadline(event)


def registrant_allowed(allowed_registrants, is_child: bool) -> bool:
    """Check the event's allowed-registrants mode against the registrant type."""
    try:
        mode = AllowedRegistrants(allowed_registrants)
    except ValueError:
        return False
    return mode in ALLOWED_MODES[CHILD if is_child else PARENT_SELF]


def consumes_seat(is_child: bool, role) -> bool:
    """
    Whether a successful registration takes one seat off the event.

    Unknown roles are treated as ordinary parents.
    """
    try:
        role = UserRole(role)
    except ValueError:
        role = UserRole.USER
    return SEAT_CONSUMPTION[(CHILD if is_child else PARENT_SELF, role)]


def to_cents(price) -> int:
    """Convert a major-unit price to cents. Unparseable or non-finite prices are 0."""
    try:
        amount = Decimal(str(price))
        if not amount.is_finite():
            return 0
        return int((amount * CENTS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        return 0


def clean_service_indices(selected: Optional[Iterable]) -> List[int]:
    """Keep only integer indices; booleans and strings are dropped."""
    if not selected:
        return []
    return [i for i in selected if isinstance(i, int) and not isinstance(i, bool)]


def services_cost_cents(extra_services, selected: Optional[Iterable]) -> int:
    """
    Total price of the selected extra services, in minor currency units.

    Prices on the event are decimal major units (``10.00``). Indices that do
    not address an existing service contribute nothing.
    """
    services = extra_services or []
    total = 0
    for index in clean_service_indices(selected):
        if 0 <= index < len(services):
            total += to_cents(services[index].get("price", 0))
    return total


def format_cents(cents: int) -> str:
    return str((Decimal(cents) / CENTS).quantize(Decimal("0.01")))
