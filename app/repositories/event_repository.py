from typing import List, Optional
from sqlalchemy import update
from app.extensions import db
from app.models import Event, EventSupervisor


class EventRepository:
    @staticmethod
    def get_events(include_deleted: bool = False) -> List[Event]:
        query = Event.query
        if not include_deleted:
            query = query.filter(Event.deleted.is_(False))
        return query.order_by(Event.start_time.desc()).all()

    @staticmethod
    def get_event(event_id: str) -> Optional[Event]:
        return Event.query.filter_by(id=event_id).first()

    @staticmethod
    def create_event(attrs, staff_ids=None):
        event = Event(**attrs)
        db.session.add(event)
        db.session.flush()
        for staff_id in staff_ids or []:
            db.session.add(EventSupervisor(event_id=event.id, supervisor_id=staff_id))
        db.session.commit()
        return event

    @staticmethod
    def update_event(event: Event, attrs: dict):
        for key, value in attrs.items():
            if hasattr(event, key):
                setattr(event, key, value)
        db.session.commit()
        return event

    @staticmethod
    def set_deleted(event_id: str, deleted: bool) -> bool:
        result = db.session.execute(
            update(Event)
            .where(Event.id == event_id)
            .values(deleted=deleted)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()
        return result.rowcount > 0

    @staticmethod
    def replace_supervisors(event_id: str, staff_ids: List[str]):
        """Swap the event's supervisor list; the caller commits."""
        EventSupervisor.query.filter_by(event_id=event_id).delete()
        for staff_id in dict.fromkeys(staff_ids):
            db.session.add(EventSupervisor(event_id=event_id, supervisor_id=staff_id))

    @staticmethod
    def get_supervised_events(supervisor_id: str) -> List[Event]:
        return (
            Event.query.join(EventSupervisor, EventSupervisor.event_id == Event.id)
            .filter(EventSupervisor.supervisor_id == supervisor_id)
            .filter(Event.deleted.is_(False))
            .order_by(Event.start_time.desc())
            .all()
        )

    @staticmethod
    def apply_seat_delta(event_id: str, delta: int) -> bool:
        """
        Atomically add ``delta`` to remaining_seats within the open transaction.

        The bounds are part of the WHERE clause, so the row is only touched if
        the result stays within 0..max_seats. Returns False when nothing was
        updated. Does not commit.
        """
        result = db.session.execute(
            update(Event)
            .where(Event.id == event_id)
            .where(Event.remaining_seats + delta >= 0)
            .where(Event.remaining_seats + delta <= Event.max_seats)
            .values(remaining_seats=Event.remaining_seats + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def resize_capacity(event_id: str, max_seats: int) -> bool:
        """
        Set max_seats while keeping the number of taken seats, in one UPDATE.

        remaining_seats is shifted by the capacity difference against the
        row's current values. Returns False when the new capacity is below
        the seats already taken. Does not commit.
        """
        result = db.session.execute(
            update(Event)
            .where(Event.id == event_id)
            .where(Event.max_seats - Event.remaining_seats <= max_seats)
            .values(
                max_seats=max_seats,
                remaining_seats=Event.remaining_seats + (max_seats - Event.max_seats),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
