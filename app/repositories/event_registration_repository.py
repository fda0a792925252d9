from typing import List, Optional
from app.extensions import db
from app.models import EventRegistration, Event, Child


class EventRegistrationRepository:
    @staticmethod
    def find_by_event_and_child(event_id: str, child_id: str) -> Optional[EventRegistration]:
        return EventRegistration.query.filter_by(event_id=event_id, child_id=child_id).first()

    @staticmethod
    def find_parent_registration(event_id: str, parent_id: str) -> Optional[EventRegistration]:
        """The parent's own (child-less) registration for an event, if any."""
        return (
            EventRegistration.query.filter(
                EventRegistration.event_id == event_id,
                EventRegistration.parent_id == parent_id,
                EventRegistration.child_id.is_(None),
            )
            .first()
        )

    @staticmethod
    def add(attrs) -> EventRegistration:
        """Stage a registration row; the caller owns the transaction."""
        registration = EventRegistration(**attrs)
        db.session.add(registration)
        db.session.flush()
        return registration

    @staticmethod
    def get_by_parent(parent_id: str) -> List[EventRegistration]:
        return (
            EventRegistration.query.filter_by(parent_id=parent_id)
            .order_by(EventRegistration.registered_at.desc())
            .all()
        )

    @staticmethod
    def get_child_registrations_with_details(parent_id: str):
        return (
            db.session.query(EventRegistration, Event, Child)
            .join(Event, EventRegistration.event_id == Event.id)
            .join(Child, EventRegistration.child_id == Child.id)
            .filter(EventRegistration.parent_id == parent_id)
            .order_by(Event.start_time.asc())
            .all()
        )
