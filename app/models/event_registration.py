import uuid
from app.extensions import db
from app.utils.time import isoformat


class EventRegistration(db.Model):
    __tablename__ = 'event_registrations'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = db.Column(db.String(36), db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    # Null for a parent registering themself
    child_id = db.Column(db.String(36), db.ForeignKey('attendee.id', ondelete='CASCADE'), nullable=True)
    parent_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    selected_services = db.Column(db.JSON, nullable=False, default=list)
    credits_cost = db.Column(db.Integer, nullable=False, default=0)
    services_cost = db.Column(db.Integer, nullable=False, default=0)  # minor currency units
    registered_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now())

    # Relationships
    event = db.relationship('Event', backref=db.backref('registrations', lazy=True, passive_deletes=True))
    child = db.relationship('Child', backref=db.backref('registrations', lazy=True, passive_deletes=True))
    parent = db.relationship('User', backref=db.backref('event_registrations', lazy=True, passive_deletes=True))

    __table_args__ = (
        db.Index(
            'uq_registration_event_child',
            'event_id', 'child_id',
            unique=True,
            postgresql_where=db.text('child_id IS NOT NULL'),
            sqlite_where=db.text('child_id IS NOT NULL'),
        ),
        db.Index(
            'uq_registration_event_parent_self',
            'event_id', 'parent_id',
            unique=True,
            postgresql_where=db.text('child_id IS NULL'),
            sqlite_where=db.text('child_id IS NULL'),
        ),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'child_id': self.child_id,
            'parent_id': self.parent_id,
            'selected_services': self.selected_services or [],
            'credits_cost': self.credits_cost,
            'services_cost': self.services_cost,
            'registered_at': isoformat(self.registered_at),
        }

    def __repr__(self):
        return (
            f"EventRegistration("
            f"id={self.id}, "
            f"event_id={self.event_id}, "
            f"parent_id={self.parent_id}, "
            f"child_id={self.child_id}"
            f")"
        )
