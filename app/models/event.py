import uuid
from app.extensions import db
from app.utils.time import isoformat
from .enums import EventStatus, AllowedRegistrants


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(50), nullable=False, default="afterschool")
    description = db.Column(db.Text, nullable=False, default="")
    start_time = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    duration = db.Column(db.String(20), nullable=False, default="5h")
    location = db.Column(db.String(255), nullable=False)
    image = db.Column(db.String(500), nullable=True)
    max_seats = db.Column(db.Integer, nullable=False, default=3)
    remaining_seats = db.Column(db.Integer, nullable=False, default=3)
    credits_required = db.Column(db.Integer, nullable=False, default=0)
    cutoff_hours = db.Column(db.Integer, nullable=False, default=12)
    # [{"description": str, "price": decimal major units, "currency": str}]
    extra_services = db.Column(db.JSON, nullable=False, default=list)
    services_currency = db.Column(db.String(3), nullable=False, default="USD")
    allowed_registrants = db.Column(
        db.String(20), nullable=False, default=AllowedRegistrants.ATTENDEE.value
    )
    # Last label written; reads always go through derive_status.
    status = db.Column(db.String(20), nullable=False, default=EventStatus.OPEN.value)
    is_editing = db.Column(db.Boolean, nullable=False, default=False)
    deleted = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    supervisors = db.relationship(
        "EventSupervisor", back_populates="event", cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.CheckConstraint("max_seats > 0", name="ck_events_max_seats_positive"),
        db.CheckConstraint("remaining_seats >= 0", name="ck_events_remaining_non_negative"),
        db.CheckConstraint("remaining_seats <= max_seats", name="ck_events_remaining_le_max"),
        db.CheckConstraint("credits_required >= 0", name="ck_events_credits_non_negative"),
        db.CheckConstraint("cutoff_hours >= 0", name="ck_events_cutoff_non_negative"),
    )

    def to_dict(self, now=None):
        from app.services.registration_policy import derive_status, registration_deadline

        supervisors = [
            {
                "supervisor_id": s.supervisor_id,
                "supervisor_name": s.supervisor.full_name if s.supervisor else None,
                "supervisor_email": s.supervisor.email if s.supervisor else None,
            }
            for s in self.supervisors
        ]
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "start_time": isoformat(self.start_time),
            "duration": self.duration,
            "location": self.location,
            "image": self.image,
            "max_seats": self.max_seats,
            "remaining_seats": self.remaining_seats,
            "credits_required": self.credits_required,
            "cutoff_hours": self.cutoff_hours,
            "registration_deadline": isoformat(registration_deadline(self)),
            "extra_services": self.extra_services or [],
            "services_currency": self.services_currency,
            "allowed_registrants": self.allowed_registrants,
            "status": derive_status(self, now).value,
            "deleted": self.deleted,
            "supervisors": supervisors,
            "supervisor_names": ", ".join(
                s["supervisor_name"] for s in supervisors if s["supervisor_name"]
            ),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return (
            f"Event("
            f"id={self.id}, "
            f"name='{self.name}', "
            f"remaining_seats={self.remaining_seats}/{self.max_seats}, "
            f"is_editing={self.is_editing}, "
            f"deleted={self.deleted}"
            f")"
        )
