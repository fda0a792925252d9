import uuid
from app.extensions import db


class EventSupervisor(db.Model):
    __tablename__ = "event_supervisors"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = db.Column(db.String(36), db.ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    supervisor_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )

    event = db.relationship("Event", back_populates="supervisors")
    supervisor = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("event_id", "supervisor_id", name="uq_event_supervisor"),
    )

    def __repr__(self):
        return f"<EventSupervisor event_id={self.event_id} supervisor_id={self.supervisor_id}>"
