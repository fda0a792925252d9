import uuid
from app.extensions import db


class Child(db.Model):
    __tablename__ = 'attendee'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    parent_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=False)
    secondary_contact = db.Column(db.Text, nullable=False)
    gender = db.Column(db.String(20), nullable=True)
    dietary_restrictions = db.Column(db.Text, nullable=True)
    allergies = db.Column(db.Text, nullable=True)
    medicine_needs = db.Column(db.Text, nullable=True)
    other_notes = db.Column(db.Text, nullable=True)
    updated_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now())

    parent = db.relationship('User', back_populates='children')

    def to_dict(self):
        return {
            'id': self.id,
            'parent_id': self.parent_id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'date_of_birth': self.date_of_birth.isoformat() if self.date_of_birth else None,
            'secondary_contact': self.secondary_contact,
            'gender': self.gender,
            'dietary_restrictions': self.dietary_restrictions,
            'allergies': self.allergies,
            'medicine_needs': self.medicine_needs,
            'other_notes': self.other_notes,
        }

    def __repr__(self):
        return f"<Child id={self.id} parent_id={self.parent_id}>"
