import sys
import os
from datetime import timedelta

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)  # relative imports

from app import create_app
from app.extensions import db
from app.models import Event
from app.models.enums import EventStatus, AllowedRegistrants
from app.utils.time import utcnow

DEMO_EVENTS = [
    {
        "name": "Creative Arts Workshop",
        "hours_from_now": 2,
        "location": "Art Room A",
        "max_seats": 5,
        "remaining_seats": 2,
        "credits_required": 3,
        "duration": "3h",
        "description": "Painting, drawing and crafts in our art studio. All materials provided.",
        "extra_services": [{"description": "Food", "price": 10.0}],
    },
    {
        "name": "Science Discovery Lab",
        "hours_from_now": 3,
        "location": "Lab 101",
        "max_seats": 3,
        "remaining_seats": 1,
        "credits_required": 4,
        "duration": "2.5h",
        "description": "Hands-on experiments for curious minds who love to explore how things work.",
        "extra_services": [],
    },
    {
        "name": "Soccer Skills Training",
        "hours_from_now": 4,
        "location": "Field A",
        "max_seats": 8,
        "remaining_seats": 0,
        "credits_required": 2,
        "duration": "2h",
        "description": "Teamwork and soccer skills in a supportive environment. All levels welcome!",
        "extra_services": [{"description": "Snacks", "price": 5.0}],
    },
]


def seed_events():
    """Insert demo events when the events table is empty."""
    app = create_app()
    with app.app_context():
        if Event.query.count() > 0:
            print("Events already present, skipping seed.")
            return

        now = utcnow()
        for demo in DEMO_EVENTS:
            attrs = dict(demo)
            hours = attrs.pop("hours_from_now")
            db.session.add(
                Event(
                    start_time=now + timedelta(hours=hours),
                    cutoff_hours=12,
                    allowed_registrants=AllowedRegistrants.ATTENDEE.value,
                    status=EventStatus.OPEN.value,
                    **attrs,
                )
            )
        try:
            db.session.commit()
            print(f"Seeded {len(DEMO_EVENTS)} events.")
        except Exception as e:
            db.session.rollback()
            print(f"Error seeding events: {e}")
            raise


if __name__ == "__main__":
    seed_events()
