from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from app.extensions import db
from app.repositories.event_repository import EventRepository
from app.repositories.event_registration_repository import EventRegistrationRepository
from app.repositories.user_repository import UserRepository
from app.exceptions import (
    UnauthorizedError,
    MissingFieldsError,
    NotFoundError,
    InvalidStatusError,
    StorageFailure,
)
from app.models.enums import EventStatus, AllowedRegistrants, EditAction, UserRole
from app.models import Event
from app.services.registration_policy import derive_status
from app.utils.time import parse_iso_datetime, utcnow

HIDDEN_FROM_USERS = (EventStatus.PAST, EventStatus.EDITING)

EDITABLE_FIELDS = [
    "name",
    "type",
    "description",
    "start_time",
    "duration",
    "location",
    "image",
    "max_seats",
    "remaining_seats",
    "credits_required",
    "cutoff_hours",
    "extra_services",
    "services_currency",
    "allowed_registrants",
]


class EventService:
    @staticmethod
    def get_events_for_user(now: Optional[datetime] = None) -> List[dict]:
        """Published events an ordinary user may browse."""
        now = now or utcnow()
        return [
            event.to_dict(now)
            for event in EventRepository.get_events(include_deleted=False)
            if derive_status(event, now) not in HIDDEN_FROM_USERS
        ]

    @staticmethod
    def get_events_for_admin(now: Optional[datetime] = None) -> List[dict]:
        now = now or utcnow()
        return [event.to_dict(now) for event in EventRepository.get_events(include_deleted=True)]

    @staticmethod
    def get_event(event_id: str, include_deleted: bool = False) -> Event:
        event = EventRepository.get_event(event_id)
        if not event or (event.deleted and not include_deleted):
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    @staticmethod
    def get_supervised_events(user_id: str) -> List[dict]:
        user = UserRepository.find_by_id(user_id)
        if not user or not user.is_staff_or_admin:
            raise UnauthorizedError("Access denied. Staff or admin role required.")
        now = utcnow()
        return [event.to_dict(now) for event in EventRepository.get_supervised_events(user_id)]

    @staticmethod
    def parse_event_fields(data: dict) -> dict:
        """Validate and coerce incoming event attributes. Raises ValueError."""
        fields = {}
        for field in EDITABLE_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if value is None and field != "image":
                continue
            if field == "start_time":
                try:
                    fields[field] = parse_iso_datetime(value)
                except (TypeError, ValueError):
                    raise ValueError(f"Invalid date format for {field}")
            elif field in ("max_seats", "remaining_seats", "credits_required", "cutoff_hours"):
                fields[field] = EventService._parse_int(field, value)
                if fields[field] < 0:
                    raise ValueError(f"{field} cannot be negative")
            elif field == "allowed_registrants":
                if value not in [m.value for m in AllowedRegistrants]:
                    raise ValueError(f"Invalid allowed_registrants value: {value}")
                fields[field] = value
            elif field == "extra_services":
                fields[field] = EventService._parse_extra_services(value)
            else:
                fields[field] = value

        if "max_seats" in fields and fields["max_seats"] < 1:
            raise ValueError("max_seats must be at least 1")
        return fields

    @staticmethod
    def _parse_int(field: str, value) -> int:
        # Whole numbers only; floats and booleans are not coerced
        if isinstance(value, (bool, float)):
            raise ValueError(f"Invalid format for {field}, must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid format for {field}, must be an integer")

    @staticmethod
    def _parse_extra_services(value) -> List[dict]:
        if not isinstance(value, list):
            raise ValueError("extra_services must be a list")
        services = []
        for service in value:
            if not isinstance(service, dict) or "description" not in service or "price" not in service:
                raise ValueError("Each extra service needs a description and a price")
            try:
                price = Decimal(str(service["price"]))
            except InvalidOperation:
                raise ValueError(f"Invalid price for extra service {service['description']}")
            if not price.is_finite():
                raise ValueError(f"Invalid price for extra service {service['description']}")
            if price < 0:
                raise ValueError("Extra service prices cannot be negative")
            entry = {"description": service["description"], "price": float(price)}
            if service.get("currency"):
                entry["currency"] = service["currency"]
            services.append(entry)
        return services

    @staticmethod
    def create_event(data: dict, user_id: str) -> Event:
        user = UserRepository.find_by_id(user_id)
        if not user or user.role != UserRole.ADMIN.value:
            raise UnauthorizedError("Admin access required")

        required_fields = ["name", "start_time", "location", "max_seats", "credits_required"]
        missing = [f for f in required_fields if f not in data]
        if missing:
            raise MissingFieldsError(missing)

        fields = EventService.parse_event_fields(data)
        fields.setdefault("remaining_seats", fields["max_seats"])
        if fields["remaining_seats"] > fields["max_seats"]:
            raise ValueError("remaining_seats cannot exceed max_seats")
        fields["status"] = EventStatus.OPEN.value
        fields["is_editing"] = False
        fields["deleted"] = False

        staff_ids = list(dict.fromkeys(data.get("staff_ids") or []))
        try:
            event = EventRepository.create_event(fields, staff_ids)
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to create event: {str(e)}", exc_info=True)
            raise StorageFailure("Could not create event") from e

        current_app.logger.info(f"Event {event.id} created by admin {user_id}")

        if user_id in staff_ids:
            EventService._register_supervisor(event, user_id)
        return event

    @staticmethod
    def _register_supervisor(event: Event, user_id: str):
        """Sign the creating admin up as a supervisor. Takes no seat."""
        try:
            EventRegistrationRepository.add(
                {
                    "event_id": event.id,
                    "parent_id": user_id,
                    "child_id": None,
                    "selected_services": [],
                    "credits_cost": 0,
                    "services_cost": 0,
                }
            )
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(
                f"Error auto-registering admin {user_id} for event {event.id}: {str(e)}"
            )

    @staticmethod
    def apply_edit(event_id: str, data: dict, action) -> Event:
        """
        Apply an administrator's edit.

        ``publish`` makes the event visible again, ``save`` keeps it hidden
        in the editing state, ``delete`` soft-deletes it.
        """
        try:
            action = EditAction(action)
        except ValueError:
            raise ValueError(f"Invalid edit action: {action}")

        event = EventRepository.get_event(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")

        if action == EditAction.DELETE:
            EventService.soft_delete(event_id)
            return event

        fields = EventService.parse_event_fields(data or {})
        new_capacity = EventService._reconcile_seats(event, fields)

        fields["is_editing"] = action == EditAction.SAVE
        staff_ids = data.get("staff_ids") if data else None

        try:
            for key, value in fields.items():
                setattr(event, key, value)
            if new_capacity is not None:
                if not EventRepository.resize_capacity(event.id, new_capacity):
                    db.session.rollback()
                    raise ValueError("max_seats cannot be lower than the seats already taken")
                db.session.refresh(event, ["max_seats", "remaining_seats"])
            event.status = derive_status(event).value
            if isinstance(staff_ids, list):
                EventRepository.replace_supervisors(event.id, staff_ids)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to update event {event_id}: {str(e)}", exc_info=True)
            raise StorageFailure(f"Could not update event {event_id}") from e

        current_app.logger.info(f"Event {event_id} updated with action {action.value}")
        return event

    @staticmethod
    def _reconcile_seats(event: Event, fields: dict) -> Optional[int]:
        """
        Validate seat fields of an edit.

        A capacity change without an explicit remaining_seats is taken out of
        ``fields`` and returned, to be applied with
        ``EventRepository.resize_capacity`` against the row's current counts.
        """
        if "remaining_seats" not in fields:
            return fields.pop("max_seats", None)
        max_seats = fields.get("max_seats", event.max_seats)
        if not 0 <= fields["remaining_seats"] <= max_seats:
            raise ValueError("remaining_seats must be between 0 and max_seats")
        return None

    @staticmethod
    def begin_editing(event_id: str) -> Event:
        return EventService.update_status(event_id, EventStatus.EDITING.value)

    @staticmethod
    def update_status(event_id: str, status) -> Event:
        try:
            new_status = EventStatus(status)
        except ValueError:
            raise InvalidStatusError(status)

        event = EventRepository.get_event(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")

        EventRepository.update_event(
            event,
            {
                "status": new_status.value,
                "is_editing": new_status == EventStatus.EDITING,
            },
        )
        current_app.logger.info(f"Event {event_id} status set to {new_status.value}")
        return event

    @staticmethod
    def soft_delete(event_id: str):
        if not EventRepository.set_deleted(event_id, True):
            raise NotFoundError(f"Event with ID {event_id} not found")
        current_app.logger.info(f"Event {event_id} soft-deleted")

    @staticmethod
    def restore(event_id: str):
        if not EventRepository.set_deleted(event_id, False):
            raise NotFoundError(f"Event with ID {event_id} not found")
        current_app.logger.info(f"Event {event_id} restored")
