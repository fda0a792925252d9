from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.exceptions import RejectionReason, StorageFailure
from app.models import EventRegistration
from app.repositories.event_repository import EventRepository
from app.repositories.child_repository import ChildRepository
from app.repositories.event_registration_repository import EventRegistrationRepository
from app.services import registration_policy as policy
from app.utils.time import utcnow, ensure_utc, isoformat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registrant:
    parent_id: str
    role: str
    child_id: Optional[str] = None

    @property
    def is_child(self) -> bool:
        return bool(self.child_id)


@dataclass
class AdmissionResult:
    registration: Optional[EventRegistration] = None
    reason: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @property
    def registration_id(self):
        return self.registration.id if self.registration else None

    @property
    def credits_cost(self):
        return self.registration.credits_cost if self.registration else None

    @property
    def services_cost(self):
        return self.registration.services_cost if self.registration else None

    @classmethod
    def rejected(cls, reason: RejectionReason):
        return cls(reason=reason)


class RegistrationService:
    @staticmethod
    def admit_registration(
        event_id: str,
        registrant: Registrant,
        selected_services=None,
        now: Optional[datetime] = None,
    ) -> AdmissionResult:
        now = ensure_utc(now) if now else utcnow()
        logger.info(
            f"Registration attempt: parent {registrant.parent_id} "
            f"(role={registrant.role}) child={registrant.child_id} event={event_id}"
        )

        event = EventRepository.get_event(event_id)
        if not event or event.deleted:
            return RegistrationService._reject(event_id, registrant, RejectionReason.NOT_FOUND)

        if event.remaining_seats <= 0:
            return RegistrationService._reject(event_id, registrant, RejectionReason.EVENT_FULL)

        if not policy.is_registration_open(event, now):
            return RegistrationService._reject(event_id, registrant, RejectionReason.REGISTRATION_CLOSED)

        if not policy.registrant_allowed(event.allowed_registrants, registrant.is_child):
            return RegistrationService._reject(
                event_id, registrant, RejectionReason.REGISTRANT_TYPE_NOT_ALLOWED
            )

        if registrant.is_child:
            existing = EventRegistrationRepository.find_by_event_and_child(event_id, registrant.child_id)
        else:
            existing = EventRegistrationRepository.find_parent_registration(event_id, registrant.parent_id)
        if existing:
            return RegistrationService._reject(event_id, registrant, RejectionReason.ALREADY_REGISTERED)

        if registrant.is_child:
            child = ChildRepository.find_by_id(registrant.child_id)
            # Someone else's child is reported exactly like a missing one
            if not child or child.parent_id != registrant.parent_id:
                return RegistrationService._reject(event_id, registrant, RejectionReason.NOT_FOUND)

        services = policy.clean_service_indices(selected_services)
        credits_cost = event.credits_required
        services_cost = policy.services_cost_cents(event.extra_services, services)
        takes_seat = policy.consumes_seat(registrant.is_child, registrant.role)

        try:
            registration = EventRegistrationRepository.add(
                {
                    "event_id": event.id,
                    "parent_id": registrant.parent_id,
                    "child_id": registrant.child_id if registrant.is_child else None,
                    "selected_services": services,
                    "credits_cost": credits_cost,
                    "services_cost": services_cost,
                    "registered_at": now,
                }
            )
            if takes_seat and not EventRepository.apply_seat_delta(event.id, -1):
                # Another request took the last seat after our check
                db.session.rollback()
                return RegistrationService._reject(event_id, registrant, RejectionReason.EVENT_FULL)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(
                f"Failed to register parent {registrant.parent_id} "
                f"child={registrant.child_id} for event {event_id}: {str(e)}",
                exc_info=True,
            )
            raise StorageFailure(f"Could not store registration for event {event_id}") from e

        logger.info(
            f"Registered parent {registrant.parent_id} child={registrant.child_id} "
            f"for event {event_id} (seat_taken={takes_seat}, credits={credits_cost}, "
            f"services_cost={services_cost})"
        )
        return AdmissionResult(registration=registration)

    @staticmethod
    def _reject(event_id, registrant: Registrant, reason: RejectionReason) -> AdmissionResult:
        logger.warning(
            f"Registration rejected for parent {registrant.parent_id} "
            f"child={registrant.child_id} event={event_id}: {reason.value}"
        )
        return AdmissionResult.rejected(reason)

    @staticmethod
    def get_registrations_for_parent(parent_id: str) -> List[EventRegistration]:
        return EventRegistrationRepository.get_by_parent(parent_id)

    @staticmethod
    def get_my_events(parent_id: str):
        rows = EventRegistrationRepository.get_child_registrations_with_details(parent_id)
        return [
            {
                **registration.to_dict(),
                "event": {
                    "id": event.id,
                    "name": event.name,
                    "type": event.type,
                    "start_time": isoformat(event.start_time),
                    "location": event.location,
                    "duration": event.duration,
                    "image": event.image,
                    "description": event.description,
                },
                "child": {
                    "id": child.id,
                    "first_name": child.first_name,
                    "last_name": child.last_name,
                },
            }
            for registration, event, child in rows
        ]
