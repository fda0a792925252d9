from flask import Blueprint, jsonify, request, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from app.exceptions import RejectionReason, StorageFailure, NotFoundError, UnauthorizedError
from app.services import EventService, RegistrationService, Registrant
from app.services.registration_policy import format_cents
from app.utils.auth import get_current_user

event_bp = Blueprint("event", __name__)

REJECTION_RESPONSES = {
    RejectionReason.NOT_FOUND: (404, "Event or child not found"),
    RejectionReason.EVENT_FULL: (409, "No seats available for this event"),
    RejectionReason.REGISTRATION_CLOSED: (400, "Registration deadline has passed"),
    RejectionReason.REGISTRANT_TYPE_NOT_ALLOWED: (400, "This event does not accept this type of registrant"),
    RejectionReason.ALREADY_REGISTERED: (400, "Already registered for this event"),
}


@event_bp.route("/events", methods=["GET"])
def get_all_events():
    try:
        return jsonify(EventService.get_events_for_user()), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching events: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch events"}), 500


@event_bp.route("/events/<event_id>", methods=["GET"])
def get_event(event_id):
    try:
        event = EventService.get_event(event_id)
    except NotFoundError:
        return jsonify({"error": "Event not found"}), 404
    return jsonify(event.to_dict()), 200


@event_bp.route("/events/<event_id>/register", methods=["POST"])
@jwt_required()
def register_for_event(event_id):
    user = get_current_user()
    if not user:
        return jsonify({"error": "User not found"}), 404

    data = request.get_json(silent=True) or {}
    selected_services = data.get("selected_services") or []
    if not isinstance(selected_services, list):
        return jsonify({"error": "selected_services must be a list"}), 400

    registrant = Registrant(
        parent_id=user.id,
        role=user.role,
        child_id=data.get("child_id") or None,
    )

    try:
        result = RegistrationService.admit_registration(event_id, registrant, selected_services)
    except StorageFailure as e:
        current_app.logger.error(
            f"Storage failure registering user {user.id} for event {event_id}: {str(e)}",
            exc_info=True,
        )
        return jsonify({"error": "Failed to register for event"}), 500

    if not result.accepted:
        status_code, message = REJECTION_RESPONSES[result.reason]
        return jsonify({"error": message, "reason": result.reason.value}), status_code

    registration = result.registration.to_dict()
    registration["services_cost_display"] = format_cents(result.services_cost)
    return jsonify(registration), 201


@event_bp.route("/registrations", methods=["GET"])
@jwt_required()
def get_registrations():
    registrations = RegistrationService.get_registrations_for_parent(get_jwt_identity())
    return jsonify([r.to_dict() for r in registrations]), 200


@event_bp.route("/my-events", methods=["GET"])
@jwt_required()
def get_my_events():
    try:
        return jsonify(RegistrationService.get_my_events(get_jwt_identity())), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching my events: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch my events"}), 500


@event_bp.route("/supervised-events", methods=["GET"])
@jwt_required()
def get_supervised_events():
    try:
        return jsonify(EventService.get_supervised_events(get_jwt_identity())), 200
    except UnauthorizedError as e:
        return jsonify({"error": str(e)}), 403
