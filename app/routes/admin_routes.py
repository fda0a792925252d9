from flask import Blueprint, jsonify, request, current_app
from flask_jwt_extended import get_jwt_identity
from app.extensions import db
from app.exceptions import (
    UnauthorizedError,
    MissingFieldsError,
    NotFoundError,
    InvalidStatusError,
    StorageFailure,
)
from app.services import EventService, UserService
from app.utils.auth import admin_required

admin_bp = Blueprint("admin", __name__)


def _event_error(e):
    """Translate an event service exception into a JSON error response."""
    if isinstance(e, NotFoundError):
        return jsonify({"error": "Event not found"}), 404
    if isinstance(e, MissingFieldsError):
        return jsonify({"error": "Missing required fields", "missing_fields": e.fields}), 400
    if isinstance(e, UnauthorizedError):
        return jsonify({"error": str(e)}), 403
    if isinstance(e, ValueError):
        return jsonify({"error": str(e)}), 400
    db.session.rollback()
    current_app.logger.error(f"Event administration failed: {str(e)}", exc_info=True)
    return jsonify({"error": "Failed to process event"}), 500


@admin_bp.route("/admin/events", methods=["GET"])
@admin_required
def get_admin_events():
    return jsonify(EventService.get_events_for_admin()), 200


@admin_bp.route("/admin/events", methods=["POST"])
@admin_required
def create_event():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        event = EventService.create_event(data, get_jwt_identity())
        return jsonify(event.to_dict()), 201
    except (NotFoundError, MissingFieldsError, UnauthorizedError, ValueError, StorageFailure) as e:
        return _event_error(e)


@admin_bp.route("/admin/events/<event_id>", methods=["PUT"])
@admin_required
def update_event(event_id):
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    action = data.pop("action", "publish")
    try:
        event = EventService.apply_edit(event_id, data, action)
        return jsonify(event.to_dict()), 200
    except (NotFoundError, ValueError, StorageFailure) as e:
        return _event_error(e)


@admin_bp.route("/admin/events/<event_id>/edit", methods=["POST"])
@admin_required
def begin_editing(event_id):
    try:
        event = EventService.begin_editing(event_id)
        return jsonify(event.to_dict()), 200
    except NotFoundError as e:
        return _event_error(e)


@admin_bp.route("/admin/events/<event_id>/status", methods=["PUT"])
@admin_required
def update_event_status(event_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "status" not in data:
        return jsonify({"error": "Status is required"}), 400

    try:
        event = EventService.update_status(event_id, data["status"])
        return jsonify(event.to_dict()), 200
    except (NotFoundError, InvalidStatusError) as e:
        return _event_error(e)


@admin_bp.route("/admin/events/<event_id>", methods=["DELETE"])
@admin_required
def delete_event(event_id):
    try:
        EventService.soft_delete(event_id)
        return jsonify({"message": "Event deleted successfully"}), 200
    except NotFoundError as e:
        return _event_error(e)


@admin_bp.route("/admin/events/<event_id>/restore", methods=["PUT"])
@admin_required
def restore_event(event_id):
    try:
        EventService.restore(event_id)
        return jsonify({"message": "Event restored successfully"}), 200
    except NotFoundError as e:
        return _event_error(e)


@admin_bp.route("/admin/users", methods=["GET"])
@admin_required
def get_all_users():
    users = UserService.get_all_users()
    return jsonify([user.to_dict() for user in users]), 200


@admin_bp.route("/admin/users/by-roles", methods=["GET"])
@admin_required
def get_users_by_roles():
    roles = [r for r in request.args.get("roles", "").split(",") if r]
    if not roles:
        return jsonify({"error": "Roles parameter is required"}), 400
    users = UserService.get_users_by_roles(roles)
    return jsonify([user.to_dict() for user in users]), 200


@admin_bp.route("/admin/users/<user_id>/role", methods=["PATCH"])
@admin_required
def update_user_role(user_id):
    data = request.get_json(silent=True) or {}
    role = data.get("role")
    if not role:
        return jsonify({"error": "Role is required"}), 400

    try:
        user = UserService.update_user_role(user_id, role)
        return jsonify(user.to_dict()), 200
    except UnauthorizedError as e:
        return jsonify({"error": str(e)}), 403
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
