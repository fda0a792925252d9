from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from app.services import ChildService
from app.services.child_service import ProfileIncompleteError
from app.exceptions import MissingFieldsError, NotFoundError
from app.extensions import db

child_bp = Blueprint("child", __name__)


@child_bp.route("/children", methods=["GET"])
@jwt_required()
def get_children():
    children = ChildService.get_children(get_jwt_identity())
    return jsonify([child.to_dict() for child in children]), 200


@child_bp.route("/children", methods=["POST"])
@jwt_required()
def create_child():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    try:
        child = ChildService.create_child(get_jwt_identity(), data)
        return jsonify(child.to_dict()), 201
    except ProfileIncompleteError as e:
        return jsonify({"error": str(e)}), 400
    except MissingFieldsError as e:
        return jsonify({"error": "Invalid child data", "missing_fields": e.fields}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating child: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to create child"}), 500


@child_bp.route("/children/<child_id>", methods=["PUT"])
@jwt_required()
def update_child(child_id):
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    try:
        child = ChildService.update_child(child_id, get_jwt_identity(), data)
        return jsonify(child.to_dict()), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except MissingFieldsError as e:
        return jsonify({"error": "Invalid child data", "missing_fields": e.fields}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating child {child_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to update child"}), 500


@child_bp.route("/children/<child_id>", methods=["DELETE"])
@jwt_required()
def delete_child(child_id):
    try:
        ChildService.delete_child(child_id, get_jwt_identity())
        return "", 204
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting child {child_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to delete child"}), 500
