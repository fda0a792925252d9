from flask import Blueprint, request, jsonify, make_response, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from app.services import UserService
from app.exceptions import MissingFieldsError, NotFoundError
from app.extensions import db

user_bp = Blueprint("user", __name__)


@user_bp.route("/auth/signup", methods=["POST"])
def sign_up():
    user_data = request.get_json(silent=True)
    if not user_data:
        return jsonify({"error": "No data provided"}), 400

    try:
        result = UserService.sign_up(user_data)
        return make_response(jsonify(result), 201)
    except MissingFieldsError as e:
        return jsonify({"error": "Missing required fields", "missing_fields": e.fields}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Unexpected error during signup: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to create account"}), 500


@user_bp.route("/auth/login", methods=["POST"])
def sign_in():
    user_data = request.get_json(silent=True)
    if not user_data:
        return jsonify({"error": "No data provided"}), 400

    required_fields = ["email", "password"]
    missing_fields = [field for field in required_fields if not user_data.get(field)]
    if missing_fields:
        return (
            jsonify(
                {
                    "error": "Missing required fields",
                    "missing_fields": missing_fields,
                }
            ),
            400,
        )

    try:
        result = UserService.sign_in(user_data["email"], user_data["password"])
        return jsonify(result), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 401
    except Exception as e:
        current_app.logger.error(f"Login error: {str(e)}", exc_info=True)
        return jsonify({"error": "Authentication error"}), 500


@user_bp.route("/auth/logout", methods=["POST"])
@jwt_required()
def sign_out():
    # Tokens are stateless; the client discards its copy
    return jsonify({"message": "Logged out successfully"}), 200


@user_bp.route("/auth/user", methods=["GET"])
@jwt_required()
def get_current_user():
    try:
        user = UserService.get_user(get_jwt_identity())
        return jsonify(user.to_dict()), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@user_bp.route("/profile", methods=["PUT"])
@jwt_required()
def update_profile():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    try:
        user = UserService.update_profile(get_jwt_identity(), data)
        return jsonify(user.to_dict()), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating profile: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to update profile"}), 500
