from functools import wraps
from flask import jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from app.repositories.user_repository import UserRepository
from app.models.enums import UserRole


def get_current_user():
    """Load the user behind the JWT of the current request."""
    user_id = get_jwt_identity()
    if not user_id:
        return None
    return UserRepository.find_by_id(user_id)


def roles_required(*roles):
    """Reject the request unless the caller holds one of ``roles``."""
    allowed = {r.value if isinstance(r, UserRole) else r for r in roles}

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = get_current_user()
            if not user:
                return jsonify({"error": "Unauthorized"}), 401
            if user.role not in allowed:
                return jsonify({"error": "Access denied"}), 403
            return fn(*args, **kwargs)

        return wrapper

    return decorator


admin_required = roles_required(UserRole.ADMIN)
