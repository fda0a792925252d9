from app.models import User
from app.models.enums import UserRole, AuthType
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token
from app.repositories.user_repository import UserRepository
from app.exceptions import MissingFieldsError, NotFoundError, UnauthorizedError
from datetime import timedelta, datetime
import re
import logging

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PROFILE_FIELDS = ["first_name", "last_name", "phone", "email", "date_of_birth", "profile_image_url"]


class UserService:
    @staticmethod
    def validate_signup(user_data):
        required_fields = ["email", "password", "first_name", "last_name", "phone"]
        missing = [f for f in required_fields if not user_data.get(f)]
        if missing:
            raise MissingFieldsError(missing)
        if not EMAIL_PATTERN.match(user_data["email"]):
            raise ValueError("Please enter a valid email address")
        if len(user_data["password"]) < 8:
            raise ValueError("Password must be at least 8 characters long")
        if len(user_data["phone"]) < 10:
            raise ValueError("Please enter a valid phone number")

    @staticmethod
    def sign_up(user_data):
        UserService.validate_signup(user_data)

        existing_user = UserRepository.find_by_email(user_data["email"])
        if existing_user:
            logger.warning(f"Signup attempt with existing email: {user_data['email']}")
            raise ValueError("User with this email already exists")

        user = User(
            email=user_data["email"],
            password=generate_password_hash(user_data["password"]),
            first_name=user_data["first_name"],
            last_name=user_data["last_name"],
            phone=user_data["phone"],
            auth_type=AuthType.EMAIL.value,
            is_email_verified=False,
            role=UserRole.USER.value,
        )
        created_user = UserRepository.sign_up(user)

        access_token = create_access_token(
            identity=created_user.id, expires_delta=timedelta(days=1)
        )
        logger.info(f"User created successfully: {created_user.email}")
        return {"token": access_token, "user": created_user.to_dict()}

    @staticmethod
    def sign_in(email, password):
        user = UserRepository.find_by_email(email)
        if not user:
            logger.warning(f"Login attempt with non-existent email: {email}")
            raise ValueError("Invalid email or password")

        if user.auth_type != AuthType.EMAIL.value or not user.password:
            raise ValueError("Please sign in with your original method")

        if not check_password_hash(user.password, password):
            logger.warning(f"Failed login attempt for user: {email}")
            raise ValueError("Invalid email or password")

        access_token = create_access_token(
            identity=user.id, expires_delta=timedelta(days=1)
        )
        logger.info(f"User logged in successfully: {email}")
        return {"token": access_token, "user": user.to_dict()}

    @staticmethod
    def get_user(user_id):
        user = UserRepository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def update_profile(user_id, data):
        user = UserService.get_user(user_id)
        updates = {}
        for field in PROFILE_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == "date_of_birth" and value:
                try:
                    value = datetime.strptime(value, "%Y-%m-%d").date()
                except ValueError:
                    raise ValueError("date_of_birth must be in YYYY-MM-DD format")
            if field == "email" and value:
                if not EMAIL_PATTERN.match(value):
                    raise ValueError("Please enter a valid email address")
                other = UserRepository.find_by_email(value)
                if other and other.id != user.id:
                    raise ValueError("User with this email already exists")
            updates[field] = value
        return UserRepository.update(user, updates)

    @staticmethod
    def get_all_users():
        return UserRepository.find_all()

    @staticmethod
    def get_users_by_roles(roles):
        return UserRepository.find_by_roles(roles)

    @staticmethod
    def update_user_role(user_id, role):
        if role not in [r.value for r in UserRole]:
            raise ValueError("Invalid role")
        if role == UserRole.ADMIN.value:
            raise UnauthorizedError("Cannot assign admin role")
        user = UserService.get_user(user_id)
        logger.info(f"Changing role of user {user_id} from {user.role} to {role}")
        return UserRepository.update(user, {"role": role})
