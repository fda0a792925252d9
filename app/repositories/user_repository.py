from app.extensions import db
from app.models import User


class UserRepository:
    @staticmethod
    def sign_up(user):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def find_by_email(email):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def find_by_id(user_id):
        return User.query.filter_by(id=user_id).first()

    @staticmethod
    def find_all():
        return User.query.order_by(User.created_at.asc()).all()

    @staticmethod
    def find_by_roles(roles):
        return User.query.filter(User.role.in_(roles)).order_by(User.first_name).all()

    @staticmethod
    def update(user, attrs: dict):
        for key, value in attrs.items():
            if hasattr(user, key):
                setattr(user, key, value)
        db.session.commit()
        return user
