from datetime import datetime
from app.repositories.child_repository import ChildRepository
from app.repositories.user_repository import UserRepository
from app.exceptions import MissingFieldsError, NotFoundError

CHILD_FIELDS = [
    "first_name",
    "last_name",
    "date_of_birth",
    "secondary_contact",
    "gender",
    "dietary_restrictions",
    "allergies",
    "medicine_needs",
    "other_notes",
]
REQUIRED_CHILD_FIELDS = ["first_name", "last_name", "date_of_birth", "secondary_contact"]


class ProfileIncompleteError(Exception):
    pass


class ChildService:
    @staticmethod
    def _parse(data):
        attrs = {f: data[f] for f in CHILD_FIELDS if f in data}
        if attrs.get("date_of_birth"):
            try:
                attrs["date_of_birth"] = datetime.strptime(attrs["date_of_birth"], "%Y-%m-%d").date()
            except (TypeError, ValueError):
                raise ValueError("date_of_birth must be in YYYY-MM-DD format")
        return attrs

    @staticmethod
    def get_children(parent_id):
        return ChildRepository.find_by_parent(parent_id)

    @staticmethod
    def get_owned_child(child_id, parent_id):
        """Another parent's child is indistinguishable from a missing one."""
        child = ChildRepository.find_by_id(child_id)
        if not child or child.parent_id != parent_id:
            raise NotFoundError("Child not found")
        return child

    @staticmethod
    def create_child(parent_id, data):
        parent = UserRepository.find_by_id(parent_id)
        if not parent or not parent.is_profile_complete():
            raise ProfileIncompleteError(
                "Complete your profile before adding children. Please fill in your "
                "first name, last name, email, and phone number in Account Settings."
            )
        missing = [f for f in REQUIRED_CHILD_FIELDS if not data.get(f)]
        if missing:
            raise MissingFieldsError(missing)

        attrs = ChildService._parse(data)
        attrs["parent_id"] = parent_id
        return ChildRepository.create(attrs)

    @staticmethod
    def update_child(child_id, parent_id, data):
        child = ChildService.get_owned_child(child_id, parent_id)
        attrs = ChildService._parse(data)
        cleared = [f for f in REQUIRED_CHILD_FIELDS if f in attrs and not attrs[f]]
        if cleared:
            raise MissingFieldsError(cleared)
        return ChildRepository.update(child, attrs)

    @staticmethod
    def delete_child(child_id, parent_id):
        child = ChildService.get_owned_child(child_id, parent_id)
        ChildRepository.delete(child)
