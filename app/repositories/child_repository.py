from typing import List, Optional
from app.extensions import db
from app.models import Child


class ChildRepository:
    @staticmethod
    def find_by_id(child_id: str) -> Optional[Child]:
        return Child.query.filter_by(id=child_id).first()

    @staticmethod
    def find_by_parent(parent_id: str) -> List[Child]:
        return Child.query.filter_by(parent_id=parent_id).order_by(Child.first_name).all()

    @staticmethod
    def create(attrs) -> Child:
        child = Child(**attrs)
        db.session.add(child)
        db.session.commit()
        return child

    @staticmethod
    def update(child: Child, attrs: dict) -> Child:
        for key, value in attrs.items():
            if hasattr(child, key):
                setattr(child, key, value)
        db.session.commit()
        return child

    @staticmethod
    def delete(child: Child):
        db.session.delete(child)
        db.session.commit()
