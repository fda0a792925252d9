import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from app.extensions import db


def create_tables():
    app = create_app()
    with app.app_context():
        db.create_all()
        print(f"Created database tables: {', '.join(sorted(db.metadata.tables))}")


if __name__ == "__main__":
    create_tables()
