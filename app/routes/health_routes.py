from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.extensions import db, limiter
from app.utils.time import utcnow
import time

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
@limiter.exempt
def health_check():
    start = time.monotonic()
    try:
        db.session.execute(text("SELECT 1"))
        database = {"name": "database", "status": "healthy"}
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Database health check failed: {str(e)}")
        database = {"name": "database", "status": "unhealthy", "details": str(e)}
    database["response_time_ms"] = round((time.monotonic() - start) * 1000, 2)

    healthy = database["status"] == "healthy"
    return (
        jsonify(
            {
                "status": "healthy" if healthy else "unhealthy",
                "timestamp": utcnow().isoformat(),
                "checks": [database],
            }
        ),
        200 if healthy else 503,
    )
