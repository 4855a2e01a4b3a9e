from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from models import db
from utils.helpers import utc_now_iso

health_bp = Blueprint("health", __name__)


@health_bp.route("", methods=["GET"])
def health():
    error = None
    try:
        db.session.execute(text("SELECT 1"))
        connected = True
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.warning("Database health check failed: %s", e)
        connected = False
        error = str(e.__class__.__name__)

    return {
        "status": "ok" if connected else "degraded",
        "timestamp": utc_now_iso(),
        "config": {
            "env_loaded": True,
            "database": db.engine.url.get_backend_name(),
            "ai_configured": bool(current_app.config.get("OPENROUTER_API_KEY")),
        },
        "database": {
            "connected": connected,
            "message": "Connected to the database" if connected else "Could not connect to the database",
            "error": error,
        },
    }
