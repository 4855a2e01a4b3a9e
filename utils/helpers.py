from datetime import date, datetime, timezone
from flask import abort, current_app, jsonify, request
from models import db

XP_PER_LEVEL = 200


def success_response(message=None, data=None, status=200):
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def error_response(message, status, error=None):
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return jsonify(body), status


def json_body():
    """The request's JSON object. A missing or unparsable body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description="Request body must be a JSON object")
    return data


def today():
    return date.today()


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat()


def calculate_level(xp):
    return (xp or 0) // XP_PER_LEVEL + 1


def server_error(message, e):
    """Roll back the request's session, log the traceback and answer 500.

    Only the exception class reaches the client; database errors carry the
    statement and its parameters.
    """
    db.session.rollback()
    current_app.logger.exception(message)
    return error_response(message, 500, e.__class__.__name__)
