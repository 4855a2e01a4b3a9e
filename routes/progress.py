from flask import Blueprint
from sqlalchemy.exc import SQLAlchemyError
from models import db
from models.users import User
from classes.progress_manager import ProgressManager
from classes.validators import (
    validate_progress_key,
    validate_non_negative_int,
    validate_string_list,
    optional_string,
)
from utils.badge_service import list_badges
from utils.helpers import success_response, error_response, server_error, json_body, calculate_level
from utils.utils import login_required, current_user_id

progress_bp = Blueprint("progress", __name__)


def _user_missing(user_id):
    return db.session.get(User, user_id) is None


# Fetch progress summary
@progress_bp.route("", methods=["GET"])
@progress_bp.route("/", methods=["GET"])
@login_required
def get_progress():
    user_id = current_user_id()

    try:
        user = db.session.get(User, user_id)
        if not user:
            return error_response("User not found", 404)

        progress = ProgressManager.get_progress(user_id)
        badges = list_badges(user_id)
    except SQLAlchemyError as e:
        return server_error("Failed to get progress", e)

    xp = user.xp or 0
    return success_response(data={
        "completed_lessons": list(progress.completed_lessons or []) if progress else [],
        "completed_modules": list(progress.completed_modules or []) if progress else [],
        "current_path": progress.current_path if progress else None,
        "current_module": progress.current_module if progress else None,
        "current_lesson": progress.current_lesson if progress else None,
        "xp": xp,
        "streak": user.streak or 0,
        "last_active_date": user.to_dict()["last_active_date"],
        "level": calculate_level(xp),
        "badges": badges,
    })


def _complete(field, key_name, label):
    data = json_body()

    try:
        key = validate_progress_key(key_name, data.get(key_name))
        xp_reward = validate_non_negative_int("xp_reward", data.get("xp_reward"), default=0)
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        if _user_missing(current_user_id()):
            return error_response("User not found", 404)
        completed, xp_added, new_badges, already_completed = ProgressManager.complete(current_user_id(), field, key, xp_reward)
    except SQLAlchemyError as e:
        return server_error(f"Failed to complete {label}", e)

    if already_completed:
        message = f"{label.capitalize()} already completed"
    else:
        message = f"{label.capitalize()} completed"

    return success_response(message, {field: completed, "xp_added": xp_added, "new_badges": new_badges})


# Mark a lesson complete
@progress_bp.route("/lesson", methods=["POST"])
@login_required
def complete_lesson():
    return _complete("completed_lessons", "lesson_key", "lesson")


# Mark a module complete
@progress_bp.route("/module", methods=["POST"])
@login_required
def complete_module():
    return _complete("completed_modules", "module_key", "module")


# Current position
@progress_bp.route("/current", methods=["PUT"])
@login_required
def update_current():
    data = json_body()

    try:
        if _user_missing(current_user_id()):
            return error_response("User not found", 404)
        progress, created = ProgressManager.set_current(
            current_user_id(),
            optional_string(data.get("current_path")),
            optional_string(data.get("current_module")),
            optional_string(data.get("current_lesson")),
        )
    except SQLAlchemyError as e:
        return server_error("Failed to update current position", e)

    message = "Current position created" if created else "Current position updated"
    return success_response(message, progress.to_dict())


# Bulk sync from the client's local copy
@progress_bp.route("/sync", methods=["POST"])
@login_required
def sync_progress():
    data = json_body()

    try:
        completed_lessons = validate_string_list("completed_lessons", data.get("completed_lessons"))
        completed_modules = validate_string_list("completed_modules", data.get("completed_modules"))
        xp = validate_non_negative_int("xp", data.get("xp"))
        streak = validate_non_negative_int("streak", data.get("streak"))
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        if _user_missing(current_user_id()):
            return error_response("User not found", 404)
        progress, _ = ProgressManager.sync(
            current_user_id(),
            completed_lessons,
            completed_modules,
            optional_string(data.get("current_path")),
            optional_string(data.get("current_module")),
            optional_string(data.get("current_lesson")),
            xp=xp,
            streak=streak,
        )
    except SQLAlchemyError as e:
        return server_error("Failed to sync progress", e)

    return success_response("Progress synced successfully", progress.to_dict())
