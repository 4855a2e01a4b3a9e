from flask import Blueprint
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload
from models import db
from models.discussions import ModuleDiscussion
from classes.validators import validate_string_list
from utils.helpers import success_response, error_response, server_error, json_body
from utils.utils import login_required, current_user_id

discussion_bp = Blueprint("discussions", __name__)


# Fetch a module's messages, oldest first
@discussion_bp.route("/<module_id>", methods=["GET"])
def get_messages(module_id):
    try:
        messages = (
            ModuleDiscussion.query
            .options(joinedload(ModuleDiscussion.user))
            .filter_by(module_id=module_id)
            .order_by(ModuleDiscussion.created_at.asc(), ModuleDiscussion.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        return server_error("Failed to get discussions", e)

    return success_response(data=[message.to_dict() for message in messages])


@discussion_bp.route("/<module_id>", methods=["POST"])
@login_required
def post_message(module_id):
    data = json_body()
    content = data.get("content")

    try:
        images = validate_string_list("images", data.get("images"))
    except ValueError as e:
        return error_response(str(e), 400)

    if content is not None and not isinstance(content, str):
        return error_response("content must be a string", 400)
    if not content and not images:
        return error_response("Message must have content or images", 400)

    try:
        message = ModuleDiscussion(
            module_id=module_id,
            user_id=current_user_id(),
            content=content or None,
            images=images,
        )
        db.session.add(message)
        db.session.commit()
    except SQLAlchemyError as e:
        return server_error("Failed to send message", e)

    return success_response("Message sent successfully", message.to_dict(), 201)


@discussion_bp.route("/<module_id>/<int:message_id>", methods=["DELETE"])
@login_required
def delete_message(module_id, message_id):
    try:
        message = ModuleDiscussion.query.filter_by(id=message_id, module_id=module_id).first()
        if not message:
            return error_response("Message not found", 404)

        if message.user_id != current_user_id():
            return error_response("You can only delete your own messages", 403)

        db.session.delete(message)
        db.session.commit()
    except SQLAlchemyError as e:
        return server_error("Failed to delete message", e)

    return success_response("Message deleted successfully")
