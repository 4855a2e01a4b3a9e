from flask import Blueprint, current_app
from utils.ai_service import (
    AIServiceError,
    ROADMAP_FIELDS,
    SUGGESTED_MODELS,
    build_roadmap_prompt,
    chat_completion,
    extract_json_block,
)
from utils.helpers import success_response, error_response, json_body

ai_bp = Blueprint("ai", __name__)


def _ai_error(e):
    return error_response(e.message, e.status, e.detail)


@ai_bp.route("/models", methods=["GET"])
def list_models():
    return success_response(data={"models": SUGGESTED_MODELS, "default": current_app.config["OPENROUTER_DEFAULT_MODEL"]})


@ai_bp.route("/chat", methods=["POST"])
def chat():
    data = json_body()
    message = data.get("message")
    model = data.get("model")

    if not message or not isinstance(message, str) or not message.strip():
        return error_response("Message cannot be empty", 400)

    try:
        reply, used_model = chat_completion(message, model)
    except AIServiceError as e:
        return _ai_error(e)

    return success_response(data={"reply": reply, "model": used_model})


@ai_bp.route("/roadmap", methods=["POST"])
def roadmap():
    data = json_body()

    missing = [field for field in ROADMAP_FIELDS if not isinstance(data.get(field), str) or not data[field].strip()]
    if missing:
        return error_response("Missing roadmap fields", 400, ", ".join(missing))

    prompt = build_roadmap_prompt(data)
    try:
        reply, used_model = chat_completion(prompt, data.get("model"))
    except AIServiceError as e:
        return _ai_error(e)

    return success_response(data={
        "reply": reply,
        "model": used_model,
        "roadmap": extract_json_block(reply),
    })
