from functools import wraps
from flask import request, g
from utils.helpers import error_response
from utils.tokens import decode_jwt


def bearer_token():
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None
    return parts[1]


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = bearer_token()
        if not token:
            return error_response("Token required", 401)

        decoded = decode_jwt(token)
        if not decoded or decoded.get("userId") is None:
            return error_response("Invalid token", 403)

        g.user = decoded
        return f(*args, **kwargs)

    return decorated_function


def current_user_id():
    return g.user.get("userId")
