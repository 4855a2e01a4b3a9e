from flask import current_app, g
import datetime
import jwt

ALGORITHM = "HS256"


def get_jwt_token(user_data, expires_in=None):
    """Generate JWT token with user payload"""
    if not user_data:
        raise ValueError("User data must be provided to generate JWT token")

    if expires_in is None:
        expires_in = datetime.timedelta(days=current_app.config["JWT_EXPIRES_DAYS"])

    expiration = datetime.datetime.now(datetime.timezone.utc) + expires_in
    payload = {"exp": expiration, **user_data}

    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=ALGORITHM)


def token_for_user(user):
    return get_jwt_token({"userId": user.id, "email": user.email})


def decode_jwt(token):
    """Decode and validate JWT token and store user in `g`."""
    try:
        payload = jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        current_app.logger.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError:
        current_app.logger.info("Rejected invalid token")
        return None

    g.user = payload
    return payload
