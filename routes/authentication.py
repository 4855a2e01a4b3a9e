import secrets
from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError
from models.users import User
from models import db
from classes.progress_manager import ProgressManager
from classes.validators import normalize_email, validate_email, validate_password, validate_length
from utils import github_oauth
from utils.helpers import success_response, error_response, server_error, json_body, today
from utils.tokens import token_for_user
from utils.utils import login_required, current_user_id

auth_bp = Blueprint('auth_bp', __name__)


# Register
@auth_bp.route('/register', methods=['POST'])
def register():
    data = json_body()
    if not all(isinstance(data.get(field) or '', str) for field in ('name', 'email', 'password', 'institution')):
        return error_response("Name, email, password and institution must be strings", 400)

    name = (data.get('name') or '').strip()
    email = normalize_email(data.get('email'))
    password = data.get('password') or ''
    institution = data.get('institution') or None

    if not name or not email or not password:
        return error_response("Name, email and password are required", 400)

    try:
        validate_email(email)
        validate_length("Name", name, 100)
        validate_password(password, current_app.config["MIN_PASSWORD_LENGTH"])
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        if User.query.filter_by(email=email).first():
            return error_response("Email is already registered", 409)

        new_user = User(
            name=name,
            email=email,
            institution=institution,
            xp=0,
            streak=1,
            last_active_date=today(),
            auth_provider='email'
        )
        new_user.set_password(password)

        db.session.add(new_user)
        db.session.commit()
    except SQLAlchemyError as e:
        return server_error("Failed to register user", e)

    current_app.logger.info("Registered user %s", new_user.id)
    return success_response(
        "Registration successful",
        {"user": new_user.to_dict(), "token": token_for_user(new_user)},
        201,
    )

# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    if not all(isinstance(data.get(field) or '', str) for field in ('email', 'password')):
        return error_response("Email and password must be strings", 400)

    email = normalize_email(data.get("email"))
    password = data.get("password") or ''

    if not email or not password:
        return error_response("Email and password are required", 400)

    try:
        user = User.query.filter_by(email=email).first()
        if not user:
            return error_response("Invalid email or password", 401)

        if user.auth_provider == 'github' and not user.password_hash:
            return error_response("This account was registered with GitHub. Please sign in with GitHub.", 400)

        if not user.check_password(password):
            return error_response("Invalid email or password", 401)

        ProgressManager.record_activity(user)
        db.session.commit()
    except SQLAlchemyError as e:
        return server_error("Login failed", e)

    return success_response("Login successful", {"user": user.to_dict(), "token": token_for_user(user)})

# Current user
@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    user = db.session.get(User, current_user_id())
    if not user:
        return error_response("User not found", 404)
    return success_response(data={"user": user.to_dict()})

# Profile update
@auth_bp.route('/update', methods=['PUT'])
@login_required
def update_profile():
    data = json_body()
    name = data.get('name')
    institution = data.get('institution')
    avatar = data.get('avatar')

    if not all(isinstance(value, str) for value in (name, institution, avatar) if value is not None):
        return error_response("Name, institution and avatar must be strings", 400)

    name = (name or '').strip()
    if name:
        try:
            validate_length("Name", name, 100)
        except ValueError as e:
            return error_response(str(e), 400)

    try:
        user = db.session.get(User, current_user_id())
        if not user:
            return error_response("User not found", 404)

        if name:
            user.name = name
        if 'institution' in data:
            user.institution = institution or None
        if avatar:
            user.avatar = avatar

        db.session.commit()
    except SQLAlchemyError as e:
        return server_error("Failed to update profile", e)

    return success_response("Profile updated", {"user": user.to_dict()})


#                                                         GITHUB OAUTH
#_____________________________________________________________________________________________________________
@auth_bp.route('/github', methods=['GET'])
def github_login():
    if not github_oauth.is_configured():
        return error_response("GitHub OAuth is not configured", 503)

    url = github_oauth.authorize_url(secrets.token_urlsafe(8))
    return success_response(data={"url": url})


@auth_bp.route('/github/callback', methods=['POST'])
def github_callback():
    data = json_body()
    code = data.get('code')

    if not code:
        return error_response("Authorization code is required", 400)
    if not github_oauth.is_configured():
        return error_response("GitHub OAuth is not configured", 503)

    access_token = github_oauth.get_access_token(code)
    if not access_token:
        return error_response("Could not get an access token from GitHub", 400)

    github_user = github_oauth.get_user(access_token)
    if not github_user or github_user.get("id") is None:
        return error_response("Could not fetch the GitHub profile", 400)

    email = github_user.get("email") or github_oauth.get_primary_email(access_token)
    if not email:
        return error_response("Could not read a GitHub email. Make it public or grant email access.", 400)
    email = normalize_email(email)

    github_id = str(github_user.get("id"))
    github_username = github_user.get("login")
    name = github_user.get("name") or github_username
    avatar = github_user.get("avatar_url")

    try:
        # Returning GitHub user
        user = User.query.filter_by(github_id=github_id).first()
        if user:
            user.avatar = avatar or user.avatar
            user.github_username = github_username
            ProgressManager.record_activity(user)
            db.session.commit()
            return success_response(
                "Signed in with GitHub",
                {"user": user.to_dict(), "token": token_for_user(user), "isNewUser": False},
            )

        # Existing email account: link it
        user = User.query.filter_by(email=email).first()
        if user:
            if user.github_id:
                return error_response("This email is already linked to another GitHub account", 400)

            user.github_id = github_id
            user.github_username = github_username
            user.avatar = avatar or user.avatar
            ProgressManager.record_activity(user)
            db.session.commit()
            return success_response(
                "GitHub account linked",
                {"user": user.to_dict(), "token": token_for_user(user), "isNewUser": False},
            )

        new_user = User(
            name=name,
            email=email,
            github_id=github_id,
            github_username=github_username,
            avatar=avatar,
            xp=0,
            streak=1,
            last_active_date=today(),
            auth_provider='github'
        )
        db.session.add(new_user)
        db.session.commit()
    except SQLAlchemyError as e:
        return server_error("GitHub sign-in failed", e)

    current_app.logger.info("Registered GitHub user %s", new_user.id)
    return success_response(
        "Registered with GitHub",
        {"user": new_user.to_dict(), "token": token_for_user(new_user), "isNewUser": True},
        201,
    )
