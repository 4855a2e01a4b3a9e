import logging
from urllib.parse import urlencode

import requests
from flask import current_app

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"
API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


def is_configured():
    config = current_app.config
    return bool(config.get("GITHUB_CLIENT_ID") and config.get("GITHUB_CLIENT_SECRET"))


def authorize_url(state):
    params = {
        "client_id": current_app.config["GITHUB_CLIENT_ID"],
        "redirect_uri": f"{current_app.config['FRONTEND_URL'].rstrip('/')}/auth/github/callback",
        "scope": "user:email read:user",
        "state": state,
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def get_access_token(code):
    try:
        response = requests.post(
            TOKEN_URL,
            json={
                "client_id": current_app.config["GITHUB_CLIENT_ID"],
                "client_secret": current_app.config["GITHUB_CLIENT_SECRET"],
                "code": code,
            },
            headers={"Accept": "application/json"},
            timeout=current_app.config["GITHUB_TIMEOUT"],
        )
        return response.json().get("access_token")
    except (requests.RequestException, ValueError) as e:
        logger.warning("GitHub token exchange failed: %s", e)
        return None


def _get(path, access_token):
    try:
        response = requests.get(
            f"{API_URL}{path}",
            headers={"Authorization": f"Bearer {access_token}", "Accept": GITHUB_ACCEPT},
            timeout=current_app.config["GITHUB_TIMEOUT"],
        )
        if not response.ok:
            return None
        return response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("GitHub request %s failed: %s", path, e)
        return None


def get_user(access_token):
    return _get("/user", access_token)


def get_primary_email(access_token):
    emails = _get("/user/emails", access_token)
    if not emails:
        return None
    for entry in emails:
        if entry.get("primary") and entry.get("verified"):
            return entry.get("email")
    return emails[0].get("email")
