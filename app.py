import os
import logging
from dotenv import load_dotenv
load_dotenv()
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from config import config_dict, ProdConfig
from models import db
from routes.authentication import auth_bp
from routes.progress import progress_bp
from routes.ai import ai_bp
from routes.discussions import discussion_bp
from routes.health import health_bp
from utils.helpers import error_response

migrate = Migrate()


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return error_response(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return error_response("Internal server error", 500, e.__class__.__name__)


def create_app(env=None):
    app = Flask(__name__)

    env = (env or os.environ.get("FLASK_ENV", "production")).lower()
    app.config.from_object(config_dict.get(env, ProdConfig))
    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    db.init_app(app)
    migrate.init_app(app, db)

    @app.route('/')
    def home():
        return {
            "message": "Welcome to Techroot API",
            "version": "1.0.0",
            "docs": "/health",
        }

    app.register_blueprint(health_bp, url_prefix='/health')
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(progress_bp, url_prefix='/api/progress')
    app.register_blueprint(ai_bp, url_prefix='/api/ai')
    app.register_blueprint(discussion_bp, url_prefix='/api/discussions')

    register_error_handlers(app)

    app.logger.info("Environment: %s, database: %s", env, app.config["SQLALCHEMY_DATABASE_URI"].split(":", 1)[0])
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config.get('DEBUG', False), port=int(os.environ.get("PORT", 5000)))
