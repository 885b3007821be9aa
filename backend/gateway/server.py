"""
API gateway: combines the auth, events and attendees blueprints.
This is the local entrypoint for development.
"""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from backend.attendees_service.routes import attendees_bp
from backend.auth_service.routes import auth_bp
from backend.auth_service.utils import TokenIssuer
from backend.config import Config
from backend.database.db_connection import Database
from backend.database.stores import Stores
from backend.events_service.routes import events_bp

API_PREFIX = "/api/v1"


def create_app(config: Optional[Config] = None, stores: Optional[Stores] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config (Config, optional): Settings; loaded from the environment if omitted.
        stores (Stores, optional): Pre-built stores; built on PostgreSQL if omitted.

    Returns:
        Flask: The configured Flask application.
    """
    config = config or Config.from_env()

    # Basic console logging during API requests
    logging.basicConfig(
        level=config.log_level,
        format="[%(levelname)s] %(asctime)s - %(message)s",
    )

    app = Flask(__name__)
    app.config["API_CONFIG"] = config

    CORS(app, resources={
        r"/*": {
            "origins": list(config.cors_origins),
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    app.extensions["stores"] = stores or Stores.from_database(Database(config))
    app.extensions["token_issuer"] = TokenIssuer(
        config.jwt_secret, config.token_expiration_minutes
    )

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(auth_bp, url_prefix=f"{API_PREFIX}/auth")
    app.register_blueprint(events_bp, url_prefix=f"{API_PREFIX}/events")
    app.register_blueprint(attendees_bp, url_prefix=API_PREFIX)
    logging.info("All blueprints registered successfully.")

    # --- JSON ERROR PAGES ---
    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        logging.exception(f"Unhandled error: {error}")
        return jsonify({"error": "Internal Server Error"}), 500

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["API_CONFIG"].port)
