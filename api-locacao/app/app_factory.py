# app/app_factory.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from app.config.settings import settings
from app.config.flask_config import configure_app
from app.config.logging_config import configure_logging
from app.api.routes import register_routes
from app.api.middlewares.error_handler import register_error_handlers
from app.infrastructure.database.session import init_db
from app.infrastructure.realtime.socketio_server import socketio

import app.infrastructure.database.models  # noqa: F401


# -------------------------
# Prefixos (subpath)
# -------------------------
APP_PREFIX = settings.app_prefix.rstrip("/")
API_PREFIX = f"{APP_PREFIX}/api"
SOCKET_PREFIX = f"{APP_PREFIX}/socket.io"


def create_app() -> Flask:
    configure_logging()

    app = Flask(__name__)

    # ✅ CORS aplicado cedo (antes das rotas lidarem com OPTIONS)
    CORS(
        app,
        resources={rf"{API_PREFIX}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)

    register_routes(app, api_prefix=API_PREFIX, app_prefix=APP_PREFIX)

    register_error_handlers(app)

    if settings.db_create_all:
        init_db()

    # ✅ Socket.IO no subpath (eventos product:*)
    socketio.init_app(app, path=SOCKET_PREFIX)

    return app
