# app/main.py
from __future__ import annotations

import eventlet

# ✅ PRECISA ser o primeiro comando do arquivo
eventlet.monkey_patch()

from app.app_factory import create_app  # noqa: E402
from app.infrastructure.realtime.socketio_server import socketio  # noqa: E402


app = create_app()

if __name__ == "__main__":
    # OBS: em produção use gunicorn com worker eventlet,
    # este bloco é só para execução direta.
    socketio.run(app, host="0.0.0.0", port=5000, debug=True)
