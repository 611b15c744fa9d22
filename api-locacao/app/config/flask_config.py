from flask import Flask

from app.config.settings import settings


def configure_app(app: Flask) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.json.sort_keys = False
    # margem para o envelope multipart além do limite do arquivo
    app.config["MAX_CONTENT_LENGTH"] = (max(1, settings.max_file_size_mb) + 1) * 1024 * 1024
