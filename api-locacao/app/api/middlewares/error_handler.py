import logging

from flask import Flask, jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from app.core.exceptions import AppError, ValidationError
from app.config.settings import settings

logger = logging.getLogger(__name__)


def _pydantic_details(err: PydanticValidationError) -> list[dict]:
    details = []
    for e in err.errors():
        field = ".".join(str(p) for p in e.get("loc", ())) or None
        message = str(e.get("msg", ""))
        # "Value error, <msg>" -> "<msg>"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"field": field, "message": message})
    return details


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        body = {"error": str(err)}
        if err.details:
            body["details"] = err.details
        return jsonify(body), err.status_code

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            logger.error("AppError %s: %s", err.status_code, err)
        return jsonify({"error": str(err)}), err.status_code

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_error(err: PydanticValidationError):
        details = _pydantic_details(err)
        # mensagem do único campo inválido vai direto pro front
        message = details[0]["message"] if len(details) == 1 else "Dados inválidos"
        return jsonify({"error": message, "details": details}), 400

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(err: RequestEntityTooLarge):
        # corpo acima de MAX_CONTENT_LENGTH: mesmo 400 do limite de imagem
        return jsonify({"error": f"Arquivo excede o limite de {settings.max_file_size_mb}MB."}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("Erro não tratado: %s", err)

        if settings.debug:
            return jsonify({"error": str(err)}), 500  # ✅ mostra a msg em dev

        return jsonify({"error": "Internal server error"}), 500
