import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.infrastructure.database.session import db_session

logger = logging.getLogger(__name__)

bp_health = Blueprint("health", __name__)


@bp_health.get("")
def health():
    return jsonify({"status": "ok", "service": "api-locacao"}), 200


@bp_health.get("/db")
def health_db():
    try:
        with db_session() as session:
            session.execute(text("select 1"))
    except SQLAlchemyError as e:
        logger.error("Health check do banco falhou: %s", e)
        return jsonify({"db": "error"}), 503
    return jsonify({"db": "ok"}), 200
