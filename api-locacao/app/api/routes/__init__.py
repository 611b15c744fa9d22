# app/api/routes/__init__.py

from flask import Flask

from app.api.routes.health_routes import bp_health
from app.api.routes.product_routes import bp_prod
from app.api.routes.contract_routes import bp_contracts


def register_routes(app: Flask, *, api_prefix: str, app_prefix: str) -> None:
    # health fora de /api (mas dentro do app)
    app.register_blueprint(bp_health, url_prefix=f"{app_prefix}/health")

    app.register_blueprint(bp_prod, url_prefix=f"{api_prefix}/products")
    app.register_blueprint(bp_contracts, url_prefix=f"{api_prefix}/contracts")
