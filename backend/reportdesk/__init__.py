import logging
import os

import click
from flask import Flask, current_app, send_file, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .middleware.auth_middleware import auth_middleware
from .errors import register_error_handlers
from .utils.media import bucket_root


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    auth_middleware(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # Stored files (local buckets)
    # -------------------------------------------------
    storage_url = app.config.get("STORAGE_PUBLIC_URL", "/storage").rstrip("/")
    if storage_url.startswith("/"):
        @app.route(f"{storage_url}/<bucket>/<path:path>", methods=["GET"], endpoint="storage")
        def serve_storage(bucket, path):
            return send_from_directory(bucket_root(bucket), path)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/reportdesk.yaml", methods=["GET"], endpoint="openapi_reportdesk")
    def serve_openapi():
        spec_path = os.path.join(current_app.root_path, "api", "v1", "openapi.yaml")

        if not os.path.exists(spec_path):
            raise FileNotFoundError("openapi.yaml not found")

        return send_file(spec_path, mimetype="application/yaml", as_attachment=False)

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/reportdesk.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Reportdesk API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    register_commands(app)

    return app


def register_commands(app):
    @app.cli.command("seed-super-admin")
    @click.option("--email", required=True)
    @click.option("--password", required=True)
    @click.option("--full-name", default=None)
    def seed_super_admin(email, password, full_name):
        """Create the first super admin (nobody else can grant roles)."""
        from .application.users.accounts import register_profile
        from .domain.roles import Role

        profile = register_profile(
            data={"email": email, "password": password, "full_name": full_name},
            role=Role.SUPER_ADMIN,
        )
        click.echo(f"Super admin {profile.email} created ({profile.id})")
