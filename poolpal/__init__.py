import logging
from typing import Any

from flask import Flask, jsonify

from .blueprints_registry import register_blueprints
from .config import ENV_DIAGNOSTICS, is_default_secret
from .extensions import csrf, limiter
from .logging_config import configure_logging
from .resilience import register_resilience_handlers
from .utils.advisory_sessions import init_advisory_sessions

logger = logging.getLogger(__name__)


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder="static", static_url_path="/static")

    _load_base_config(app, config)

    csrf.init_app(app)
    _configure_rate_limiter(app)

    register_blueprints(app)
    _register_template_context(app)
    _add_core_routes(app)
    configure_logging(app)
    register_resilience_handlers(app)
    init_advisory_sessions(app)

    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None) -> None:
    app.config.from_object("poolpal.config.Config")
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)

    if app.config.get("TESTING"):
        app.config.setdefault("WTF_CSRF_ENABLED", False)

    if app.config.get("ENV") == "production" and is_default_secret(app.config.get("SECRET_KEY")):
        raise RuntimeError("FLASK_SECRET_KEY must be set in production.")
    if not app.config.get("GOOGLE_AI_API_KEY"):
        logger.warning("GOOGLE_AI_API_KEY is not configured; dosage advice requests will fail.")


def _configure_rate_limiter(app: Flask) -> None:
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI") or "memory://"
    app.config["RATELIMIT_STORAGE_URI"] = storage_uri
    limiter.init_app(app)

    if app.config.get("ENV") == "production" and storage_uri.startswith("memory://"):
        logger.warning("Rate limiter uses in-process memory storage; limits are per worker.")


def _register_template_context(app: Flask) -> None:
    from .services.dosage_advice import TARGET_CHLORINE, TARGET_PH
    from .services.tools.pool_calculator import IDEAL_RANGES
    from .utils.messages import active_locale, catalog

    @app.context_processor
    def _inject_pool_context():
        return {
            "t": catalog(),
            "locale": active_locale(),
            "ideal_ranges": IDEAL_RANGES,
            "target_chlorine": TARGET_CHLORINE,
            "target_ph": TARGET_PH,
        }


def _add_core_routes(app: Flask) -> None:
    """Add core application routes"""

    @app.route("/healthz")
    @limiter.exempt
    def healthz():
        return jsonify({"status": "ok"})
