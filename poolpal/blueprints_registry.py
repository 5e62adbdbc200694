import importlib
import logging

logger = logging.getLogger(__name__)

# (import path, url prefix, description)
BLUEPRINTS = (
    ('poolpal.routes.pool_routes.pool_bp', None, 'Pool Page'),
    ('poolpal.blueprints.api.public.public_api_bp', '/api/public', 'Public API'),
)


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    registered = []
    for import_path, url_prefix, description in BLUEPRINTS:
        module_path, bp_name = import_path.rsplit('.', 1)
        blueprint = getattr(importlib.import_module(module_path), bp_name)
        if url_prefix:
            app.register_blueprint(blueprint, url_prefix=url_prefix)
        else:
            app.register_blueprint(blueprint)
        registered.append(description)

    logger.debug("Registered blueprints: %s", ", ".join(registered))
    return registered
