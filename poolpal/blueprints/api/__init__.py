"""Public JSON API blueprints."""
