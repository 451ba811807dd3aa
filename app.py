"""
UQFF - Unified Quantum Field Force term engine
Flask application factory.

Serves the REST API for term evaluation, time-series runs and parameter
sweeps over the registered PhysicsTerm instances.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI
"""

__version__ = "0.1.0"

import logging

from flask import Flask, jsonify

from uqff.registry import build_default_registry
from data.systems import SystemCatalogue


def create_registry():
    """Build and populate the term registry."""
    return build_default_registry()


def create_app(registry=None, catalogue=None):
    """Application factory for the UQFF Flask app."""
    app = Flask(__name__)

    if registry is None:
        registry = create_registry()
    if catalogue is None:
        catalogue = SystemCatalogue()
    app.config["UQFF_REGISTRY"] = registry

    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry, catalogue)
    app.register_blueprint(api)

    # Root: version and registry overview
    @app.route("/")
    def root():
        return jsonify({
            "name": "uqff",
            "version": __version__,
            "terms": registry.count(),
            "categories": registry.categories(),
        })

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)
