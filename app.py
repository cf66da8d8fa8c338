#!/usr/bin/env python3
"""
Forensic Correlation Web API

Flask app exposing the record store, cross-document discoveries and
cross-session entity correlations to the dashboard views.
"""

from flask import Flask, jsonify

from config import WEB_PORT
from correlation.result import Err
from routes import records_bp, correlations_bp, rollups_bp
from routes.helpers import error_response, run_core, store


def create_app() -> Flask:
    """Build the Flask app with every blueprint registered."""
    app = Flask(__name__)
    app.register_blueprint(records_bp)
    app.register_blueprint(correlations_bp)
    app.register_blueprint(rollups_bp)

    @app.route("/")
    def index():
        result = run_core(store().get_all_results())
        if isinstance(result, Err):
            return error_response(result.reason, 500)
        return jsonify({"status": "ok", "records": len(result.value)})

    return app


app = create_app()


if __name__ == "__main__":
    print(f"[App] Serving on port {WEB_PORT}")
    app.run(host="127.0.0.1", port=WEB_PORT, debug=False)
