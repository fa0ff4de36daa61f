"""Flask error handlers for services that embed the Casdoor SDK."""
from http import HTTPStatus

from flask import jsonify

from casdoor_sdk.core.exceptions import CasdoorError


def casdoor_error_response(error: CasdoorError):
    """Build the JSON response for a CasdoorError, keeping its status code."""
    try:
        status = HTTPStatus(error.status_code)
    except ValueError:
        status = HTTPStatus.INTERNAL_SERVER_ERROR
    if status < 400:
        status = HTTPStatus.INTERNAL_SERVER_ERROR
    return jsonify({"error": status.phrase, "message": error.message}), int(status)


def register_error_handlers(app):
    """Register CasdoorError handling with the Flask app."""

    @app.errorhandler(CasdoorError)
    def handle_casdoor_error(error):
        """Handle any SDK failure raised inside a view."""
        if error.status_code >= 500:
            app.logger.error("Casdoor call failed: %r", error)
        else:
            app.logger.warning("Casdoor call rejected: %r", error)
        return casdoor_error_response(error)
