"""
API v1 - Secure Download REST API

This module contains the versioned API endpoints with OpenAPI/Swagger documentation.
"""

import os

from flask import Blueprint
from flask_restx import Api

# Get API version from environment
API_VERSION = os.getenv("API_VERSION", "v1")


def create_api_blueprint() -> Blueprint:
    """
    Create the API v1 blueprint with its Flask-RESTX Api.

    A new blueprint is built per application so several apps (tests)
    can coexist in one process.

    Returns:
        Blueprint mounted at /api/<version>
    """
    # Import namespaces here to register their routes
    from .namespaces import transaction_ns

    api_v1_bp = Blueprint("api_v1", __name__, url_prefix=f"/api/{API_VERSION}")

    api = Api(
        api_v1_bp,
        version="1.0",
        title="Secure Download API",
        description="Short-lived, access-key gated tokens for registered files and resources",
        doc="/docs",  # Swagger UI will be available at /api/v1/docs
    )
    api.add_namespace(transaction_ns, path="/transactions")

    return api_v1_bp
