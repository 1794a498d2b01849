"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import Namespace, fields

transaction_ns = Namespace("transactions", description="Transaction token operations")

# =============================================================================
# Request Models
# =============================================================================

register_request = transaction_ns.model(
    "RegisterRequest",
    {
        "path": fields.String(
            required=True,
            min_length=1,
            description="Absolute path of the file on the server",
            example="/tmp/report.pdf",
        ),
        "access_key": fields.String(
            required=True,
            description="Secret required to retrieve the file",
            example="k1",
        ),
        "ttl": fields.Integer(
            required=False,
            description="Token lifetime in seconds (server default if omitted)",
            min=1,
            example=60,
        ),
    },
)

resource_request = transaction_ns.model(
    "ResourceRequest",
    {
        "identifier": fields.String(
            required=True,
            min_length=1,
            description="Identifier of the resource, unique across the system",
            example="invoice:2024:0042",
        ),
        "access_key": fields.String(
            required=True,
            description="Secret required to check the authorization",
            example="k1",
        ),
        "ttl": fields.Integer(
            required=False,
            description="Token lifetime in seconds (server default if omitted)",
            min=1,
            example=60,
        ),
    },
)

# =============================================================================
# Response Models
# =============================================================================

token_response = transaction_ns.model(
    "TokenResponse",
    {
        "token": fields.String(description="Transaction token"),
        "expires_in": fields.Integer(description="Seconds until the token expires"),
    },
)

authorization_response = transaction_ns.model(
    "AuthorizationResponse",
    {
        "authorized": fields.Boolean(description="Whether the access key is accepted"),
    },
)

blob_response = transaction_ns.model(
    "BlobResponse",
    {
        "mime_type": fields.String(description="Detected content type"),
        "data": fields.String(description="Base64 encoded file content"),
    },
)

error_reason = transaction_ns.model(
    "ErrorReason",
    {
        "code": fields.Integer(description="Stable numeric error code"),
        "name": fields.String(description="Error code name"),
        "message": fields.String(description="Human readable detail"),
    },
)

error_response = transaction_ns.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error code name, lowercase"),
        "code": fields.Integer(description="Primary numeric error code"),
        "title": fields.String(description="User-friendly error title"),
        "message": fields.String(description="User-friendly error message"),
        "action": fields.String(description="Suggested action for the user"),
        "reasons": fields.List(fields.Nested(error_reason)),
    },
)
