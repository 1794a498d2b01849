"""
API Namespaces - Organized endpoint groups
"""

from typing import Dict, List

from flask import current_app, request, send_file
from flask_restx import Resource

from ...domain.errors import (
    ErrorCode,
    ErrorRecord,
    TransactionRejectedError,
    TransactionStoreError,
    create_error_response,
)
from .models import (
    authorization_response,
    blob_response,
    error_response,
    register_request,
    resource_request,
    token_response,
    transaction_ns,
)

ACCESS_KEY_HEADER = "X-Access-Key"

# HTTP status for a rejection, keyed by its primary error code
RETRIEVAL_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.UNKNOWN: 503,
    ErrorCode.DOCUMENT_EXPIRED: 410,
    ErrorCode.INVALID_STORED_TYPE: 422,
    ErrorCode.INVALID_ACCESS_KEY: 403,
    ErrorCode.INVALID_PATH: 404,
}

REGISTRATION_STATUS: Dict[ErrorCode, int] = {
    **RETRIEVAL_STATUS,
    ErrorCode.INVALID_PATH: 400,
}


def _rejection_response(reasons: List[ErrorRecord], statuses: Dict[ErrorCode, int]):
    code = reasons[0].code if reasons else ErrorCode.UNKNOWN
    return create_error_response(code, reasons, status_code=statuses.get(code, 400))


def _store_unavailable(token: str, error: TransactionStoreError):
    current_app.logger.error(f"[TRANSACTIONS] Store unavailable for token {token[:8]}: {error}")
    return create_error_response(
        ErrorCode.UNKNOWN,
        [ErrorRecord(ErrorCode.UNKNOWN, "Transaction store unavailable.")],
        status_code=503,
    )


def _access_key() -> str:
    return request.headers.get(ACCESS_KEY_HEADER, "")


def _register(registration):
    data = request.get_json()
    result = registration(data.get("access_key", ""), data.get("ttl"))
    if not result.success:
        current_app.logger.warning(
            f"[TRANSACTIONS] Registration rejected: {result.error_code.name}"
        )
        return _rejection_response(result.errors, REGISTRATION_STATUS)

    current_app.logger.info(f"[TRANSACTIONS] Issued token {result.token[:8]}")
    return {"token": result.token, "expires_in": result.ttl_seconds}, 201


# =============================================================================
# Transaction Namespace - Token registration and retrieval
# =============================================================================


@transaction_ns.route("")
class TransactionList(Resource):
    """Register files"""

    @transaction_ns.doc("register_file")
    @transaction_ns.expect(register_request, validate=True)
    @transaction_ns.response(201, "Token issued", token_response)
    @transaction_ns.response(400, "Invalid path", error_response)
    @transaction_ns.response(503, "Store unavailable", error_response)
    def post(self):
        """
        Register a file and get a token for it

        The token and the access key are both required to download the file
        until the token expires.
        """
        path = request.get_json()["path"]
        return _register(
            lambda access_key, ttl: current_app.token_broker.register(path, access_key, ttl)
        )


@transaction_ns.route("/resources")
class ResourceList(Resource):
    """Pre-authorize opaque resources"""

    @transaction_ns.doc("pre_authorize_resource")
    @transaction_ns.expect(resource_request, validate=True)
    @transaction_ns.response(201, "Token issued", token_response)
    @transaction_ns.response(503, "Store unavailable", error_response)
    def post(self):
        """
        Pre-authorize a resource identifier and get a token for it
        """
        identifier = request.get_json()["identifier"]
        return _register(
            lambda access_key, ttl: current_app.token_broker.pre_authorize(identifier, access_key, ttl)
        )


@transaction_ns.route("/<string:token>")
@transaction_ns.param("token", "The transaction token")
class TransactionItem(Resource):
    """Invalidate a token"""

    @transaction_ns.doc("invalidate_transaction")
    @transaction_ns.response(204, "Token invalidated")
    @transaction_ns.response(403, "Invalid access key", error_response)
    @transaction_ns.response(410, "Token expired", error_response)
    def delete(self, token):
        """
        Invalidate a token

        Requires the access key in the X-Access-Key header. Further
        requests with this token will report it as expired.
        """
        try:
            result = current_app.token_broker.invalidate_transaction(token, _access_key())
        except TransactionStoreError as e:
            return _store_unavailable(token, e)

        if not result.granted:
            current_app.logger.warning(
                f"[TRANSACTIONS] Invalidation rejected for token {token[:8]}: {result.error_code.name}"
            )
            return _rejection_response(result.errors, RETRIEVAL_STATUS)

        current_app.logger.info(f"[TRANSACTIONS] Invalidated token {token[:8]}")
        return "", 204


@transaction_ns.route("/<string:token>/authorization")
@transaction_ns.param("token", "The transaction token")
class TransactionAuthorization(Resource):
    """Check an access key"""

    @transaction_ns.doc("check_authorization")
    @transaction_ns.response(200, "Success", authorization_response)
    @transaction_ns.response(503, "Store unavailable", error_response)
    def get(self, token):
        """
        Check whether the access key grants access to the token
        """
        try:
            authorized = current_app.token_broker.check_authorization(token, _access_key())
        except TransactionStoreError as e:
            return _store_unavailable(token, e)

        return {"authorized": authorized}, 200


@transaction_ns.route("/<string:token>/file")
@transaction_ns.param("token", "The transaction token")
class TransactionFile(Resource):
    """Download a registered file"""

    @transaction_ns.doc("download_file")
    @transaction_ns.response(200, "File content")
    @transaction_ns.response(403, "Invalid access key", error_response)
    @transaction_ns.response(404, "File not found", error_response)
    @transaction_ns.response(410, "Token expired", error_response)
    @transaction_ns.response(422, "Token does not refer to a file", error_response)
    def get(self, token):
        """
        Download the file registered under the token
        """
        try:
            delivery = current_app.delivery_service.open_download(token, _access_key())
        except TransactionRejectedError as e:
            current_app.logger.warning(
                f"[TRANSACTIONS] Download rejected for token {token[:8]}: {e.code.name}"
            )
            return _rejection_response(e.reasons, RETRIEVAL_STATUS)
        except TransactionStoreError as e:
            return _store_unavailable(token, e)

        current_app.logger.info(
            f"[TRANSACTIONS] Serving {delivery.download_name} for token {token[:8]}"
        )
        return send_file(
            delivery.path,
            as_attachment=True,
            download_name=delivery.download_name,
            mimetype=delivery.mime_type,
        )


@transaction_ns.route("/<string:token>/blob")
@transaction_ns.param("token", "The transaction token")
class TransactionBlob(Resource):
    """Fetch a registered file as base64"""

    @transaction_ns.doc("get_blob")
    @transaction_ns.response(200, "Success", blob_response)
    @transaction_ns.response(403, "Invalid access key", error_response)
    @transaction_ns.response(404, "File not found", error_response)
    @transaction_ns.response(410, "Token expired", error_response)
    def get(self, token):
        """
        Get the file registered under the token as a base64 string

        Useful to embed images in templates or send them through web services.
        """
        try:
            blob = current_app.delivery_service.encode_blob(token, _access_key())
        except TransactionRejectedError as e:
            current_app.logger.warning(
                f"[TRANSACTIONS] Blob rejected for token {token[:8]}: {e.code.name}"
            )
            return _rejection_response(e.reasons, RETRIEVAL_STATUS)
        except TransactionStoreError as e:
            return _store_unavailable(token, e)

        return blob.to_dict(), 200
