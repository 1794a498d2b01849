"""
Delivery Service

Turns granted transactions into something the API can send back:
a file to stream as an attachment, or a base64 blob.
"""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..domain.errors import ErrorCode, ErrorRecord, TransactionRejectedError
from ..domain.transactions.entities import DEFAULT_MIME_TYPE, Transaction
from ..domain.transactions.services import TokenBroker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileDelivery:
    """A file ready to be served as an attachment."""

    path: str
    download_name: str
    mime_type: str


@dataclass(frozen=True)
class EncodedBlob:
    """Base64 content of a file with its mime type."""

    mime_type: str
    data: str

    def to_dict(self) -> Dict[str, Any]:
        return {"mime_type": self.mime_type, "data": self.data}

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class DeliveryService:
    """
    Application service for delivering registered files.

    Rejections are raised as TransactionRejectedError so API handlers
    can map them to HTTP responses.
    """

    def __init__(self, token_broker: TokenBroker):
        self.token_broker = token_broker

    def open_download(self, token: str, access_key: str) -> FileDelivery:
        """
        Resolve a token to a file on disk.

        Args:
            token: Transaction token
            access_key: Access key given at registration

        Returns:
            FileDelivery for the registered file

        Raises:
            TransactionRejectedError: If retrieval was rejected, the token
                refers to an opaque resource, or the file is gone
            TransactionStoreError: If the store cannot be reached
        """
        transaction = self.token_broker.retrieve(token, access_key).unwrap()

        if not transaction.is_path_backed:
            self._reject(transaction, ErrorRecord(
                ErrorCode.INVALID_STORED_TYPE, "Token refers to a resource, not a file."
            ))

        payload = transaction.payload
        if not Path(payload.path).is_file():
            logger.warning(f"Registered file missing for token {token[:8]}")
            self._reject(transaction, ErrorRecord(
                ErrorCode.INVALID_PATH, "File path does not exist on the server."
            ))

        return FileDelivery(
            path=payload.path,
            download_name=payload.resource_name or Path(payload.path).name,
            mime_type=payload.mime_type or DEFAULT_MIME_TYPE,
        )

    def encode_blob(self, token: str, access_key: str) -> EncodedBlob:
        """
        Read a registered file and encode it as base64.

        Raises:
            TransactionRejectedError: Same conditions as open_download
        """
        delivery = self.open_download(token, access_key)
        content = Path(delivery.path).read_bytes()
        logger.debug(f"Encoded {len(content)} bytes for token {token[:8]}")
        return EncodedBlob(
            mime_type=delivery.mime_type,
            data=base64.b64encode(content).decode("ascii"),
        )

    @staticmethod
    def _reject(transaction: Transaction, error: ErrorRecord) -> None:
        transaction.add_error(error)
        raise TransactionRejectedError(transaction.errors, transaction.locator)
