"""
Transaction Entities

Domain entities for registered resources awaiting retrieval.

A transaction is an envelope (access key, token, errors) around exactly
one payload variant: a filesystem path or an opaque resource identifier.
"""

import hashlib
import hmac
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import ErrorCode, ErrorRecord

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class PathBacked:
    """Payload pointing at a file on the local filesystem."""

    path: str
    resource_name: Optional[str] = None
    mime_type: Optional[str] = None

    kind = "path"

    @property
    def identity(self) -> str:
        return self.path


@dataclass(frozen=True)
class OpaqueData:
    """Payload holding a caller-validated resource identifier."""

    identifier: str

    kind = "opaque"

    @property
    def identity(self) -> str:
        return self.identifier


Payload = Union[PathBacked, OpaqueData]


@dataclass
class Transaction:
    """
    Entity representing one registered resource.

    A transaction is processable iff it carries no errors. Errors keep
    their insertion order; the first one is the primary reason.
    """

    payload: Optional[Payload] = None
    access_key: Optional[str] = None
    token: Optional[str] = None
    errors: List[ErrorRecord] = field(default_factory=list)

    @classmethod
    def for_path(cls, path: str, access_key: str) -> 'Transaction':
        """
        Factory method for a path-backed transaction.

        Checks that the file exists. On failure an INVALID_PATH error is
        recorded and the resource name and mime type stay unset.

        Args:
            path: Path to the file on the server
            access_key: Secret required to retrieve the file later

        Returns:
            New Transaction instance
        """
        # Path("") is the current directory, so an empty path is checked first
        if not path or not Path(path).exists():
            transaction = cls(payload=PathBacked(path=path), access_key=access_key)
            transaction.add_error(
                ErrorRecord(ErrorCode.INVALID_PATH, "File path does not exist on the server.")
            )
            return transaction

        mime_type, _ = mimetypes.guess_type(path)
        payload = PathBacked(
            path=path,
            resource_name=Path(path).name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
        )
        return cls(payload=payload, access_key=access_key)

    @classmethod
    def for_resource(cls, identifier: str, access_key: str) -> 'Transaction':
        """Factory method for an opaque-data transaction."""
        return cls(payload=OpaqueData(identifier=identifier), access_key=access_key)

    @classmethod
    def placeholder(cls, error: Optional[ErrorRecord] = None) -> 'Transaction':
        """
        Create an empty transaction to carry a retrieval failure.

        Args:
            error: Optional error to record right away

        Returns:
            Transaction with no payload and no access key
        """
        transaction = cls()
        if error is not None:
            transaction.add_error(error)
        return transaction

    @property
    def locator(self) -> Optional[str]:
        """The path or identifier this transaction grants access to."""
        if self.payload is None:
            return None
        return self.payload.identity

    @property
    def is_path_backed(self) -> bool:
        return isinstance(self.payload, PathBacked)

    def derive_token(self, salt: str) -> str:
        """
        Compute the transaction token from the salt and payload identity.

        The token is a SHA-256 hex digest, so the same salt and identity
        always give the same token.

        Args:
            salt: System-wide hash salt

        Returns:
            64-character hexadecimal token

        Raises:
            ValueError: If the transaction has no payload, or already
                holds a different token
        """
        if self.payload is None:
            raise ValueError("Cannot derive a token for a transaction without payload")

        token = hashlib.sha256(f"{salt}{self.payload.identity}".encode("utf-8")).hexdigest()
        if self.token is not None and self.token != token:
            raise ValueError("Transaction token is already assigned")

        self.token = token
        return token

    def is_processable(self) -> bool:
        return len(self.errors) == 0

    def is_access_key_valid(self, candidate: Optional[str]) -> bool:
        """
        Compare a candidate access key with the stored one.

        Uses a constant-time comparison.
        """
        if self.access_key is None or candidate is None:
            return False
        return hmac.compare_digest(
            self.access_key.encode("utf-8"), candidate.encode("utf-8")
        )

    def add_error(self, error: ErrorRecord) -> None:
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for storage.

        Errors are not stored: only processable transactions are persisted.
        """
        if self.payload is None:
            raise ValueError("Cannot serialize a transaction without payload")

        data: Dict[str, Any] = {
            "kind": self.payload.kind,
            "access_key": self.access_key,
            "token": self.token,
        }
        if isinstance(self.payload, PathBacked):
            data["path"] = self.payload.path
            data["resource_name"] = self.payload.resource_name
            data["mime_type"] = self.payload.mime_type
        else:
            data["identifier"] = self.payload.identifier
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """
        Create Transaction from dictionary.

        Raises:
            ValueError: If the data does not describe a transaction
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")

        try:
            kind = data["kind"]
            access_key = data["access_key"]
            token = data["token"]
            if kind == PathBacked.kind:
                payload: Payload = PathBacked(
                    path=data["path"],
                    resource_name=data.get("resource_name"),
                    mime_type=data.get("mime_type"),
                )
            elif kind == OpaqueData.kind:
                payload = OpaqueData(identifier=data["identifier"])
            else:
                raise ValueError(f"Unknown transaction kind: {kind!r}")
        except KeyError as e:
            raise ValueError(f"Missing transaction field: {e}") from e

        if not all(isinstance(value, str) and value for value in (token, payload.identity)):
            raise ValueError("Transaction token and locator must be non-empty strings")
        if not isinstance(access_key, str):
            raise ValueError("Transaction access key must be a string")

        return cls(payload=payload, access_key=access_key, token=token)
