import hashlib

import pytest

from secure_download.domain.errors import ErrorCode, ErrorRecord
from secure_download.domain.transactions.entities import (
    DEFAULT_MIME_TYPE,
    OpaqueData,
    PathBacked,
    Transaction,
)


class TestTransactionConstruction:
    def test_for_path_existing_file_populates_name_and_mime(self, sample_file):
        t = Transaction.for_path(sample_file, "k1")

        assert isinstance(t.payload, PathBacked)
        assert t.payload.resource_name == "report.pdf"
        assert t.payload.mime_type == "application/pdf"
        assert t.locator == sample_file
        assert t.is_processable()

    def test_for_path_unknown_extension_falls_back_to_octet_stream(self, tmp_path):
        p = tmp_path / "blob.zzunknown"
        p.write_bytes(b"x")

        t = Transaction.for_path(str(p), "k1")

        assert t.payload.mime_type == DEFAULT_MIME_TYPE

    def test_for_path_missing_file_records_invalid_path(self, missing_file):
        t = Transaction.for_path(missing_file, "k1")

        assert not t.is_processable()
        assert [e.code for e in t.errors] == [ErrorCode.INVALID_PATH]
        assert t.payload.resource_name is None
        assert t.payload.mime_type is None

    def test_for_path_empty_string_records_invalid_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        t = Transaction.for_path("", "k1")

        assert [e.code for e in t.errors] == [ErrorCode.INVALID_PATH]

    def test_for_resource_skips_existence_check(self):
        t = Transaction.for_resource("/definitely/not/a/file", "k1")

        assert isinstance(t.payload, OpaqueData)
        assert t.is_processable()
        assert t.locator == "/definitely/not/a/file"

    def test_placeholder_is_empty(self):
        t = Transaction.placeholder()
        assert t.payload is None
        assert t.locator is None
        assert t.is_processable()

    def test_placeholder_with_error(self):
        t = Transaction.placeholder(ErrorRecord(ErrorCode.DOCUMENT_EXPIRED, "gone"))
        assert not t.is_processable()
        assert t.errors[0].code == ErrorCode.DOCUMENT_EXPIRED


class TestTokenDerivation:
    def test_token_is_sha256_of_salt_and_identity(self, sample_file):
        t = Transaction.for_path(sample_file, "k1")

        token = t.derive_token("salt")

        assert token == hashlib.sha256(f"salt{sample_file}".encode("utf-8")).hexdigest()
        assert len(token) == 64
        assert t.token == token

    def test_same_inputs_give_same_token(self, sample_file):
        a = Transaction.for_path(sample_file, "k1")
        b = Transaction.for_path(sample_file, "other-key")
        assert a.derive_token("salt") == b.derive_token("salt")

    def test_different_salt_gives_different_token(self):
        a = Transaction.for_resource("res-1", "k")
        b = Transaction.for_resource("res-1", "k")
        assert a.derive_token("salt-a") != b.derive_token("salt-b")

    def test_derive_is_idempotent_on_same_instance(self):
        t = Transaction.for_resource("res-1", "k")
        assert t.derive_token("salt") == t.derive_token("salt")

    def test_token_cannot_be_reassigned(self):
        t = Transaction.for_resource("res-1", "k")
        t.derive_token("salt-a")
        with pytest.raises(ValueError):
            t.derive_token("salt-b")

    def test_placeholder_has_no_token(self):
        with pytest.raises(ValueError):
            Transaction.placeholder().derive_token("salt")


class TestAccessKeyAndErrors:
    def test_access_key_exact_match(self):
        t = Transaction.for_resource("res", "s3cret")
        assert t.is_access_key_valid("s3cret")
        assert not t.is_access_key_valid("s3cret ")
        assert not t.is_access_key_valid("S3CRET")
        assert not t.is_access_key_valid(None)

    def test_access_key_non_ascii(self):
        t = Transaction.for_resource("res", "clé")
        assert t.is_access_key_valid("clé")
        assert not t.is_access_key_valid("cle")

    def test_placeholder_rejects_every_key(self):
        assert not Transaction.placeholder().is_access_key_valid("")

    def test_errors_keep_order_without_dedup(self):
        t = Transaction.for_resource("res", "k")
        first = ErrorRecord(ErrorCode.INVALID_ACCESS_KEY, "a")
        second = ErrorRecord(ErrorCode.UNKNOWN, "b")
        t.add_error(first)
        t.add_error(second)
        t.add_error(first)

        assert t.errors == [first, second, first]
        assert not t.is_processable()


class TestSerialization:
    def test_path_backed_round_trip(self, sample_file):
        t = Transaction.for_path(sample_file, "k1")
        t.derive_token("salt")

        restored = Transaction.from_dict(t.to_dict())

        assert restored.payload == t.payload
        assert restored.access_key == "k1"
        assert restored.token == t.token
        assert restored.errors == []

    def test_opaque_round_trip(self):
        t = Transaction.for_resource("invoice:42", "k1")
        t.derive_token("salt")

        restored = Transaction.from_dict(t.to_dict())

        assert restored.payload == OpaqueData("invoice:42")
        assert restored.token == t.token

    @pytest.mark.parametrize("data", [
        "a string",
        ["a", "list"],
        {"kind": "path", "access_key": "k"},
        {"kind": "video", "access_key": "k", "token": "t", "path": "/x"},
        {"kind": "opaque", "access_key": 42, "token": "t", "identifier": "x"},
        {"kind": "opaque", "access_key": "k", "token": 123, "identifier": "x"},
        {"kind": "opaque", "access_key": "k", "token": None, "identifier": "x"},
        {"kind": "opaque", "access_key": "k", "token": "", "identifier": "x"},
        {"kind": "path", "access_key": "k", "token": "t", "path": ["/x"]},
    ])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            Transaction.from_dict(data)

    def test_placeholder_cannot_be_serialized(self):
        with pytest.raises(ValueError):
            Transaction.placeholder().to_dict()
