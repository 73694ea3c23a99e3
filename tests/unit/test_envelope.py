"""Unit tests for the envelope record."""

import json

import pytest

from configvault.core.errors import DecryptionError, SerializationError
from configvault.core.store.envelope import (
    ENVELOPE_ALGORITHM,
    ENVELOPE_VERSION,
    Envelope,
    b64decode,
)


@pytest.fixture
def envelope():
    return Envelope.seal(
        ciphertext=b"\x01" * 40,
        salt=b"\x02" * 32,
        nonce=b"\x03" * 12,
        iterations=100_000,
    )


class TestEnvelope:
    """Tests for Envelope serialization."""

    def test_seal_sets_current_format(self, envelope):
        """Test sealed envelopes carry the current identifiers."""
        assert envelope.version == ENVELOPE_VERSION == "1.0"
        assert envelope.algorithm == ENVELOPE_ALGORITHM == "AES-256-GCM"
        assert envelope.iterations == 100_000

    def test_to_json_is_pretty_printed(self, envelope):
        """Test the on-disk form is indented JSON with all fields."""
        text = envelope.to_json()
        assert text.startswith("{\n  ")
        assert json.loads(text) == {
            "data": envelope.data,
            "salt": envelope.salt,
            "nonce": envelope.nonce,
            "version": "1.0",
            "algorithm": "AES-256-GCM",
            "iterations": 100_000,
        }

    def test_from_json_restores(self, envelope):
        """Test parsing the serialized form gives an equal envelope."""
        assert Envelope.from_json(envelope.to_json()) == envelope

    def test_from_json_ignores_unknown_fields(self, envelope):
        """Test extra keys are ignored."""
        data = json.loads(envelope.to_json())
        data["comment"] = "added by hand"
        assert Envelope.from_json(json.dumps(data)) == envelope

    def test_from_json_defaults(self):
        """Test missing metadata fields take the legacy defaults."""
        parsed = Envelope.from_json('{"data": "AA==", "salt": "AA==", "nonce": "AA=="}')
        assert parsed.version == "1.0"
        assert parsed.algorithm == "AES-256-GCM"
        assert parsed.iterations == 100_000

    @pytest.mark.parametrize("text", [
        "not json",
        "[1, 2, 3]",
        '"string"',
        '{"salt": "AA==", "nonce": "AA=="}',
        '{"data": 1, "salt": "AA==", "nonce": "AA=="}',
        '{"data": "AA==", "salt": "AA==", "nonce": "AA==", "iterations": "100000"}',
        '{"data": "AA==", "salt": "AA==", "nonce": "AA==", "iterations": true}',
        '{"data": "AA==", "salt": "AA==", "nonce": "AA==", "version": 1.0}',
    ])
    def test_from_json_rejects_malformed(self, text):
        """Test malformed documents raise SerializationError."""
        with pytest.raises(SerializationError):
            Envelope.from_json(text)

    def test_check_compatible(self, envelope):
        """Test the current format passes the compatibility gate."""
        envelope.check_compatible()

    def test_check_compatible_rejects_version(self):
        """Test any other version is refused."""
        env = Envelope(data="", salt="", nonce="", version="1.1")
        with pytest.raises(DecryptionError, match="version"):
            env.check_compatible()

    def test_check_compatible_rejects_algorithm(self):
        """Test any other algorithm is refused."""
        env = Envelope(data="", salt="", nonce="", algorithm="AES-128-GCM")
        with pytest.raises(DecryptionError, match="algorithm"):
            env.check_compatible()

    def test_repr_hides_material(self, envelope):
        """Test repr omits salt, nonce and ciphertext."""
        text = repr(envelope)
        assert envelope.salt not in text
        assert envelope.nonce not in text
        assert envelope.data not in text


class TestBase64:
    """Tests for strict base64 decoding."""

    def test_decodes_valid(self):
        assert b64decode("AAEC", "data") == b"\x00\x01\x02"

    @pytest.mark.parametrize("text", ["AA=", "A A==", "!!!!", "AAE"])
    def test_rejects_invalid(self, text):
        with pytest.raises(DecryptionError, match="salt"):
            b64decode(text, "salt")
