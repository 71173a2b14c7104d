import base64
import os
import unittest

from common import get_codec, make_client, make_order
from clientvault import config
from clientvault.crypto import Codec, DecodeError, hash_password, verify_password
from clientvault.models import Client, CustomField, Order, User


class TestCodec(unittest.TestCase):
    def setUp(self):
        self.codec = get_codec()

    def test_round_trip_records(self):
        client = make_client(address="1 Main St", custom_fields={"f1": "Gold"})
        order = make_order(client.id, notes="rush")
        field = CustomField.create("Tier", "select", "client", options=["Gold", "Silver"])
        user = User(id="u1", username="admin", password_hash="x", created_at="2025-01-01T00:00:00")

        for record, model in ((client, Client), (order, Order), (field, CustomField), (user, User)):
            decoded = model.from_dict(self.codec.decode(self.codec.encode(record.to_dict())))
            self.assertEqual(record, decoded)

    def test_encoding_is_not_deterministic(self):
        value = {"name": "Acme"}
        first = self.codec.encode(value)
        second = self.codec.encode(value)
        self.assertNotEqual(first, second)
        self.assertEqual(self.codec.decode(first), self.codec.decode(second))

    def test_ciphertext_hides_plaintext(self):
        encoded = self.codec.encode({"email": "secret@example.test"})
        self.assertNotIn("secret@example.test", encoded)
        self.assertNotIn("secret", base64.urlsafe_b64decode(encoded).decode('latin-1'))

    def test_wrong_key_fails(self):
        encoded = self.codec.encode([1, 2, 3])
        other = get_codec("a-different-secret")
        with self.assertRaises(DecodeError):
            other.decode(encoded)

    def test_garbage_fails(self):
        for garbage in ("", "not encrypted at all", "%%%", "QUJD", base64.urlsafe_b64encode(b"x" * 64).decode()):
            with self.subTest(garbage=garbage):
                with self.assertRaises(DecodeError):
                    self.codec.decode(garbage)

    def test_tampered_value_fails(self):
        encoded = self.codec.encode({"total": 25})
        replacement = 'A' if encoded[-5] != 'A' else 'B'
        tampered = encoded[:-5] + replacement + encoded[-4:]
        with self.assertRaises(DecodeError):
            self.codec.decode(tampered)

    def test_wrong_version_fails(self):
        frame = bytearray(base64.urlsafe_b64decode(self.codec.encode({})))
        frame[4] = config.CODEC_VERSION + 1
        with self.assertRaises(DecodeError):
            self.codec.decode(base64.urlsafe_b64encode(bytes(frame)).decode())

    def test_non_json_plaintext_fails(self):
        nonce = os.urandom(config.NONCE_SIZE)
        ciphertext = self.codec._aesgcm.encrypt(nonce, b"\xff not json", None)
        frame = Codec.HEADER.pack(config.CODEC_MAGIC, config.CODEC_VERSION) + nonce + ciphertext
        with self.assertRaises(DecodeError):
            self.codec.decode(base64.urlsafe_b64encode(frame).decode())

    def test_empty_secret_rejected(self):
        with self.assertRaises(ValueError):
            Codec("")


class TestPasswordHashing(unittest.TestCase):
    def test_hash_and_verify(self):
        digest = hash_password("hunter2")
        self.assertNotIn("hunter2", digest)
        self.assertTrue(verify_password(digest, "hunter2"))
        self.assertFalse(verify_password(digest, "hunter3"))

    def test_invalid_hash_does_not_verify(self):
        self.assertFalse(verify_password("not-an-argon2-hash", "hunter2"))


if __name__ == '__main__':
    unittest.main()
