import json
import shutil
import tempfile
import unittest
from pathlib import Path

from common import get_codec, make_client, make_order
from clientvault import config
from clientvault.models import CustomField
from clientvault.storage import MemoryStore
from clientvault.validation import ValidationError
from clientvault.vault import ClientVault


class TestBulkTransfer(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.vault = ClientVault(self.store, get_codec())
        self.transfer = self.vault.transfer

        self.field = CustomField.create("Tier", "select", "client", options=["Gold", "Silver"])
        self.vault.custom_fields.add(self.field)
        self.acme = make_client("Acme", custom_fields={self.field.id: "Gold"})
        self.globex = make_client("Globex", zip_code="12345")
        self.vault.clients.add(self.acme)
        self.vault.clients.add(self.globex)
        self.order = make_order(self.acme.id, notes="first")
        self.vault.orders.add(self.order)

        self.tmpdir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_export_format(self):
        document = self.transfer.export_all()

        self.assertEqual(set(document), {"clients", "orders", "customFields"})
        self.assertEqual([c["name"] for c in document["clients"]], ["Acme", "Globex"])
        self.assertEqual(document["clients"][1]["zipCode"], "12345")
        self.assertEqual(document["orders"][0]["clientId"], self.acme.id)
        self.assertEqual(document["orders"][0]["total"], 25)
        self.assertEqual(document["customFields"][0]["entityType"], "client")

    def test_export_import_round_trip(self):
        before = (self.vault.clients.get_all(), self.vault.orders.get_all(), self.vault.custom_fields.get_all())

        self.transfer.import_all(self.transfer.export_all())

        after = (self.vault.clients.get_all(), self.vault.orders.get_all(), self.vault.custom_fields.get_all())
        self.assertEqual(before, after)

    def test_import_replaces_existing_data(self):
        document = {
            "clients": [make_client("Initech").to_dict()],
            "orders": [],
            "customFields": [],
        }
        self.transfer.import_all(document)

        self.assertEqual([c.name for c in self.vault.clients.get_all()], ["Initech"])
        self.assertEqual(self.vault.orders.get_all(), [])
        self.assertEqual(self.vault.custom_fields.get_all(), [])

    def test_import_missing_collection_writes_nothing(self):
        before = self.store.buckets()
        for missing in ("clients", "orders", "customFields"):
            document = self.transfer.export_all()
            del document[missing]
            with self.subTest(missing=missing):
                with self.assertRaises(ValidationError):
                    self.transfer.import_all(document)
                self.assertEqual(self.store.buckets(), before)

    def test_import_rejects_non_list_and_bad_records(self):
        before = self.store.buckets()
        bad_documents = [
            [],
            {"clients": {}, "orders": [], "customFields": []},
            {"clients": [], "orders": [{"id": "x"}], "customFields": []},
            {"clients": [], "orders": [], "customFields": ["nope"]},
        ]
        for document in bad_documents:
            with self.subTest(document=document):
                with self.assertRaises(ValidationError):
                    self.transfer.import_all(document)
        self.assertEqual(self.store.buckets(), before)

    def test_import_rejects_ill_typed_values(self):
        before = self.store.buckets()
        document = self.transfer.export_all()
        null_total = dict(document, orders=[dict(document["orders"][0], total=None)])
        null_name = dict(document, clients=[dict(document["clients"][0], name=None)])
        text_quantity = self.transfer.export_all()
        text_quantity["orders"][0]["items"][0]["quantity"] = "2"

        for bad in (null_total, null_name, text_quantity):
            with self.assertRaises(ValidationError):
                self.transfer.import_all(bad)

        self.assertEqual(self.store.buckets(), before)
        self.vault.stats()
        self.assertEqual(self.vault.clients.search("acme"), [self.acme])

    def test_reset_keeps_user(self):
        self.vault.auth.register("admin", "s3cret")

        self.transfer.reset_all()

        self.assertEqual(self.vault.clients.get_all(), [])
        self.assertEqual(self.vault.orders.get_all(), [])
        self.assertEqual(self.vault.custom_fields.get_all(), [])
        self.assertEqual(set(self.store.buckets()), {config.BUCKET_USER})
        self.assertEqual(self.vault.users.get().username, "admin")

    def test_file_round_trip(self):
        path = self.tmpdir / config.EXPORT_FILE_NAME
        count = self.transfer.export_to_file(str(path))
        self.assertEqual(count, 4)
        self.assertIn("Acme", path.read_text())

        self.transfer.reset_all()
        self.transfer.import_from_file(str(path))

        self.assertEqual([c.name for c in self.vault.clients.get_all()], ["Acme", "Globex"])
        self.assertEqual(self.vault.orders.get_all(), [self.order])

    def test_import_malformed_file(self):
        path = self.tmpdir / "broken.json"
        path.write_text("{ not json")
        with self.assertRaises(ValidationError):
            self.transfer.import_from_file(str(path))

    def test_import_file_missing_collection(self):
        path = self.tmpdir / "partial.json"
        path.write_text(json.dumps({"clients": []}))
        with self.assertRaises(ValidationError):
            self.transfer.import_from_file(str(path))
        self.assertEqual(len(self.vault.clients.get_all()), 2)


if __name__ == '__main__':
    unittest.main()
