"""
Objects client against the local objects API stand-in
"""

import logging
from unittest import TestCase

from wsgi import app
from demoqa.api import ApiFallbackContext, ObjectsClient
from objects_api import routes
from objects_api.models import ApiObject, db
from tests.fakes import FlaskSession

BASE_URL = "http://objects.local"


class TestClientAgainstStandIn(TestCase):
    """Shim behavior with real HTTP semantics from the stand-in"""

    @classmethod
    def setUpClass(cls):
        """Run once before all tests"""
        app.config["TESTING"] = True
        app.config["DEBUG"] = False
        app.logger.setLevel(logging.CRITICAL)
        app.app_context().push()

    @classmethod
    def tearDownClass(cls):
        """Run once after all tests"""
        db.session.close()

    def setUp(self):
        """Runs before each test"""
        routes.quota.reset(limit=0)
        db.session.query(ApiObject).delete()
        db.session.commit()
        self.session = FlaskSession(app.test_client(), BASE_URL)
        self.fallback = ApiFallbackContext()
        self.client = ObjectsClient(BASE_URL, self.fallback, session=self.session)

    def tearDown(self):
        """Runs after each test"""
        db.session.remove()
        routes.quota.reset(limit=0)

    def _spend_quota(self, limit=1):
        routes.quota.reset(limit=limit)
        for _ in range(limit):
            app.test_client().get("/objects")

    def test_laptop_lifecycle(self):
        """It should run the Laptop lifecycle against the stand-in"""
        created = self.client.create("Laptop", {"price": 999, "cpu": "i7"})
        self.assertIn(created.status, (200, 201))
        self.assertFalse(created.mocked)
        object_id = created.body["id"]

        self.assertEqual(self.client.get(object_id).body["name"], "Laptop")
        self.client.patch(object_id, {"price": 899})
        response = self.client.get(object_id)
        self.assertEqual(response.body["data"]["price"], 899)
        self.assertEqual(response.body["data"]["cpu"], "i7")

        self.assertEqual(self.client.delete(object_id).status, 200)
        self.assertEqual(self.client.get(object_id, allow_failure=True).status, 404)
        self.assertFalse(self.fallback.rate_limited)

    def test_rename(self):
        """It should rename through PUT"""
        object_id = self.client.create("Phone", {"year": 2024}).body["id"]
        response = self.client.update_name(object_id, "Phone Pro")
        self.assertEqual(response.body["name"], "Phone Pro")
        self.assertIn("updatedAt", response.body)

    def test_strict_unknown_id(self):
        """It should raise on a 404 from the stand-in"""
        self.assertRaises(AssertionError, self.client.get, "missing")
        self.assertRaises(AssertionError, self.client.delete, "missing")

    def test_list_excludes_deleted(self):
        """It should stop listing a deleted object"""
        keep = self.client.create("Keep").body["id"]
        gone = self.client.create("Gone").body["id"]
        self.client.delete(gone)
        ids = [item["id"] for item in self.client.list_all().body]
        self.assertEqual(ids, [keep])

    def test_laptop_lifecycle_when_limited(self):
        """It should run the Laptop lifecycle on the mock store once limited"""
        self._spend_quota()
        created = self.client.create("Laptop", {"price": 999, "cpu": "i7"})
        self.assertEqual(created.status, 201)
        self.assertTrue(self.fallback.rate_limited)
        object_id = created.body["id"]

        self.assertEqual(self.client.get(object_id).body["name"], "Laptop")
        self.client.patch(object_id, {"price": 899})
        self.assertEqual(self.client.get(object_id).body["data"]["price"], 899)
        self.client.delete(object_id)
        self.assertEqual(self.client.get(object_id, allow_failure=True).status, 404)

        # create plus nothing else went over the wire
        self.assertEqual(self.session.calls, [("POST", "/objects")])

    def test_limit_hits_mid_lifecycle(self):
        """It should map a limited read of a real object to 404"""
        routes.quota.reset(limit=1)
        object_id = self.client.create("Laptop").body["id"]
        response = self.client.get(object_id)
        self.assertEqual(response.status, 404)
        self.assertTrue(self.fallback.rate_limited)

    def test_plain_405_is_not_a_limit(self):
        """It should not treat a routing 405 as the request limit"""
        response = self.client.request("PUT", "/objects", {"name": "x"})
        self.assertEqual(response.status, 405)
        self.assertFalse(self.fallback.rate_limited)

    def test_list_when_limited(self):
        """It should list placeholders once limited"""
        self._spend_quota()
        response = self.client.list_all()
        self.assertEqual([item["id"] for item in response.body], ["1", "2", "3"])

    def test_get_mock_when_limited(self):
        """It should synthesize an object for an unknown id once limited"""
        self._spend_quota()
        response = self.client.get_mock("7")
        self.assertEqual(response.body, {"id": "7", "name": "Mock Object", "data": {}})
