from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from pumps.domain.exceptions import StorageError
from pumps.infrastructure.orm_store import DjangoPumpStore
from pumps.models import Pump, PumpTransaction


class FuelPumpEndpointTest(TestCase):
    """
    Tests for the /api/pumps/ endpoints.

    Each test runs inside a transaction that is rolled back automatically,
    ensuring full isolation between test cases.
    """

    def setUp(self):
        self.client = APIClient()

    def create_pump(self, **overrides):
        payload = {"pump_number": 1, "fuel_type": "Diesel", "fuel_quantity": 100}
        payload.update(overrides)
        response = self.client.post("/api/pumps/", payload)
        self.assertEqual(response.status_code, 201)
        return response.data

    def test_create_returns_active_pump(self):
        pump = self.create_pump()

        self.assertEqual(pump["pump_number"], 1)
        self.assertEqual(pump["fuel_type"], "Diesel")
        self.assertEqual(pump["fuel_quantity"], 100)
        self.assertEqual(pump["status"], "Active")
        self.assertEqual(pump["transactions"], [])
        self.assertIsNone(pump["updated_at"])
        self.assertTrue(Pump.objects.filter(pk=pump["id"]).exists())

    def test_create_with_zero_quantity_returns_400(self):
        response = self.client.post(
            "/api/pumps/", {"pump_number": 1, "fuel_type": "Diesel", "fuel_quantity": 0}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertEqual(Pump.objects.count(), 0)

    def test_create_with_missing_fields_returns_400(self):
        response = self.client.post("/api/pumps/", {"fuel_quantity": 10})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(Pump.objects.count(), 0)

    def test_create_with_oversized_pump_number_returns_400(self):
        response = self.client.post(
            "/api/pumps/", {"pump_number": 10**20, "fuel_type": "Diesel", "fuel_quantity": 10}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertEqual(Pump.objects.count(), 0)

    def test_malformed_json_returns_invalid_input(self):
        response = self.client.post(
            "/api/pumps/", data='{"pump_number": 1,', content_type="application/json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertIn("error", response.data)
        self.assertEqual(Pump.objects.count(), 0)

    def test_malformed_json_on_dispense_returns_invalid_input(self):
        pump = self.create_pump()

        response = self.client.post(
            f"/api/pumps/{pump['id']}/dispense/", data="quantity=", content_type="application/json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertEqual(PumpTransaction.objects.count(), 0)

    def test_form_encoded_create_is_accepted(self):
        response = self.client.post(
            "/api/pumps/",
            {"pump_number": "2", "fuel_type": "Regular", "fuel_quantity": "45.5"},
            format="multipart",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["fuel_quantity"], 45.5)

    def test_get_pump(self):
        pump = self.create_pump()

        response = self.client.get(f"/api/pumps/{pump['id']}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["id"], pump["id"])

    def test_get_unknown_pump_returns_404(self):
        response = self.client.get("/api/pumps/does-not-exist/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Fuel Pump with ID=does-not-exist not found.")

    def test_list_pumps(self):
        for number in (1, 2, 3):
            self.create_pump(pump_number=number)

        response = self.client.get("/api/pumps/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 3)

    def test_update_pump(self):
        pump = self.create_pump()

        response = self.client.put(
            f"/api/pumps/{pump['id']}/",
            {"pump_number": 9, "fuel_type": "Premium", "fuel_quantity": 300},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["pump_number"], 9)
        self.assertEqual(response.data["fuel_type"], "Premium")
        self.assertEqual(response.data["created_at"], pump["created_at"])
        self.assertEqual(response.data["status"], "Active")
        self.assertIsNotNone(response.data["updated_at"])

    def test_delete_then_get_returns_404(self):
        pump = self.create_pump()

        deleted = self.client.delete(f"/api/pumps/{pump['id']}/")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.data["id"], pump["id"])

        response = self.client.get(f"/api/pumps/{pump['id']}/")
        self.assertEqual(response.status_code, 404)

    def test_successful_dispense(self):
        pump = self.create_pump()

        response = self.client.post(f"/api/pumps/{pump['id']}/dispense/", {"quantity": 40})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["fuel_quantity"], 60)
        self.assertEqual(len(response.data["transactions"]), 1)
        self.assertEqual(response.data["transactions"][0]["quantity_dispensed"], 40)
        self.assertEqual(response.data["transactions"][0]["user"], "anonymous")
        self.assertEqual(PumpTransaction.objects.count(), 1)

    def test_dispense_is_attributed_to_authenticated_user(self):
        user = get_user_model().objects.create_user(username="attendant-7", password="secret")
        self.client.force_authenticate(user=user)
        pump = self.create_pump()

        self.client.post(f"/api/pumps/{pump['id']}/dispense/", {"quantity": 5})

        response = self.client.get(f"/api/pumps/{pump['id']}/transactions/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data[0]["user"], "attendant-7")

    def test_insufficient_fuel_returns_422_without_side_effects(self):
        pump = self.create_pump()

        response = self.client.post(f"/api/pumps/{pump['id']}/dispense/", {"quantity": 200})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.data["code"], "insufficient_quantity")
        self.assertEqual(Pump.objects.get(pk=pump["id"]).fuel_quantity, 100)
        self.assertEqual(PumpTransaction.objects.count(), 0)

    def test_dispense_without_quantity_returns_400(self):
        pump = self.create_pump()

        response = self.client.post(f"/api/pumps/{pump['id']}/dispense/", {})

        self.assertEqual(response.status_code, 400)

    def test_dispense_on_unknown_pump_returns_404(self):
        response = self.client.post("/api/pumps/missing/dispense/", {"quantity": 1})

        self.assertEqual(response.status_code, 404)

    def test_status_change_blocks_dispense(self):
        pump = self.create_pump()

        response = self.client.put(f"/api/pumps/{pump['id']}/status/", {"status": "Maintenance"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "Maintenance")

        response = self.client.post(f"/api/pumps/{pump['id']}/dispense/", {"quantity": 10})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["code"], "invalid_state")
        self.assertEqual(PumpTransaction.objects.count(), 0)

    def test_unknown_status_returns_400(self):
        pump = self.create_pump()

        response = self.client.put(f"/api/pumps/{pump['id']}/status/", {"status": "Retired"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(Pump.objects.get(pk=pump["id"]).status, "Active")

    def test_transactions_of_unknown_pump_returns_404(self):
        response = self.client.get("/api/pumps/missing/transactions/")

        self.assertEqual(response.status_code, 404)

    def test_storage_failure_returns_503(self):
        with mock.patch.object(DjangoPumpStore, "values", side_effect=StorageError("offline")):
            response = self.client.get("/api/pumps/")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.data, {"error": "offline", "code": "storage_error"})
