"""API tests for bills, running numbers, monthly summaries and room pre-fill."""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from config import REPORT_TIMEZONE


def _create_bill(client: TestClient, payload: dict) -> dict:
    response = client.post("/api/bills", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateBill:

    def test_totals_are_computed_server_side(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment

        data = _create_bill(client, bill_payload(apartment["id"], room["id"]))

        assert Decimal(data["net_rent"]) == Decimal("9500")
        assert Decimal(data["electricity_cost"]) == Decimal("400")
        assert Decimal(data["water_cost"]) == Decimal("350")
        assert Decimal(data["other_fees_total"]) == Decimal("200")
        assert Decimal(data["grand_total"]) == Decimal("10750")
        assert Decimal(data["discount_total"]) == Decimal("500")
        assert data["rental_period"] == {"from": "2024-03-01", "to": "2024-03-31"}
        assert data["apartment_name"] == apartment["name"]
        assert data["room_number"] == room["room_number"]

    def test_client_totals_are_ignored(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment

        data = _create_bill(client, bill_payload(apartment["id"], room["id"], grand_total=1))

        assert Decimal(data["grand_total"]) == Decimal("10750")

    def test_legacy_scalar_discount_and_fees(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        payload = bill_payload(
            apartment["id"], room["id"],
            discounts=None, discount=500,
            other_fees=None, other_fees_amount=200,
        )

        data = _create_bill(client, payload)

        assert [(d["description"], Decimal(d["amount"])) for d in data["discounts"]] == [("Discount", Decimal("500"))]
        assert [(f["description"], Decimal(f["amount"])) for f in data["other_fees"]] == [("Other fees", Decimal("200"))]
        assert Decimal(data["grand_total"]) == Decimal("10750")

    def test_zero_legacy_discount_adds_no_item(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment

        data = _create_bill(client, bill_payload(apartment["id"], room["id"], discounts=None, discount=0))

        assert data["discounts"] == []
        assert Decimal(data["net_rent"]) == Decimal("10000")

    def test_itemized_discounts_keep_order(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        discounts = [
            {"description": "Loyalty", "amount": 300},
            {"description": "Late move-in", "amount": 200},
        ]

        data = _create_bill(client, bill_payload(apartment["id"], room["id"], discounts=discounts))

        assert [d["description"] for d in data["discounts"]] == ["Loyalty", "Late move-in"]
        assert Decimal(data["net_rent"]) == Decimal("9500")

    def test_both_discount_shapes_is_422(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment

        response = client.post("/api/bills", json=bill_payload(apartment["id"], room["id"], discount=100))

        assert response.status_code == 422

    def test_domain_errors_are_400_with_every_field(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        payload = bill_payload(
            apartment["id"], room["id"],
            rent=0,
            tenant_name="",
            electricity={"start_meter": 150, "end_meter": 100, "rate": 7},
        )

        response = client.post("/api/bills", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert set(body["validation_errors"]) == {"rent", "tenant_name", "electricity.end_meter"}
        assert client.get("/api/bills").json()["total"] == 0

    def test_room_from_another_apartment(self, client, make_apartment, make_room, bill_payload):
        first = make_apartment(name="First")
        second = make_apartment(name="Second")
        room = make_room(second["id"])

        response = client.post("/api/bills", json=bill_payload(first["id"], room["id"]))

        assert response.status_code == 400
        assert "room_id" in response.json()["validation_errors"]

    def test_unknown_room_is_404(self, client, make_apartment, bill_payload):
        apartment = make_apartment()

        response = client.post("/api/bills", json=bill_payload(apartment["id"], 999))

        assert response.status_code == 404
        assert response.json()["detail"] == "Room with ID 999 not found"

    def test_negative_total_is_kept_as_credit(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment

        data = _create_bill(client, bill_payload(apartment["id"], room["id"], rent=100))

        assert Decimal(data["net_rent"]) == Decimal("-400")


class TestBillCrud:

    def test_update_recomputes_totals(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        bill = _create_bill(client, bill_payload(apartment["id"], room["id"]))

        response = client.put(
            f"/api/bills/{bill['id']}",
            json=bill_payload(apartment["id"], room["id"], rent=12000, other_fees=[]),
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["net_rent"]) == Decimal("11500")
        assert Decimal(data["other_fees_total"]) == Decimal("0")
        assert data["other_fees"] == []
        assert Decimal(data["grand_total"]) == Decimal("12550")

    def test_update_with_invalid_draft_keeps_stored_bill(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        bill = _create_bill(client, bill_payload(apartment["id"], room["id"]))

        response = client.put(f"/api/bills/{bill['id']}", json=bill_payload(apartment["id"], room["id"], rent=-5))

        assert response.status_code == 400
        assert Decimal(client.get(f"/api/bills/{bill['id']}").json()["rent"]) == Decimal("10000")

    def test_get_list_and_delete(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        first = _create_bill(client, bill_payload(apartment["id"], room["id"]))
        second = _create_bill(client, bill_payload(apartment["id"], room["id"]))

        listing = client.get("/api/bills", params={"room_id": room["id"]}).json()
        assert listing["total"] == 2
        assert [b["id"] for b in listing["bills"]] == [second["id"], first["id"]]

        assert client.delete(f"/api/bills/{first['id']}").status_code == 204
        assert client.get(f"/api/bills/{first['id']}").status_code == 404
        assert client.get("/api/bills").json()["total"] == 1

    def test_missing_bill(self, client):
        response = client.get("/api/bills/999")

        assert response.status_code == 404
        assert response.json() == {"detail": "Bill with ID 999 not found"}

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}


class TestRunningNumbersAndSummary:

    def test_running_numbers_follow_creation_order(self, client, make_apartment, make_room, bill_payload):
        apartment = make_apartment()
        room_b = make_room(apartment["id"], room_number="B-2")
        room_a = make_room(apartment["id"], room_number="A-1")
        first = _create_bill(client, bill_payload(apartment["id"], room_b["id"], billing_date="2024-03-20T10:00:00"))
        second = _create_bill(client, bill_payload(apartment["id"], room_a["id"], billing_date="2024-03-02T10:00:00"))

        numbered = client.get(f"/api/bills/{second['id']}/with-running-number").json()
        assert numbered["running_number"] == "0324-002"
        assert numbered["bill_position"] == 2
        assert numbered["total_bills_in_month"] == 2

        summary = client.get("/api/bills/monthly-summary", params={"month": 3, "year": 2024}).json()
        assert [(r["id"], r["running_number"], r["room_number"]) for r in summary["bills"]] == [
            (first["id"], "0324-001", "B-2"),
            (second["id"], "0324-002", "A-1"),
        ]

    def test_summary_totals_and_month_boundaries(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        for billing_date in ("2024-03-01T00:00:00", "2024-03-31T23:59:59.999999", "2024-04-01T00:00:00"):
            _create_bill(client, bill_payload(apartment["id"], room["id"], billing_date=billing_date))

        data = client.get("/api/bills/monthly-summary", params={"month": 3, "year": 2024}).json()

        assert data["month"] == 3
        assert data["year"] == 2024
        totals = data["summary"]
        assert totals["total_bills"] == 2
        assert Decimal(totals["total_rent"]) == Decimal("19000")
        assert Decimal(totals["total_electricity"]) == Decimal("800")
        assert Decimal(totals["total_water"]) == Decimal("700")
        assert Decimal(totals["total_other_fees"]) == Decimal("400")
        assert Decimal(totals["grand_total"]) == Decimal("21500")

    def test_summary_apartment_filter(self, client, make_apartment, make_room, bill_payload):
        first = make_apartment(name="First")
        second = make_apartment(name="Second")
        room_1 = make_room(first["id"])
        room_2 = make_room(second["id"])
        _create_bill(client, bill_payload(first["id"], room_1["id"]))
        other = _create_bill(client, bill_payload(second["id"], room_2["id"]))

        data = client.get(
            "/api/bills/monthly-summary",
            params={"month": 3, "year": 2024, "apartment_id": second["id"]},
        ).json()

        assert [(r["id"], r["running_number"]) for r in data["bills"]] == [(other["id"], "0324-001")]
        assert data["apartment_id"] == second["id"]

    def test_empty_month(self, client):
        data = client.get("/api/bills/monthly-summary", params={"month": 1, "year": 2030}).json()

        assert data["bills"] == []
        assert data["summary"]["total_bills"] == 0
        assert Decimal(data["summary"]["grand_total"]) == Decimal("0")

    @pytest.mark.parametrize("params", [
        {},
        {"month": 3},
        {"month": 13, "year": 2024},
        {"month": 3, "year": 99},
        {"month": "march", "year": 2024},
        {"month": "3.7", "year": 2024},
    ])
    def test_bad_parameters(self, client, params):
        response = client.get("/api/bills/monthly-summary", params=params)

        assert response.status_code == 400
        assert "detail" in response.json()


class TestLatestRoomData:

    def test_room_id_is_required(self, client):
        assert client.get("/api/bills/latest-room-data").status_code == 400

    def test_room_without_bills(self, client, room_with_apartment):
        _, room = room_with_apartment

        data = client.get("/api/bills/latest-room-data", params={"room_id": room["id"]}).json()

        assert data["has_data"] is False
        assert data["message"]

    def test_prefill_from_latest_bill(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        _create_bill(client, bill_payload(apartment["id"], room["id"]))
        latest = _create_bill(client, bill_payload(
            apartment["id"], room["id"],
            billing_date="2024-04-01T09:00:00",
            tenant_name="New Tenant",
            rental_period={"from": "2024-04-01", "to": "2024-04-30"},
            electricity={"start_meter": 150, "end_meter": 180, "rate": 8, "meter_fee": 40},
            water={"start_meter": 70, "end_meter": 90, "rate": 15, "meter_fee": 50},
        ))

        data = client.get("/api/bills/latest-room-data", params={"room_id": room["id"]}).json()

        assert data["has_data"] is True
        assert data["last_bill_id"] == latest["id"]
        assert data["tenant_info"]["tenant_name"] == "New Tenant"
        assert Decimal(data["electricity"]["end_meter"]) == Decimal("180")
        assert Decimal(data["electricity"]["rate"]) == Decimal("8")
        assert Decimal(data["electricity"]["meter_fee"]) == Decimal("40")
        assert Decimal(data["water"]["end_meter"]) == Decimal("90")
        assert Decimal(data["recurring_fees"]["rent"]) == Decimal("10000")
        assert Decimal(data["recurring_fees"]["discount"]) == Decimal("500")
        assert Decimal(data["recurring_fees"]["aircon_fee"]) == Decimal("300")

    def test_update_current_month_tenant_info(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        now = datetime.now(ZoneInfo(REPORT_TIMEZONE)).replace(tzinfo=None, microsecond=0)
        old = _create_bill(client, bill_payload(apartment["id"], room["id"]))
        current = _create_bill(client, bill_payload(apartment["id"], room["id"], billing_date=now.isoformat()))

        response = client.post("/api/bills/latest-room-data", json={
            "room_id": room["id"],
            "update_current_month": True,
            "tenant_info": {
                "tenant_name": "Renamed Tenant",
                "tenant_address": "1 New Rd",
                "tenant_phone": "0899999999",
                "tenant_tax_id": "1101700000002",
            },
        })

        assert response.status_code == 200
        assert response.json() == {"matched_count": 1, "updated_count": 1}
        updated = client.get(f"/api/bills/{current['id']}").json()
        assert updated["tenant_name"] == "Renamed Tenant"
        assert Decimal(updated["grand_total"]) == Decimal(current["grand_total"])
        assert client.get(f"/api/bills/{old['id']}").json()["tenant_name"] == "Somchai Jaidee"

    def test_update_requires_flag(self, client, room_with_apartment):
        _, room = room_with_apartment

        response = client.post("/api/bills/latest-room-data", json={
            "room_id": room["id"],
            "update_current_month": False,
            "tenant_info": {
                "tenant_name": "A",
                "tenant_address": "B",
                "tenant_phone": "C",
                "tenant_tax_id": "D",
            },
        })

        assert response.status_code == 400

    def test_blank_tenant_info_is_rejected(self, client, room_with_apartment, bill_payload):
        apartment, room = room_with_apartment
        now = datetime.now(ZoneInfo(REPORT_TIMEZONE)).replace(tzinfo=None, microsecond=0)
        bill = _create_bill(client, bill_payload(apartment["id"], room["id"], billing_date=now.isoformat()))

        response = client.post("/api/bills/latest-room-data", json={
            "room_id": room["id"],
            "update_current_month": True,
            "tenant_info": {
                "tenant_name": " ",
                "tenant_address": " ",
                "tenant_phone": " ",
                "tenant_tax_id": " ",
            },
        })

        assert response.status_code == 422
        assert client.get(f"/api/bills/{bill['id']}").json()["tenant_name"] == "Somchai Jaidee"
