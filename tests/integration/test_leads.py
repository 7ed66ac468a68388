"""Integration tests for leads and scanned visitors."""

import pytest


pytestmark = pytest.mark.integration


@pytest.fixture
async def exhibitor(client, organization, event) -> dict:
    response = await client.post(
        "/api/v1/exhibitors",
        json={
            "organizationId": organization["id"],
            "eventId": event["id"],
            "companyName": "Steel Works",
            "email": "sales@steelworks.in",
        },
    )
    return response.json()["exhibitor"]


async def save_scan(client, exhibitor: dict, scan_type: str = "QR_SCAN", **fields) -> dict:
    response = await client.post(
        "/api/v1/scanned-visitors",
        json={
            "exhibitorId": exhibitor["id"],
            "eventId": exhibitor["event_id"],
            "scanType": scan_type,
            **fields,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["scan"]


class TestLeads:
    async def test_create_defaults(self, client, exhibitor):
        response = await client.post(
            "/api/v1/leads",
            json={"exhibitorId": exhibitor["id"], "name": "Anil", "email": "anil@buyer.in"},
        )

        assert response.status_code == 201
        lead = response.json()["lead"]
        assert lead["source"] == "QR Scan"
        assert lead["status"] == "New"
        assert lead["additional_data"] == {}
        assert lead["scanned_at"] is not None

    async def test_repeat_captures_are_kept(self, client, exhibitor):
        for _ in range(2):
            await client.post("/api/v1/leads", json={"exhibitorId": exhibitor["id"], "email": "anil@buyer.in"})

        response = await client.get("/api/v1/leads", params={"exhibitorId": exhibitor["id"]})

        assert len(response.json()) == 2
        assert response.json()[0]["exhibitor_name"] == "Steel Works"
        assert response.json()[0]["event_name"] == "Build Expo 2099"

    async def test_filter_by_exhibitor(self, client, exhibitor):
        await client.post("/api/v1/leads", json={"exhibitorId": exhibitor["id"], "name": "Anil"})
        await client.post("/api/v1/leads", json={"name": "Walk-in"})

        filtered = await client.get("/api/v1/leads", params={"exhibitorId": exhibitor["id"]})
        everything = await client.get("/api/v1/leads")

        assert [lead["name"] for lead in filtered.json()] == ["Anil"]
        assert len(everything.json()) == 2

    async def test_update_keeps_fields_not_sent(self, client, exhibitor):
        created = await client.post(
            "/api/v1/leads",
            json={"exhibitorId": exhibitor["id"], "name": "Anil", "company": "Buyer Co", "rating": 3},
        )
        lead_id = created.json()["lead"]["id"]

        response = await client.put(
            f"/api/v1/leads/{lead_id}",
            json={"status": "Contacted", "followUpDate": "2099-04-01", "company": None},
        )

        assert response.status_code == 200
        lead = response.json()["lead"]
        assert lead["status"] == "Contacted"
        assert lead["follow_up_date"] == "2099-04-01"
        assert lead["company"] == "Buyer Co"
        assert lead["rating"] == 3

    async def test_update_unknown_lead(self, client):
        response = await client.put("/api/v1/leads/999", json={"status": "Contacted"})

        assert response.status_code == 404

    async def test_delete(self, client, exhibitor):
        created = await client.post("/api/v1/leads", json={"exhibitorId": exhibitor["id"]})
        lead_id = created.json()["lead"]["id"]

        first = await client.delete(f"/api/v1/leads/{lead_id}")
        second = await client.delete(f"/api/v1/leads/{lead_id}")

        assert first.status_code == 200
        assert first.json()["message"] == "Lead deleted successfully"
        assert second.status_code == 404


class TestScans:
    async def test_save(self, client, exhibitor):
        response = await client.post(
            "/api/v1/scanned-visitors",
            json={
                "exhibitorId": exhibitor["id"],
                "scanType": "OCR",
                "visitorName": "Anil",
                "ocrRawText": "ANIL\nBuyer Co",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Scan saved successfully"
        assert body["scan"]["scan_type"] == "OCR"
        assert body["scan"]["lead_status"] == "New"
        assert body["scan"]["ocr_raw_text"] == "ANIL\nBuyer Co"

    @pytest.mark.parametrize("scan_type", ["MANUAL", "qr_scan", ""])
    async def test_invalid_scan_type(self, client, exhibitor, scan_type):
        response = await client.post(
            "/api/v1/scanned-visitors", json={"exhibitorId": exhibitor["id"], "scanType": scan_type}
        )

        assert response.status_code == 422

    async def test_list_filters(self, client, exhibitor):
        await save_scan(client, exhibitor, "QR_SCAN", visitorEmail="a@x.in")
        await save_scan(client, exhibitor, "OCR", visitorEmail="b@x.in")

        everything = await client.get("/api/v1/scanned-visitors", params={"exhibitorId": exhibitor["id"]})
        ocr_only = await client.get(
            "/api/v1/scanned-visitors", params={"exhibitorId": exhibitor["id"], "scanType": "OCR"}
        )
        other_event = await client.get("/api/v1/scanned-visitors", params={"eventId": exhibitor["event_id"] + 100})

        assert everything.json()["count"] == 2
        assert everything.json()["scans"][0]["scan_type"] == "OCR"
        assert everything.json()["scans"][0]["exhibitor_company"] == "Steel Works"
        assert [s["visitor_email"] for s in ocr_only.json()["scans"]] == ["b@x.in"]
        assert other_event.json() == {"success": True, "count": 0, "scans": []}

    async def test_list_rejects_unknown_scan_type(self, client):
        response = await client.get("/api/v1/scanned-visitors", params={"scanType": "MANUAL"})

        assert response.status_code == 422

    async def test_stats(self, client, exhibitor):
        await save_scan(client, exhibitor, "QR_SCAN", visitorEmail="a@x.in")
        await save_scan(client, exhibitor, "QR_SCAN", visitorEmail="a@x.in")
        await save_scan(client, exhibitor, "OCR", visitorEmail="b@x.in")

        response = await client.get("/api/v1/scanned-visitors/stats", params={"exhibitorId": exhibitor["id"]})

        assert response.status_code == 200
        assert response.json()["stats"] == {
            "total_scans": 3,
            "qr_scans": 2,
            "ocr_scans": 1,
            "unique_visitors": 2,
            "today_scans": 3,
        }

    async def test_stats_without_scans(self, client):
        response = await client.get("/api/v1/scanned-visitors/stats", params={"exhibitorId": 999})

        assert response.json()["stats"]["total_scans"] == 0

    async def test_update_replaces_follow_up_date(self, client, exhibitor):
        scan = await save_scan(client, exhibitor, visitorName="Anil")
        url = f"/api/v1/scanned-visitors/{scan['id']}"
        await client.put(url, json={"followUpDate": "2099-04-01"})

        response = await client.put(url, json={"leadStatus": "Hot"})

        assert response.status_code == 200
        updated = response.json()["scan"]
        assert updated["lead_status"] == "Hot"
        assert updated["visitor_name"] == "Anil"
        assert updated["follow_up_date"] is None

    async def test_update_unknown_scan(self, client):
        response = await client.put("/api/v1/scanned-visitors/999", json={"notes": "x"})

        assert response.status_code == 404

    async def test_delete(self, client, exhibitor):
        scan = await save_scan(client, exhibitor)

        first = await client.delete(f"/api/v1/scanned-visitors/{scan['id']}")
        second = await client.delete(f"/api/v1/scanned-visitors/{scan['id']}")

        assert first.json()["message"] == "Scan deleted successfully"
        assert second.status_code == 404
