"""Integration tests for plans and coupons."""

import re

import pytest
from sqlalchemy import update

from expohub.modules.plans.models import Coupon


pytestmark = pytest.mark.integration


async def create_plan(client, **fields) -> dict:
    response = await client.post("/api/v1/plans", json={"planName": "Expo Pro", **fields})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePlan:
    async def test_custom_plan_gets_coupon(self, client):
        body = await create_plan(client, pricing={"amount": 4999})

        assert body["plan"]["type"] == "Custom"
        assert body["plan"]["validity_days"] == 30
        assert body["plan"]["status"] == "Active"
        assert re.fullmatch(r"CUSTOM-[0-9A-Z]{6}", body["coupon"]["coupon_code"])
        assert body["coupon"]["plan_id"] == body["plan"]["id"]
        assert body["coupon"]["status"] == "ACTIVE"
        assert body["coupon"]["used_count"] == 0

    async def test_catalog_plan_has_no_coupon(self, client):
        body = await create_plan(client, planType="Standard", validity=365)

        assert body["plan"]["validity_days"] == 365
        assert body["coupon"] is None

    async def test_name_required(self, client):
        response = await client.post("/api/v1/plans", json={"planType": "Custom"})

        assert response.status_code == 422

    async def test_list_newest_first(self, client):
        await create_plan(client, planName="First")
        await create_plan(client, planName="Second")

        response = await client.get("/api/v1/plans")

        assert [plan["name"] for plan in response.json()] == ["Second", "First"]


class TestCoupons:
    async def test_list_includes_plan(self, client):
        body = await create_plan(client, pricing={"amount": 4999})

        response = await client.get("/api/v1/plans/coupons")

        [coupon] = response.json()
        assert coupon["code"] == body["coupon"]["coupon_code"]
        assert coupon["plan_name"] == "Expo Pro"
        assert coupon["plan_type"] == "Custom"
        assert coupon["pricing"] == {"amount": 4999}

    async def test_verify(self, client):
        body = await create_plan(client, description="All features", limits={"events": 5})
        code = body["coupon"]["coupon_code"]

        response = await client.post("/api/v1/plans/coupons/verify", json={"code": f"  {code} "})

        assert response.status_code == 200
        coupon = response.json()["coupon"]
        assert coupon["coupon_code"] == code
        assert coupon["plan_name"] == "Expo Pro"
        assert coupon["limits"] == {"events": 5}
        assert coupon["description"] == "All features"

    async def test_verify_unknown_code(self, client):
        response = await client.post("/api/v1/plans/coupons/verify", json={"code": "CUSTOM-000000"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Invalid or inactive coupon code"

    async def test_verify_inactive_code(self, client, db):
        code = (await create_plan(client))["coupon"]["coupon_code"]
        await db.execute(update(Coupon).where(Coupon.coupon_code == code).values(status="USED"))
        await db.commit()

        response = await client.post("/api/v1/plans/coupons/verify", json={"code": code})

        assert response.status_code == 404
