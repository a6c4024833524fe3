"""HTTP tests for admin login and the admin-only endpoints."""

import io

import pytest
from openpyxl import Workbook

from canteen.auth.routes import get_user_db, get_user_manager
from canteen.crud.coupon import confirm_order, list_order_coupons
from canteen.crud.menu import list_active_items
from canteen.models.menu.menu_item import DayOfWeek, MealType
from canteen.schemas.user import UserCreate
from canteen.services.intake import Selection

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def menu_workbook(*rows) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Day", "Breakfast", "Price", "Lunch", "Price", "Dinner", "Price"])
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
async def confirmed_order(db, now, published_menu, place_order, wednesday_lunch) -> str:
    order_id = await place_order(wednesday_lunch)
    await confirm_order(db, order_id, now)
    return order_id


@pytest.mark.api
class TestAdminAuth:
    """Test suite for login and token checks."""

    async def test_login_and_verify(self, client, admin_headers) -> None:
        response = await client.get("/admin/verify-token", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True

    async def test_wrong_password(self, client, admin_headers) -> None:
        response = await client.post("/auth/jwt/login", data={"username": ADMIN_EMAIL, "password": "nope"})
        assert response.status_code == 400

    async def test_missing_token(self, client) -> None:
        response = await client.get("/admin/summary/today")
        assert response.status_code == 401

    async def test_garbage_token(self, client) -> None:
        response = await client.get("/admin/verify-token", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401

    async def test_non_admin_user_is_forbidden(self, client, db) -> None:
        async for user_db in get_user_db(db):
            async for manager in get_user_manager(user_db):
                await manager.create(UserCreate(email="cashier@canteen.in", password="cashier-pass-1"))

        login = await client.post("/auth/jwt/login", data={"username": "cashier@canteen.in", "password": "cashier-pass-1"})
        token = login.json()["access_token"]

        response = await client.get("/admin/verify-token", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403


@pytest.mark.api
class TestMenuUpload:
    """Test suite for POST /menu/upload."""

    async def test_requires_admin(self, client) -> None:
        files = {"file": ("menu.xlsx", menu_workbook(("Monday", "Poha", 40)), XLSX)}
        response = await client.post("/menu/upload", files=files)
        assert response.status_code == 401

    async def test_publishes_new_version(self, client, db, admin_headers, published_menu) -> None:
        content = menu_workbook(
            ("Monday", "Poha", 40, "Veg thali", 120, "Roti sabzi", 100),
            ("Tuesday", "Idli", 45, None, None, "Khichdi", 90),
        )
        files = {"file": ("week.xlsx", content, XLSX)}

        response = await client.post("/menu/upload", files=files, headers=admin_headers)

        assert response.status_code == 201, response.text
        body = response.json()
        assert body["item_count"] == 5
        assert body["version"] == 2
        active = await list_active_items(db)
        assert len(active) == 5

    async def test_csv_upload(self, client, admin_headers) -> None:
        content = b"Day,Breakfast,Price,Lunch,Price,Dinner,Price\nFriday,Upma,35,,,Pulao,95\n"
        files = {"file": ("week.csv", content, "text/csv")}

        response = await client.post("/menu/upload", files=files, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["item_count"] == 2

    async def test_rows_without_descriptions_keep_old_menu(self, client, db, admin_headers, published_menu) -> None:
        files = {"file": ("week.xlsx", menu_workbook(("Monday", None, 40, None, 120)), XLSX)}

        response = await client.post("/menu/upload", files=files, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No valid menu items with descriptions found in the uploaded file."
        assert len(await list_active_items(db)) == 21

    async def test_corrupt_file_keeps_old_menu(self, client, db, admin_headers, published_menu) -> None:
        files = {"file": ("week.xlsx", b"not really a workbook", XLSX)}

        response = await client.post("/menu/upload", files=files, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["field"] == "file"
        assert len(await list_active_items(db)) == 21

    async def test_wrong_extension(self, client, admin_headers) -> None:
        files = {"file": ("menu.txt", b"Monday,Poha,40", "text/plain")}
        response = await client.post("/menu/upload", files=files, headers=admin_headers)
        assert response.status_code == 400


@pytest.mark.api
class TestCouponEndpoints:
    """Test suite for order confirmation, lookup and redemption."""

    async def test_confirm_order(self, client, db, admin_headers, published_menu, place_order, wednesday_lunch) -> None:
        order_id = await place_order(wednesday_lunch)

        response = await client.post(f"/orders/{order_id}/confirm", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "order_id": order_id, "activated": 2}
        again = await client.post(f"/orders/{order_id}/confirm", headers=admin_headers)
        assert again.status_code == 409

    async def test_confirm_requires_admin(self, client, published_menu, place_order, wednesday_lunch) -> None:
        order_id = await place_order(wednesday_lunch)
        response = await client.post(f"/orders/{order_id}/confirm")
        assert response.status_code == 401

    async def test_redeem_then_redeem_again(self, client, db, admin_headers, confirmed_order) -> None:
        coupon_id = (await list_order_coupons(db, confirmed_order))[0].id

        first = await client.post(f"/coupons/{coupon_id}/redeem", headers=admin_headers)
        assert first.status_code == 200
        assert first.json()["message"] == f"Coupon {coupon_id} marked as used."
        assert first.json()["coupon"]["status"] == "Used"

        second = await client.post(f"/coupons/{coupon_id}/redeem", headers=admin_headers)
        assert second.status_code == 409
        assert second.json()["success"] is False

    async def test_redeem_pending_coupon(self, client, db, admin_headers, published_menu, place_order, wednesday_lunch) -> None:
        order_id = await place_order(wednesday_lunch)
        coupon_id = (await list_order_coupons(db, order_id))[0].id

        response = await client.post(f"/coupons/{coupon_id}/redeem", headers=admin_headers)
        assert response.status_code == 409

    async def test_redeem_unknown_coupon(self, client, admin_headers) -> None:
        response = await client.post("/coupons/999999/redeem", headers=admin_headers)
        assert response.status_code == 404

    async def test_coupon_lookup(self, client, db, admin_headers, confirmed_order) -> None:
        coupon_id = (await list_order_coupons(db, confirmed_order))[0].id

        response = await client.get(f"/coupons/{coupon_id}", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "Active"
        assert body["meal_date"] == "2026-10-21"
        assert body["order_type"] == "Dine-In"


@pytest.mark.api
class TestAdminReports:
    """Test suite for summary, search and menu views."""

    async def test_summary_today(self, client, admin_headers, published_menu, place_order) -> None:
        await place_order(Selection(DayOfWeek.MONDAY, MealType.DINNER, quantity=3))

        response = await client.get("/admin/summary/today", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == "2026-10-19"
        assert body["upcoming_meal"] == "Breakfast"
        assert body["summary"]["Dinner"] == {"Active": 0, "Pending": 3}
        assert body["summary"]["Lunch"] == {"Active": 0, "Pending": 0}

    async def test_search_coupons(self, client, admin_headers, confirmed_order) -> None:
        response = await client.get("/admin/coupons", params={"search": "asha"}, headers=admin_headers)

        assert response.status_code == 200
        coupons = response.json()["coupons"]
        assert len(coupons) == 2
        assert {c["order_id"] for c in coupons} == {confirmed_order}

    async def test_search_filters(self, client, admin_headers, confirmed_order) -> None:
        params = {"orderId": confirmed_order, "mealType": "Dinner"}
        response = await client.get("/admin/coupons", params=params, headers=admin_headers)
        assert response.json()["coupons"] == []

        params = {"date": "2026-10-21", "status": "Active"}
        response = await client.get("/admin/coupons", params=params, headers=admin_headers)
        assert len(response.json()["coupons"]) == 2

    async def test_current_menu_and_history(self, client, admin_headers, published_menu) -> None:
        current = await client.get("/admin/menu/current", headers=admin_headers)
        assert current.status_code == 200
        menu = current.json()["menu"]
        assert len(menu) == 21
        assert (menu[0]["day_of_week"], menu[0]["meal_type"]) == ("Monday", "Breakfast")

        content = b"Day,Breakfast,Price\nMonday,Upma,50\n"
        await client.post("/menu/upload", files={"file": ("w.csv", content, "text/csv")}, headers=admin_headers)

        history = await client.get(
            "/admin/menu/history", params={"day": "Monday", "mealType": "Breakfast"}, headers=admin_headers
        )
        versions = [(item["version"], item["is_active"], item["description"]) for item in history.json()["menu"]]
        assert versions == [(1, False, "Monday breakfast thali"), (2, True, "Upma")]
