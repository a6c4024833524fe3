"""Unit tests for the admin summary and coupon search."""

from datetime import date

import pytest

from canteen.crud.coupon import confirm_order, list_order_coupons
from canteen.crud.report import CouponFilters, search_coupons, summary_for_today
from canteen.models.coupon.coupon import CouponStatus, OrderType
from canteen.models.menu.menu_item import DayOfWeek, MealType
from canteen.services.intake import Selection, initiate_order

TODAY = date(2026, 10, 19)


@pytest.fixture
async def bookings(db, now, published_menu, place_order) -> dict:
    """Asha: 2 paid Monday dinners and 1 unpaid Monday lunch. Ravi: 1 paid Tuesday lunch."""
    paid = await place_order(Selection(DayOfWeek.MONDAY, MealType.DINNER, quantity=2))
    await confirm_order(db, paid, now)
    unpaid = await place_order(Selection(DayOfWeek.MONDAY, MealType.LUNCH))
    ravi = await initiate_order(
        db,
        customer_name="Ravi Kumar",
        customer_email="ravi.k@example.org",
        customer_phone="9123456780",
        selections=[Selection(DayOfWeek.TUESDAY, MealType.LUNCH)],
        order_type=OrderType.TAKEAWAY,
        now=now,
    )
    await confirm_order(db, ravi, now)
    return {"paid": paid, "unpaid": unpaid, "ravi": ravi}


@pytest.mark.unit
class TestSummaryForToday:
    """Test suite for the per-meal counts of today's service."""

    async def test_empty_day_reports_zeroes(self, db) -> None:
        summary = await summary_for_today(db, TODAY)
        assert summary == {
            "Breakfast": {"Active": 0, "Pending": 0},
            "Lunch": {"Active": 0, "Pending": 0},
            "Dinner": {"Active": 0, "Pending": 0},
        }

    async def test_counts_active_and_pending_for_today_only(self, db, bookings) -> None:
        summary = await summary_for_today(db, TODAY)
        assert summary["Dinner"] == {"Active": 2, "Pending": 0}
        assert summary["Lunch"] == {"Active": 0, "Pending": 1}
        assert summary["Breakfast"] == {"Active": 0, "Pending": 0}

    async def test_other_days_counted_on_their_own_date(self, db, bookings) -> None:
        summary = await summary_for_today(db, date(2026, 10, 20))
        assert summary["Lunch"] == {"Active": 1, "Pending": 0}


@pytest.mark.unit
class TestSearchCoupons:
    """Test suite for filtered coupon search."""

    async def test_excludes_pending_by_default(self, db, bookings) -> None:
        coupons = await search_coupons(db, CouponFilters())
        assert len(coupons) == 3
        assert CouponStatus.PENDING not in {c.status for c in coupons}

    async def test_pending_only_when_asked(self, db, bookings) -> None:
        coupons = await search_coupons(db, CouponFilters(status=CouponStatus.PENDING))
        assert [c.order_id for c in coupons] == [bookings["unpaid"]]

    async def test_free_text_matches_any_customer_field(self, db, bookings) -> None:
        assert len(await search_coupons(db, CouponFilters(search="RAVI"))) == 1
        assert len(await search_coupons(db, CouponFilters(search="98765"))) == 2
        assert len(await search_coupons(db, CouponFilters(search=bookings["paid"][:8]))) == 2

    async def test_field_filters_combine(self, db, bookings) -> None:
        coupons = await search_coupons(
            db, CouponFilters(email="asha", meal_type=MealType.DINNER, meal_date=TODAY)
        )
        assert len(coupons) == 2
        assert await search_coupons(db, CouponFilters(name="asha", meal_type=MealType.BREAKFAST)) == []

    async def test_order_and_phone_filters(self, db, bookings) -> None:
        by_order = await search_coupons(db, CouponFilters(order_id=bookings["ravi"]))
        assert [c.customer_name for c in by_order] == ["Ravi Kumar"]
        assert len(await search_coupons(db, CouponFilters(phone="9123"))) == 1

    async def test_newest_first_and_capped(self, db, bookings) -> None:
        coupons = await search_coupons(db, CouponFilters(), page_size=2)
        assert len(coupons) == 2
        ravi_ids = [c.id for c in await list_order_coupons(db, bookings["ravi"])]
        assert coupons[0].id == ravi_ids[0]

    async def test_wildcards_in_search_are_literal(self, db, now, bookings) -> None:
        assert await search_coupons(db, CouponFilters(search="%")) == []
        assert await search_coupons(db, CouponFilters(email="_")) == []

        meera = await initiate_order(
            db,
            customer_name="Meera 100% Veg",
            customer_email="meera_n@example.com",
            customer_phone="9988776655",
            selections=[Selection(DayOfWeek.TUESDAY, MealType.DINNER)],
            order_type=OrderType.DINE_IN,
            now=now,
        )
        await confirm_order(db, meera, now)

        assert [c.order_id for c in await search_coupons(db, CouponFilters(email="a_n"))] == [meera]
        assert [c.order_id for c in await search_coupons(db, CouponFilters(search="100%"))] == [meera]
        assert await search_coupons(db, CouponFilters(email="ravi_k")) == []
