"""Tests for analytics API endpoints."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ledgerline.models import ItemKind


@pytest.fixture
def one_two_three(make_item):
    """Three expenses of 1, 2 and 3."""
    for amount in ("1", "2", "3"):
        make_item(amount=amount)


class TestAggregates:
    """Test sum, avg, count, median and percentile."""

    def test_sum_and_avg(self, client, make_item):
        make_item(amount="12.50")
        make_item(amount="7.50")

        assert client.get("/api/analytics/sum").json() == {"sum": "20.00"}
        assert client.get("/api/analytics/avg").json() == {"avg": "10.00"}
        assert client.get("/api/analytics/count").json() == {"count": 2}

    def test_median(self, client, one_two_three):
        response = client.get("/api/analytics/median")
        assert response.status_code == 200
        assert response.json() == {"median": "2"}

    def test_median_even_count_interpolates(self, client, make_item):
        for amount in ("1", "2", "3", "4"):
            make_item(amount=amount)
        assert client.get("/api/analytics/median").json() == {"median": "2.5"}

    @pytest.mark.parametrize("percentile,expected", [
        ("0", "1"),
        ("0.25", "1.5"),
        ("0.5", "2"),
        ("1", "3"),
    ])
    def test_percentile(self, client, one_two_three, percentile, expected):
        response = client.get("/api/analytics/percentile", params={"percentile": percentile})
        assert response.status_code == 200
        assert response.json() == {"percentile": expected}

    def test_percentile_defaults_to_ninetieth(self, client, one_two_three):
        assert client.get("/api/analytics/percentile").json() == {"percentile": "2.8"}

    @pytest.mark.parametrize("percentile", ["1.5", "-0.1", "nan", "inf", "high"])
    def test_percentile_out_of_range(self, client, one_two_three, percentile):
        response = client.get("/api/analytics/percentile", params={"percentile": percentile})
        assert response.status_code == 400

    def test_precision_preserved_in_sum(self, client, make_item):
        make_item(amount="123456789012345.67890")
        make_item(amount="0.00001")
        assert client.get("/api/analytics/sum").json() == {"sum": "123456789012345.67891"}

    def test_sum_without_float_drift(self, client, make_item):
        for _ in range(10):
            make_item(amount="0.1")
        assert client.get("/api/analytics/sum").json() == {"sum": "1.0"}

    def test_avg_non_terminating(self, client, make_item):
        for amount in ("1", "1", "2"):
            make_item(amount=amount)
        avg = Decimal(client.get("/api/analytics/avg").json()["avg"])
        assert abs(avg - Decimal(4) / Decimal(3)) < Decimal("1e-20")


class TestEmptySelection:
    """Aggregates over nothing are the zero of their type."""

    @pytest.mark.parametrize("path,expected", [
        ("sum", {"sum": "0"}),
        ("avg", {"avg": "0"}),
        ("count", {"count": 0}),
        ("median", {"median": "0"}),
        ("percentile", {"percentile": "0"}),
    ])
    def test_empty(self, client, path, expected):
        response = client.get(f"/api/analytics/{path}")
        assert response.status_code == 200
        assert response.json() == expected

    def test_filter_matching_nothing(self, client, make_item):
        make_item(amount="5", kind=ItemKind.expense)
        response = client.get("/api/analytics/sum", params={"kind": "income"})
        assert response.json() == {"sum": "0"}


class TestFilters:
    """Test that filters combine and partition consistently."""

    def test_filters_are_conjunctive(self, client, make_item, make_category):
        food = make_category(name="Food")
        rent = make_category(name="Rent")
        make_item(amount="10", kind=ItemKind.expense, category_id=food.id)
        make_item(amount="20", kind=ItemKind.income, category_id=food.id)
        make_item(amount="40", kind=ItemKind.expense, category_id=rent.id)

        params = {"kind": "expense", "category_id": str(food.id)}
        assert client.get("/api/analytics/sum", params=params).json() == {"sum": "10"}
        assert client.get("/api/analytics/count", params=params).json() == {"count": 1}
        assert client.get("/api/analytics/count", params={"kind": "expense"}).json() == {"count": 2}

    def test_sum_is_additive_over_time_split(self, client, make_item):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for day, amount in enumerate(["1.10", "2.20", "3.30", "4.40"]):
            make_item(amount=amount, occurred_at=base + timedelta(days=day))

        split = base + timedelta(days=2)
        before = client.get("/api/analytics/sum", params={
            "to": (split - timedelta(microseconds=1)).isoformat(),
        }).json()["sum"]
        after = client.get("/api/analytics/sum", params={"from": split.isoformat()}).json()["sum"]
        total = client.get("/api/analytics/sum").json()["sum"]

        assert Decimal(before) + Decimal(after) == Decimal(total)
        assert total == "11.00"

    def test_avg_consistent_with_sum_and_count(self, client, make_item):
        for amount in ("2.50", "3.50", "6.00"):
            make_item(amount=amount)

        total = Decimal(client.get("/api/analytics/sum").json()["sum"])
        count = client.get("/api/analytics/count").json()["count"]
        avg = Decimal(client.get("/api/analytics/avg").json()["avg"])
        assert avg * count == total

    def test_median_matches_half_percentile(self, client, make_item):
        for amount in ("3.75", "1.20", "9.99", "4.00", "2.35"):
            make_item(amount=amount)

        median = client.get("/api/analytics/median").json()["median"]
        half = client.get("/api/analytics/percentile", params={"percentile": "0.5"}).json()["percentile"]
        assert median == half == "3.75"

    @pytest.mark.parametrize("path", ["sum", "avg", "count", "median", "percentile"])
    def test_invalid_filter(self, client, path):
        response = client.get(f"/api/analytics/{path}", params={
            "from": "2024-05-01T00:00:00Z",
            "to": "2024-04-01T00:00:00Z",
        })
        assert response.status_code == 400


class TestWideAmounts:
    """Arbitrary-precision amounts survive every aggregate."""

    def test_sum_of_wide_amounts(self, client, make_item):
        make_item(amount="1" * 101 + ".5")
        make_item(amount="0.5")
        assert client.get("/api/analytics/sum").json() == {"sum": "1" * 100 + "2.0"}

    def test_avg_of_single_wide_amount(self, client, make_item):
        make_item(amount="12345678901234567890123456789.12")
        assert client.get("/api/analytics/avg").json() == {
            "avg": "12345678901234567890123456789.12"
        }

    def test_median_of_wide_amounts(self, client, make_item):
        make_item(amount="1" + "0" * 98 + ".00")
        make_item(amount="1" + "0" * 98 + ".02")
        response = client.get("/api/analytics/median")
        assert response.status_code == 200
        assert response.json() == {"median": "1" + "0" * 98 + ".01"}
