"""Month-wide valuation routes: delete, depreciation and summary."""
from datetime import date

from conftest import add_valuation, make_group, make_item

from fintrack.database.models import AssetValuation

AUG, SEP, OCT = date(2026, 8, 1), date(2026, 9, 1), date(2026, 10, 1)


class TestDeleteMonth:
    def test_deletes_only_the_callers_valuations(self, client, db, user, other_user, headers):
        mine = make_item(db, make_group(db, user), "Mine")
        theirs = make_item(db, make_group(db, other_user), "Theirs")
        add_valuation(db, mine, SEP, 1)
        add_valuation(db, mine, AUG, 2)
        add_valuation(db, theirs, SEP, 3)

        response = client.delete("/api/asset-valuations", params={"month": "2026-09-01"}, headers=headers)
        assert response.json() == {"deleted": 1}

        db.expire_all()
        left = {(v.item_id, v.month) for v in db.query(AssetValuation).all()}
        assert left == {(mine.id, AUG), (theirs.id, SEP)}

    def test_month_is_required(self, client, headers):
        response = client.delete("/api/asset-valuations", headers=headers)
        assert response.status_code == 400
        assert response.json() == {"error": "month required (YYYY-MM-01)"}


class TestApplyDepreciationRoute:
    def test_applies_and_reports_count(self, client, db, user, headers):
        car = make_item(db, make_group(db, user), "Car", depreciation=50)
        add_valuation(db, car, SEP, 200)

        response = client.post("/api/asset-valuations/apply-depreciation", json={"month": "2026-10"}, headers=headers)
        assert response.json() == {"applied": 1}

        db.expire_all()
        assert db.query(AssetValuation).filter(AssetValuation.month == OCT).one().value == 150

    def test_idempotent_in_effect(self, client, db, user, headers):
        car = make_item(db, make_group(db, user), "Car", depreciation=50)
        add_valuation(db, car, SEP, 200)

        client.post("/api/asset-valuations/apply-depreciation", json={"month": "2026-10-01"}, headers=headers)
        again = client.post("/api/asset-valuations/apply-depreciation", json={"month": "2026-10-01"}, headers=headers)
        assert again.json() == {"applied": 0}
        db.expire_all()
        assert db.query(AssetValuation).filter(AssetValuation.month == OCT).count() == 1

    def test_no_prior_value_means_nothing_applied(self, client, db, user, headers):
        make_item(db, make_group(db, user), "Car", depreciation=50)
        response = client.post("/api/asset-valuations/apply-depreciation", json={"month": "2026-10-01"}, headers=headers)
        assert response.json() == {"applied": 0}

    def test_month_required(self, client, headers):
        assert client.post("/api/asset-valuations/apply-depreciation", json={}, headers=headers).status_code == 400
        assert client.post("/api/asset-valuations/apply-depreciation", json={"month": ""}, headers=headers).status_code == 400


class TestSummary:
    def test_net_worth_history_and_allocation(self, client, db, user, headers):
        cash = make_item(db, make_group(db, user, "Liquidity"), "Cash")
        car = make_item(db, make_group(db, user, "Vehicles"), "Car")
        add_valuation(db, cash, AUG, 1000)
        add_valuation(db, cash, SEP, 1200)
        add_valuation(db, car, SEP, 8000)

        body = client.get("/api/asset-valuations/summary", headers=headers).json()
        assert body["netWorth"] == 9200
        assert body["netWorthHistory"] == [
            {"date": "2026-08-01", "value": 1000.0},
            {"date": "2026-09-01", "value": 9200.0},
        ]
        assert {s["name"]: s["value"] for s in body["assetAllocation"]} == {"Liquidity": 1200.0, "Vehicles": 8000.0}

    def test_empty(self, client, headers):
        body = client.get("/api/asset-valuations/summary", headers=headers).json()
        assert body == {"netWorth": 0.0, "netWorthHistory": [], "assetAllocation": []}
