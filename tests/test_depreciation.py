"""Depreciation roll-forward against the database."""
from datetime import date

from conftest import add_valuation, competing_write, make_group, make_item

from fintrack.database.models import AssetValuation
from fintrack.services.depreciation import apply_depreciation, depreciated_value

AUG, SEP, OCT = date(2026, 8, 1), date(2026, 9, 1), date(2026, 10, 1)


def stored(db, item, month):
    db.expire_all()
    row = db.query(AssetValuation).filter(AssetValuation.item_id == item.id, AssetValuation.month == month).first()
    return row.value if row else None


def test_depreciated_value_floors_at_zero():
    assert depreciated_value(200.0, 50.0) == 150.0
    assert depreciated_value(30.0, 50.0) == 0.0


class TestApplyDepreciation:
    def test_rolls_prior_value_forward(self, db, user):
        group = make_group(db, user, "Vehicles")
        car = make_item(db, group, "Car", depreciation=50)
        add_valuation(db, car, SEP, 200)

        assert apply_depreciation(db, user.id, OCT) == 1
        assert stored(db, car, OCT) == 150

    def test_uses_latest_prior_month_even_with_gaps(self, db, user):
        group = make_group(db, user)
        bike = make_item(db, group, "Bike", depreciation=10)
        add_valuation(db, bike, date(2026, 5, 1), 500)
        add_valuation(db, bike, AUG, 300)

        apply_depreciation(db, user.id, OCT)
        assert stored(db, bike, OCT) == 290

    def test_floors_at_zero(self, db, user):
        group = make_group(db, user)
        laptop = make_item(db, group, "Laptop", depreciation=50)
        add_valuation(db, laptop, SEP, 30)

        apply_depreciation(db, user.id, OCT)
        assert stored(db, laptop, OCT) == 0

    def test_skips_items_without_prior_value(self, db, user):
        group = make_group(db, user)
        phone = make_item(db, group, "Phone", depreciation=20)
        add_valuation(db, phone, date(2026, 11, 1), 400)  # only a later value

        assert apply_depreciation(db, user.id, OCT) == 0
        assert stored(db, phone, OCT) is None

    def test_skips_zero_prior_value(self, db, user):
        group = make_group(db, user)
        tv = make_item(db, group, "TV", depreciation=20)
        add_valuation(db, tv, SEP, 0)

        assert apply_depreciation(db, user.id, OCT) == 0

    def test_skips_items_without_depreciation_and_non_leaves(self, db, user):
        group = make_group(db, user)
        plain = make_item(db, group, "Savings")
        add_valuation(db, plain, SEP, 1000)
        parent = make_item(db, group, "Fleet", depreciation=100)
        add_valuation(db, parent, SEP, 5000)
        make_item(db, group, "Van", parent=parent)

        assert apply_depreciation(db, user.id, OCT) == 0
        assert stored(db, plain, OCT) is None
        assert stored(db, parent, OCT) is None

    def test_second_run_inserts_nothing_and_keeps_first_value(self, db, user):
        group = make_group(db, user)
        car = make_item(db, group, "Car", depreciation=50)
        add_valuation(db, car, SEP, 200)

        assert apply_depreciation(db, user.id, OCT) == 1
        car.depreciation_amount = 80
        db.commit()
        assert apply_depreciation(db, user.id, OCT) == 0
        assert stored(db, car, OCT) == 150

    def test_existing_target_value_is_not_overwritten(self, db, user):
        group = make_group(db, user)
        car = make_item(db, group, "Car", depreciation=50)
        add_valuation(db, car, SEP, 200)
        add_valuation(db, car, OCT, 999)

        assert apply_depreciation(db, user.id, OCT) == 0
        assert stored(db, car, OCT) == 999

    def test_only_touches_the_callers_items(self, db, user, other_user):
        mine = make_item(db, make_group(db, user), "Car", depreciation=50)
        theirs = make_item(db, make_group(db, other_user), "Car", depreciation=50)
        add_valuation(db, mine, SEP, 200)
        add_valuation(db, theirs, SEP, 200)

        assert apply_depreciation(db, user.id, OCT) == 1
        assert stored(db, theirs, OCT) is None

    def test_overlapping_write_for_the_month_is_skipped_not_failed(self, engine, db, user):
        group = make_group(db, user)
        car = make_item(db, group, "Car", depreciation=50)
        bike = make_item(db, group, "Bike", depreciation=10)
        add_valuation(db, car, SEP, 200)
        add_valuation(db, bike, SEP, 100)

        with competing_write(engine, car.id, OCT, 999) as fired:
            applied = apply_depreciation(db, user.id, OCT)

        assert fired
        assert applied == 1
        assert stored(db, car, OCT) == 999
        assert stored(db, bike, OCT) == 90
