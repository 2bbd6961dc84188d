import pytest

from agricap.farm.logic import (
    InsufficientFundsError, RoundEngine, calculate_profit, max_volume, plant_crop, purchase_field,
)
from agricap.farm.models import Crop, Field, GameState
from agricap.weather.logic import WeatherGenerator


@pytest.fixture
def crop():
    return Crop(name="corn", cost=10, sale_price=100, ideal_heat=1.0, ideal_wetness=1.0,
                heat_factor=1.0, wetness_factor=1.0)


@pytest.fixture
def field():
    return Field(name="plot", price=200, capacity=10, soil_quality=1.0)


@pytest.fixture
def state(crop, field):
    return GameState(balance=500, owned_fields=[field], crops=[crop])


class TestProfit:

    def test_ideal_weather_gives_full_yield(self, crop, field):
        field.plant(crop, 5)
        assert calculate_profit(1.0, 1.0, [field], {"corn": crop}) == 500
        assert field.last_revenue == 500

    def test_weather_deltas_scale_by_sensitivity(self, crop, field):
        field.plant(crop, 5)
        assert calculate_profit(1.25, 0.75, [field], {"corn": crop}) == 250

    def test_bad_weather_gives_negative_revenue(self, field):
        fussy = Crop(name="vine", cost=10, sale_price=100, heat_factor=4.0, wetness_factor=2.0)
        field.plant(fussy, 5)
        assert calculate_profit(1.25, 0.75, [field], {"vine": fussy}) == -250

    def test_revenue_truncates_toward_zero(self, field):
        fussy = Crop(name="vine", cost=1, sale_price=7, heat_factor=4.0, wetness_factor=2.0)
        field.plant(fussy, 3)
        # 0.5 * 3 * 7 = 10.5
        assert calculate_profit(1.0, 1.25, [field], {"vine": fussy}) == 10
        field.last_revenue = 0
        # -0.5 * 3 * 7 = -10.5
        assert calculate_profit(1.25, 0.75, [field], {"vine": fussy}) == -10

    def test_soil_quality_scales_revenue(self, crop):
        poor = Field(name="stony", price=50, capacity=10, soil_quality=0.5)
        poor.plant(crop, 4)
        assert calculate_profit(1.0, 1.0, [poor], {"corn": crop}) == 200

    def test_empty_fields_contribute_nothing(self, crop, field):
        other = Field(name="other", price=100, capacity=5)
        field.plant(crop, 2)
        assert calculate_profit(1.0, 1.0, [field, other], {"corn": crop}) == 200
        assert other.last_revenue == 0

    def test_deterministic(self, crop, field):
        field.plant(crop, 7)
        results = {calculate_profit(1.13, 0.91, [field], {"corn": crop}) for _ in range(20)}
        assert len(results) == 1


class TestField:

    def test_plant_and_clear(self, crop, field):
        assert field.is_empty
        field.plant(crop, 10)
        assert field.crop_name == "corn" and field.quantity == 10
        field.clear()
        assert field.is_empty and field.quantity == 0

    def test_cannot_exceed_capacity(self, crop, field):
        with pytest.raises(ValueError):
            field.plant(crop, 11)
        assert field.is_empty

    def test_cannot_plant_zero(self, crop, field):
        with pytest.raises(ValueError):
            field.plant(crop, 0)

    def test_cannot_plant_twice(self, crop, field):
        field.plant(crop, 1)
        with pytest.raises(ValueError):
            field.plant(crop, 1)

    def test_crop_catalog_validation(self):
        with pytest.raises(ValueError):
            Crop(name="free", cost=0, sale_price=1)
        with pytest.raises(ValueError):
            Crop(name="debt", cost=1, sale_price=-1)


class TestPurchases:

    def test_max_volume_limited_by_money(self, crop, field):
        assert max_volume(field, crop, 35) == 3

    def test_max_volume_limited_by_capacity(self, crop, field):
        assert max_volume(field, crop, 5000) == 10

    def test_plant_crop_charges_balance(self, state, crop, field):
        before = state.balance
        spent = plant_crop(state, field, crop, 9)
        assert spent == 90
        assert state.balance == before - 90
        assert state.expenditure == 90
        assert field.quantity * crop.cost <= before

    def test_plant_crop_rejects_unaffordable_quantity(self, crop, field):
        state = GameState(balance=30, owned_fields=[field], crops=[crop])
        with pytest.raises(ValueError):
            plant_crop(state, field, crop, 4)
        assert state.balance == 30 and field.is_empty

    def test_purchase_field_moves_ownership(self, state):
        meadow = Field(name="meadow", price=300, capacity=15)
        state.available_fields.append(meadow)
        purchase_field(state, meadow)
        assert meadow in state.owned_fields
        assert meadow not in state.available_fields
        assert state.balance == 200
        assert state.expenditure == 300 and state.new_assets == 300

    def test_purchase_field_insufficient_funds(self, state):
        estate = Field(name="estate", price=5000, capacity=100)
        state.available_fields.append(estate)
        with pytest.raises(InsufficientFundsError):
            purchase_field(state, estate)
        assert estate in state.available_fields
        assert state.balance == 500 and state.expenditure == 0 and state.new_assets == 0


class TestRoundEngine:

    def test_round_updates_balance_and_clears_fields(self, state, crop, field, fixed_rng):
        plant_crop(state, field, crop, 5)
        engine = RoundEngine(WeatherGenerator(fixed_rng([1.0, 1.0])))

        report = engine.play_round(state)

        assert report.year == 1 and state.year == 2
        assert report.revenue == 500
        assert report.expenses == 50
        assert report.net_profit == 450 and report.outcome == "profit"
        assert report.balance == state.balance == 950
        assert report.total_assets == 200
        assert [(f.name, f.crop, f.revenue, f.cost) for f in report.fields] == [("plot", "corn", 500, 50)]
        assert state.expenditure == 0 and state.new_assets == 0
        assert all(f.is_empty and f.quantity == 0 for f in state.owned_fields)

    def test_round_with_loss(self, state, field, fixed_rng):
        fussy = Crop(name="vine", cost=10, sale_price=100, heat_factor=4.0, wetness_factor=2.0)
        state.crops.append(fussy)
        plant_crop(state, field, fussy, 5)
        # wetness 0.75, heat 1.25
        engine = RoundEngine(WeatherGenerator(fixed_rng([0.75, 1.25])))

        report = engine.play_round(state)

        assert report.revenue == -250
        assert report.net_profit == -300 and report.outcome == "loss"
        assert state.balance == 500 - 50 - 250

    def test_field_purchase_alone_breaks_even(self, state, fixed_rng):
        meadow = Field(name="meadow", price=300, capacity=15)
        state.available_fields.append(meadow)
        purchase_field(state, meadow)
        engine = RoundEngine(WeatherGenerator(fixed_rng([1.0, 1.0])))

        report = engine.play_round(state)

        assert report.new_assets == 300 and report.expenses == 300
        assert report.outcome == "break-even"
        assert report.total_assets == 500
        assert report.fields == []
        assert report.narrative == "This was a mild year with moderate rainfall."
