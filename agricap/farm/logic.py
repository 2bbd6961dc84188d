import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field as ModelField

from ..common.config_manager import GameSettings
from ..weather.logic import WeatherGenerator, describe_weather
from ..weather.models import WeatherReading
from .models import Crop, Field, GameState

logger = logging.getLogger(__name__)


class InsufficientFundsError(ValueError):
    pass


def calculate_profit(heat: float, wetness: float, fields: List[Field], crops: Dict[str, Crop]) -> int:
    """
    Revenue of every planted field for the given weather.

    Yield is a perfect score of 1 minus the crop's sensitivity-weighted
    distance from its ideal weather; it is not clamped, so a bad year
    produces negative revenue. Each field's revenue is stored on the
    field as ``last_revenue``.
    """
    profit = 0
    for field in fields:
        if field.is_empty:
            continue
        crop = crops[field.crop_name]
        heat_score = abs(heat - crop.ideal_heat) * crop.heat_factor
        wetness_score = abs(wetness - crop.ideal_wetness) * crop.wetness_factor
        crop_yield = 1 - heat_score - wetness_score
        # int() truncates toward zero
        revenue = int(crop_yield * field.quantity * crop.sale_price * field.soil_quality)
        field.last_revenue = revenue
        profit += revenue
    return profit


def max_volume(field: Field, crop: Crop, balance: int) -> int:
    return min(field.capacity, balance // crop.cost)


def plant_crop(state: GameState, field: Field, crop: Crop, quantity: int) -> int:
    """Plant and pay for ``quantity`` units. Returns the amount spent."""
    if quantity > max_volume(field, crop, state.balance):
        raise ValueError(f"cannot plant {quantity} {crop.name} in {field.name}")
    field.plant(crop, quantity)
    total_cost = quantity * crop.cost
    state.balance -= total_cost
    state.expenditure += total_cost
    logger.info("planted %d %s in %s for %d", quantity, crop.name, field.name, total_cost)
    return total_cost


def purchase_field(state: GameState, field: Field) -> int:
    if field not in state.available_fields:
        raise ValueError(f"{field.name} is not for sale")
    if field.price > state.balance:
        logger.warning("cannot buy %s: price %d, balance %d", field.name, field.price, state.balance)
        raise InsufficientFundsError("Sorry, you have insufficient funds.")
    state.available_fields.remove(field)
    state.owned_fields.append(field)
    state.balance -= field.price
    state.expenditure += field.price
    state.new_assets += field.price
    logger.info("bought %s for %d", field.name, field.price)
    return field.price


class FieldPerformance(BaseModel):
    name: str
    crop: str
    revenue: int
    cost: int


class RoundReport(BaseModel):
    year: int
    heat: float
    wetness: float
    narrative: str
    fields: List[FieldPerformance] = ModelField(default_factory=list)
    new_assets: int
    revenue: int
    expenses: int
    balance: int
    total_assets: int

    @property
    def net_profit(self) -> int:
        return self.revenue + self.new_assets - self.expenses

    @property
    def outcome(self) -> str:
        if self.net_profit > 0:
            return "profit"
        if self.net_profit == 0:
            return "break-even"
        return "loss"


class RoundEngine:
    """Resolves one year: weather, harvest, bookkeeping, replant reset."""

    def __init__(self, weather: WeatherGenerator, settings: Optional[GameSettings] = None):
        self.weather = weather
        self.settings = settings or weather.settings

    def play_round(self, state: GameState) -> RoundReport:
        reading: WeatherReading = self.weather.next_year()
        profit = calculate_profit(reading.heat, reading.wetness, state.owned_fields, state.crops_by_name)

        state.balance += profit
        state.year += 1

        report = RoundReport(
            year=state.year - 1,
            heat=reading.heat,
            wetness=reading.wetness,
            narrative=describe_weather(reading, self.settings),
            fields=[
                FieldPerformance(
                    name=f.name,
                    crop=f.crop_name,
                    revenue=f.last_revenue,
                    cost=state.crop_for(f).cost * f.quantity,
                )
                for f in state.owned_fields if not f.is_empty
            ],
            new_assets=state.new_assets,
            revenue=profit,
            expenses=state.expenditure,
            balance=state.balance,
            total_assets=state.total_assets(),
        )
        logger.info("year %d resolved: heat=%.3f wetness=%.3f revenue=%d net=%d balance=%d",
                    report.year, reading.heat, reading.wetness, profit, report.net_profit, state.balance)

        state.expenditure = 0
        state.new_assets = 0
        for field in state.owned_fields:
            field.clear()
            field.last_revenue = 0
        return report
