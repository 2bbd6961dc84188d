from collections import deque

import pytest

from agricap.common.config_manager import ConfigManager
from agricap.console.logic import Console, InputProvider
from agricap.farm.models import Crop, Field


class RecordingConsole(Console):
    """Keeps every console directive for later assertions."""

    def __init__(self):
        self.events = []

    def print(self, line):
        self.events.append(("print", line))

    def new_line(self):
        self.events.append(("new_line",))

    def section_break(self):
        self.events.append(("section_break",))

    @property
    def lines(self):
        return [e[1] for e in self.events if e[0] == "print"]


class ScriptedInput(InputProvider):
    """
    Replays scripted choices.

    actions: action class names, e.g. "PlayAction"
    plant_fields / crops: names of the field / crop to pick
    quantities: planting quantities
    buy_fields: field names to buy, None to cancel
    """

    def __init__(self, actions=(), plant_fields=(), crops=(), quantities=(), buy_fields=()):
        self.actions = deque(actions)
        self.plant_fields = deque(plant_fields)
        self.crops = deque(crops)
        self.quantities = deque(quantities)
        self.buy_fields = deque(buy_fields)
        self.offered = []
        self.waits = 0
        self.closes = 0

    def get_next_action(self, actions, session):
        names = [type(a).__name__ for a in actions]
        self.offered.append(names)
        if not self.actions:
            raise AssertionError("no scripted action left")
        wanted = self.actions.popleft()
        assert wanted in names, f"{wanted} not offered: {names}"
        return actions[names.index(wanted)]

    def get_field_to_plant(self, fields):
        name = self.plant_fields.popleft()
        return next(f for f in fields if f.name == name)

    def get_crop_to_plant(self, field, balance, crops):
        name = self.crops.popleft()
        return next(c for c in crops if c.name == name)

    def get_crop_quantity(self, max_volume):
        quantity = self.quantities.popleft()
        assert 0 <= quantity <= max_volume
        return quantity

    def get_field_to_buy(self, fields):
        name = self.buy_fields.popleft()
        if name is None:
            return None
        return next(f for f in fields if f.name == name)

    def wait_for_enter(self):
        self.waits += 1

    def close(self):
        self.closes += 1


class FixedRng:
    """Stands in for random.Random; gauss() replays the given values in order, then repeats the last."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def gauss(self, mu, sigma):
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture(autouse=True)
def reset_config():
    yield
    ConfigManager.get_instance().reset()


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def scripted_input():
    return ScriptedInput


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def crops():
    return [
        Crop(name="Wheat", description="Golden grain", cost=50, sale_price=60),
        Crop(name="Grapes", description="Fussy vines", cost=120, sale_price=200,
             ideal_heat=1.15, ideal_wetness=0.85, heat_factor=2.5, wetness_factor=2.5),
    ]


@pytest.fixture
def fields():
    return [
        Field(name="Home Paddock", description="Behind the house", price=200, capacity=10, soil_quality=1.0),
        Field(name="River Meadow", description="Rich silt", price=300, capacity=15, soil_quality=1.0),
        Field(name="North Acres", description="Large tract", price=1000, capacity=40, soil_quality=0.8),
    ]
