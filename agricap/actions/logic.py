import logging
from typing import List

from ..farm.logic import InsufficientFundsError, max_volume, plant_crop, purchase_field

logger = logging.getLogger(__name__)


class Action:
    """A menu entry. ``ends_round`` hands control to the round engine after execution."""
    prompt = ""
    ends_round = False

    def execute(self, session):
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__}>"


class ListCropsAction(Action):
    prompt = "List available crops for purchase"

    def execute(self, session):
        session.renderer.emit(session.console, "crops.txt", crops=session.state.crops)


class StatusAction(Action):
    prompt = "Report farm status"

    def execute(self, session):
        session.renderer.emit(session.console, "status.txt", state=session.state)


class BuyCropsAction(Action):
    prompt = "Plant crops in an empty field"

    def execute(self, session):
        state, console, provider = session.state, session.console, session.input_provider

        empty_fields = state.empty_fields()
        session.renderer.emit(console, "planting_fields.txt", fields=empty_fields)
        field = provider.get_field_to_plant(empty_fields)

        affordable = state.affordable_crops()
        session.renderer.emit(console, "planting_crops.txt", crops=affordable)
        crop = provider.get_crop_to_plant(field, state.balance, affordable)

        # Can't exceed field capacity or spend more money than we have
        volume = max_volume(field, crop, state.balance)

        console.new_line()
        console.print(f"How many units would you like to purchase (maximum {volume})?")
        console.print("Enter 0 to exit to menu.")
        quantity = provider.get_crop_quantity(volume)
        console.new_line()

        if quantity == 0:
            return
        plant_crop(state, field, crop, quantity)


class BuyFieldsAction(Action):
    prompt = "Buy more fields"

    def execute(self, session):
        state, console = session.state, session.console

        session.renderer.emit(console, "field_market.txt", fields=state.available_fields)
        field = session.input_provider.get_field_to_buy(list(state.available_fields))
        console.new_line()

        # Cancelled; back to the menu
        if field is None:
            return
        try:
            purchase_field(state, field)
        except InsufficientFundsError as e:
            console.print(str(e))
            return
        console.new_line()


class PlayAction(Action):
    prompt = "Advance to next year"
    ends_round = True

    def execute(self, session):
        logger.debug("year %d: player ends the turn", session.state.year)


class ExitAction(Action):
    prompt = "Exit game"
    ends_round = True

    def execute(self, session):
        session.state.exiting = True


def available_actions(state) -> List[Action]:
    """Legal actions for the current state, in menu order."""
    actions: List[Action] = [ListCropsAction(), StatusAction()]
    if state.empty_fields() and state.can_afford_crops():
        actions.append(BuyCropsAction())
    if state.available_fields:
        actions.append(BuyFieldsAction())
    actions.append(PlayAction())
    actions.append(ExitAction())
    return actions
