import logging
import random
from typing import List, Optional

from ..actions.logic import available_actions
from ..common.config_manager import GameSettings
from ..console.logic import Console, InputProvider
from ..farm.logic import RoundEngine
from ..farm.models import Crop, Field, GameState
from ..farm.render import FarmRenderer
from ..weather.logic import WeatherGenerator

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns the game state and drives the yearly loop.

    Each year the player picks menu actions until one of them ends the
    round, then the round engine resolves the harvest. The session stops
    on bankruptcy, on exit, or once the final year has been resolved.
    """

    def __init__(self, seed: int, input_provider: InputProvider, console: Console,
                 crops: List[Crop], fields: List[Field],
                 settings: Optional[GameSettings] = None,
                 renderer: Optional[FarmRenderer] = None):
        if not crops:
            raise ValueError("at least one crop is required")
        if not fields:
            raise ValueError("at least one field is required")
        known = {c.name for c in crops}
        unknown = [f.name for f in fields if not f.is_empty and f.crop_name not in known]
        if unknown:
            raise ValueError(f"fields planted with crops missing from the catalog: {', '.join(unknown)}")
        self.settings = settings or GameSettings()
        self.input_provider = input_provider
        self.console = console
        self.renderer = renderer or FarmRenderer()
        self.rng = random.Random(seed)
        self.weather = WeatherGenerator(self.rng, self.settings)
        self.engine = RoundEngine(self.weather, self.settings)

        available = list(fields)
        # the first field is the player's starting land
        starting_field = available.pop(0)
        self.state = GameState(
            balance=self.settings.starting_balance,
            owned_fields=[starting_field],
            available_fields=available,
            crops=list(crops),
        )

    def run(self) -> int:
        """The game loop. Returns the player's score."""
        self.renderer.emit(self.console, "intro.txt", years=self.settings.end_game_year)
        try:
            while not self.state.exiting:
                if not self.state.can_afford_crops():
                    logger.info("bankrupt in year %d with balance %d", self.state.year, self.state.balance)
                    self.console.print("You are bankrupt. You will have to find a job.")
                    self.console.new_line()
                    break

                self.poll_input()
                if self.state.exiting:
                    logger.info("player left in year %d", self.state.year)
                    break

                self.play_round()
                if self.state.year - 1 == self.settings.end_game_year:
                    self.evaluate_score()
                    break
        finally:
            self.finish()
        return self.state.score

    def poll_input(self):
        """Run menu turn slices until an action ends the round."""
        while True:
            actions = available_actions(self.state)
            self.renderer.emit(self.console, "menu.txt", actions=actions)

            action = self.input_provider.get_next_action(actions, self)
            action.execute(self)
            if action.ends_round:
                break

            self.input_provider.wait_for_enter()
            self.console.section_break()
            self.console.new_line()

    def play_round(self):
        report = self.engine.play_round(self.state)
        self.renderer.emit(self.console, "round_report.txt", report=report)
        self.input_provider.wait_for_enter()
        return report

    def evaluate_score(self):
        self.state.score = self.state.balance + self.state.total_assets()
        logger.info("game over after %d years, score %d", self.settings.end_game_year, self.state.score)
        self.renderer.emit(self.console, "final_score.txt", score=self.state.score)

    def finish(self):
        self.console.print("Bye!")
        self.input_provider.close()
