import logging
import sys
from typing import List, Optional, TextIO

from ..farm.models import Crop, Field

logger = logging.getLogger(__name__)


class Console:
    """Output sink for game text."""

    def print(self, line: str):
        raise NotImplementedError

    def new_line(self):
        raise NotImplementedError

    def section_break(self):
        raise NotImplementedError


class StdoutConsole(Console):
    def __init__(self, stream: Optional[TextIO] = None, width: int = 40):
        self.stream = stream or sys.stdout
        self.width = width

    def print(self, line: str):
        self.stream.write(line + "\n")

    def new_line(self):
        self.stream.write("\n")

    def section_break(self):
        self.stream.write("=" * self.width + "\n")


class InputProvider:
    """
    Source of player decisions.

    Implementations must only return legal values: an action from the
    offered list, a field or crop from the offered list, and a quantity
    within [0, max_volume]. ``get_field_to_buy`` returns None to cancel.
    """

    def get_next_action(self, actions, session):
        raise NotImplementedError

    def get_field_to_plant(self, fields: List[Field]) -> Field:
        raise NotImplementedError

    def get_crop_to_plant(self, field: Field, balance: int, crops: List[Crop]) -> Crop:
        raise NotImplementedError

    def get_crop_quantity(self, max_volume: int) -> int:
        raise NotImplementedError

    def get_field_to_buy(self, fields: List[Field]) -> Optional[Field]:
        raise NotImplementedError

    def wait_for_enter(self):
        raise NotImplementedError

    def close(self):
        raise NotImplementedError


class StdinInputProvider(InputProvider):
    """Reads numeric choices from a text stream, re-prompting until they are valid."""

    def __init__(self, stream: Optional[TextIO] = None, console: Optional[Console] = None):
        self.stream = stream or sys.stdin
        self.console = console or StdoutConsole()
        self.closed = False

    def _read_line(self) -> str:
        line = self.stream.readline()
        if line == "":
            raise EOFError("input stream closed")
        return line.strip()

    def _read_int(self, low: int, high: int) -> int:
        while True:
            raw = self._read_line()
            try:
                value = int(raw)
            except ValueError:
                self.console.print(f"Please enter a number between {low} and {high}.")
                continue
            if low <= value <= high:
                return value
            self.console.print(f"Please enter a number between {low} and {high}.")

    def get_next_action(self, actions, session):
        return actions[self._read_int(1, len(actions)) - 1]

    def get_field_to_plant(self, fields: List[Field]) -> Field:
        return fields[self._read_int(1, len(fields)) - 1]

    def get_crop_to_plant(self, field: Field, balance: int, crops: List[Crop]) -> Crop:
        return crops[self._read_int(1, len(crops)) - 1]

    def get_crop_quantity(self, max_volume: int) -> int:
        return self._read_int(0, max_volume)

    def get_field_to_buy(self, fields: List[Field]) -> Optional[Field]:
        choice = self._read_int(1, len(fields) + 1)
        if choice == len(fields) + 1:
            return None
        return fields[choice - 1]

    def wait_for_enter(self):
        self.console.print("Press enter to continue.")
        self._read_line()

    def close(self):
        if self.stream is not sys.stdin:
            self.stream.close()
        self.closed = True
        logger.debug("input provider closed")
