import sys
from enum import Enum

# ==============================================================================
# Error Taxonomy
# ==============================================================================

class ConfigurationError(Exception):
    """
    The dice given on the command line cannot start a game: fewer than
    MIN_DICE dice, a die without exactly FACE_COUNT faces, or a face that is
    not a non-negative integer.

    `position` and `argument` point at the offending die when there is one.
    The rendered message ends with a working invocation to copy from.
    """
    _invocation_command = "python"
    EXAMPLE_DICE = "2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7"

    @staticmethod
    def set_invocation_command(command: str):
        ConfigurationError._invocation_command = command

    def __init__(self, message: str, position: int | None = None, argument: str | None = None):
        self.message = message
        self.position = position
        self.argument = argument
        super().__init__(self.message)

    def __str__(self) -> str:
        script_name = sys.argv[0] if sys.argv else 'game.py'
        where = f"Dice at argument {self.position} ('{self.argument}'): " if self.position is not None else ""
        example = f"{ConfigurationError._invocation_command} {script_name} {self.EXAMPLE_DICE}"
        return f"\nArgument Error: {where}{self.message}\n\nExample usage:\n{example}\n"


class InputErrorKind(Enum):
    EMPTY = "empty"
    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"


class InputError(Exception):
    """Keyboard input that does not fit the range the prompt declared."""

    def __init__(self, kind: InputErrorKind, low: int, high: int):
        self.kind = kind
        self.low = low
        self.high = high
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.kind is InputErrorKind.EMPTY:
            detail = "no input was given"
        elif self.kind is InputErrorKind.NOT_A_NUMBER:
            detail = "input is not a whole number"
        else:
            detail = "number is out of range"
        return f"You must enter a number between {self.low} and {self.high} ({detail})."

    def __str__(self) -> str:
        return f"Input Error: {self.message}"


class InvariantViolation(Exception):
    """A caller broke a contract (e.g. min > max). Never shown as user error."""
