from dataclasses import dataclass
from enum import Enum

from errors import InputError, InputErrorKind

EXIT_TOKEN = "X"
HELP_TOKEN = "?"


@dataclass(frozen=True)
class ParseResult:
    value: int | None = None
    error: InputErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_number(text: str | None, low: int, high: int) -> ParseResult:
    """Never raises; a bad value comes back as a result carrying the error kind."""
    text = (text or "").strip()
    if not text:
        return ParseResult(error=InputErrorKind.EMPTY)
    if not text.isdecimal():
        return ParseResult(error=InputErrorKind.NOT_A_NUMBER)
    digits = text.lstrip("0") or "0"
    # longer than the bound means out of range; keeps int() away from huge strings
    if len(digits) > len(str(max(high, 0))):
        return ParseResult(error=InputErrorKind.OUT_OF_RANGE)
    value = int(digits)
    if not low <= value <= high:
        return ParseResult(error=InputErrorKind.OUT_OF_RANGE)
    return ParseResult(value=value)


def require_number(text: str | None, low: int, high: int) -> int:
    """Turns a failed parse into an InputError for prompts that do not retry."""
    result = parse_number(text, low, high)
    if not result.ok:
        raise InputError(result.error, low, high)
    return result.value


class MenuAction(Enum):
    SELECT = "select"
    EXIT = "exit"
    HELP = "help"
    INVALID = "invalid"


@dataclass(frozen=True)
class MenuSelection:
    action: MenuAction
    index: int | None = None
    error: InputErrorKind | None = None


def parse_menu(text: str | None, option_count: int) -> MenuSelection:
    token = (text or "").strip().upper()
    if token == EXIT_TOKEN:
        return MenuSelection(MenuAction.EXIT)
    if token == HELP_TOKEN:
        return MenuSelection(MenuAction.HELP)
    result = parse_number(token, 0, option_count - 1)
    if not result.ok:
        return MenuSelection(MenuAction.INVALID, error=result.error)
    return MenuSelection(MenuAction.SELECT, index=result.value)
