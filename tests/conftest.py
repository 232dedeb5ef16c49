from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from crypto_provider import SecureRandomInt  # noqa: E402


class ScriptedRandom(SecureRandomInt):
    """Returns preset values from draw() instead of fresh entropy."""

    def __init__(self, values: list[int]) -> None:
        super().__init__()
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def draw(self, min_val: int, max_val: int) -> int:
        self.calls.append((min_val, max_val))
        value = self.values.pop(0)
        assert min_val <= value <= max_val
        return value


class ScriptedUI:
    def __init__(self, inputs: list[str]) -> None:
        self.inputs = list(inputs)
        self.messages: list[str] = []
        self.errors: list[str] = []
        self.hmacs: list[str] = []
        self.reveals: list[tuple[str, int]] = []

    def display_message(self, text: str) -> None:
        self.messages.append(text)

    def display_error(self, text: str) -> None:
        self.errors.append(text)

    def display_hmac(self, hmac_hex: str) -> None:
        self.hmacs.append(hmac_hex)

    def display_key_and_move(self, key_text: str, move: int, name: str = "My selection") -> None:
        self.reveals.append((key_text, move))

    def read_line(self, prompt: str) -> str:
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def show_menu(self, prompt: str, options: list[str]) -> None:
        self.messages.append(prompt)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def scripted_ui():
    return ScriptedUI


@pytest.fixture
def dice_args() -> list[str]:
    return ["2,2,4,4,9,9", "1,1,1,1,1,1", "3,3,5,5,7,7"]
