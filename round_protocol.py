import logging
from dataclasses import dataclass
from enum import Enum

from crypto_provider import FairCommitment, SecureRandomInt
from dice import FACE_COUNT, Die
from parsing import require_number

logger = logging.getLogger(__name__)

# ==============================================================================
# Provably Fair Round Protocol
# ==============================================================================

class Result(Enum):
    USER_WINS = "user_wins"
    OPPONENT_WINS = "opponent_wins"
    TIE = "tie"


@dataclass(frozen=True)
class RoundOutcome:
    user_first_move: bool
    user_die: int
    opponent_die: int
    user_face: int
    opponent_face: int
    result: Result


class RoundProtocol:
    """
    Runs one duel round against the human:
    first move -> dice selection -> opponent throw -> user throw -> result.

    Every random number the opponent contributes is committed to (its HMAC is
    shown) before the human types their own number, and revealed afterwards.
    Invalid input at any of these prompts raises InputError and ends the round.
    """

    def __init__(self, dice: list[Die], ui, committer: FairCommitment | None = None,
                 random_int: SecureRandomInt | None = None):
        self.dice = dice
        self.ui = ui
        self.random_int = random_int if random_int is not None else SecureRandomInt()
        self.committer = committer if committer is not None else FairCommitment(self.random_int)

    @staticmethod
    def combine(user_number: int, committed: int, faces: int = FACE_COUNT) -> int:
        return (user_number + committed) % faces

    @staticmethod
    def resolve(user_face: int, opponent_face: int) -> Result:
        if user_face > opponent_face:
            return Result.USER_WINS
        if opponent_face > user_face:
            return Result.OPPONENT_WINS
        return Result.TIE

    def _committed_exchange(self, low: int, high: int, prompt: str) -> tuple[int, int]:
        commitment = self.committer.commit(low, high)
        self.ui.display_message(f"I selected a random value in the range {low}..{high}.")
        self.ui.display_hmac(commitment.tag_hex)

        user_number = require_number(self.ui.read_line(prompt), low, high)

        value, _ = self.committer.reveal(commitment)
        self.ui.display_key_and_move(commitment.key_text, value)
        return user_number, value

    def determine_first_move(self) -> bool:
        self.ui.display_message("\nLet's determine who makes the first move.")
        guess, value = self._committed_exchange(0, 1, "Try to guess my selection (0 or 1): ")
        user_first = guess == value
        if user_first:
            self.ui.display_message("You guessed correctly. You make the first move.")
        else:
            self.ui.display_message("You guessed wrong. I make the first move.")
        return user_first

    def select_opponent_die(self, user_index: int) -> int:
        remaining = [i for i in range(len(self.dice)) if i != user_index]
        return self.random_int.choice(remaining)

    def fair_throw(self, die: Die) -> int:
        faces = len(die)
        user_number, value = self._committed_exchange(
            0, faces - 1, f"Add your number modulo {faces} (0..{faces - 1}): "
        )
        index = self.combine(user_number, value, faces)
        self.ui.display_message(f"The result is {user_number} + {value} = {index} (mod {faces}).")
        return die[index]

    def play(self, user_first_move: bool, user_index: int) -> RoundOutcome:
        user_die = self.dice[user_index]
        opponent_index = self.select_opponent_die(user_index)
        opponent_die = self.dice[opponent_index]
        self.ui.display_message(f"You choose the [{user_die}] dice.")
        self.ui.display_message(f"I choose the [{opponent_die}] dice.")

        self.ui.display_message("\nIt's time for my throw.")
        opponent_face = self.fair_throw(opponent_die)
        self.ui.display_message(f"My throw is {opponent_face}.")

        self.ui.display_message("\nIt's time for your throw.")
        user_face = self.fair_throw(user_die)
        self.ui.display_message(f"Your throw is {user_face}.")

        outcome = RoundOutcome(
            user_first_move=user_first_move,
            user_die=user_index,
            opponent_die=opponent_index,
            user_face=user_face,
            opponent_face=opponent_face,
            result=self.resolve(user_face, opponent_face),
        )
        logger.debug("round resolved: %s", outcome)
        return outcome
