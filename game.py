import logging
import sys

from dice import Die, DiceParser
from errors import ConfigurationError, InputError
from parsing import EXIT_TOKEN, HELP_TOKEN, MenuAction, parse_menu
from probability import HelpTableGenerator, ProbabilityCalculator
from round_protocol import Result, RoundOutcome, RoundProtocol

# ==============================================================================
# Console User Interface
# ==============================================================================

def _print_to_stderr(text: str):
    print(text, file=sys.stderr)


class GameUI:
    def __init__(self, reader=input, writer=print, error_writer=None):
        self._read = reader
        self._write = writer
        self._write_error = error_writer if error_writer is not None else _print_to_stderr

    def display_message(self, text: str):
        self._write(text)

    def display_error(self, text: str):
        self._write_error(text)

    def display_hmac(self, hmac_hex: str):
        self._write(f"(HMAC={hmac_hex})")

    def display_key_and_move(self, key_text: str, move: int, name: str = "My selection"):
        self._write(f"{name}: {move} (KEY={key_text})")

    def read_line(self, prompt: str) -> str:
        return self._read(prompt)

    def show_menu(self, prompt: str, options: list[str]):
        self._write(f"\n{prompt}")
        for i, option in enumerate(options):
            self._write(f" {i} - {option}")
        self._write(f" {EXIT_TOKEN} - Exit")
        self._write(f" {HELP_TOKEN} - Help")

# ==============================================================================
# Main Game Controller
# ==============================================================================

class GameController:
    def __init__(self, dice: list[Die], ui: GameUI, protocol: RoundProtocol | None = None,
                 help_gen: HelpTableGenerator | None = None):
        self.all_dice = dice
        self.ui = ui
        self.protocol = protocol if protocol is not None else RoundProtocol(dice, ui)
        self.help_gen = help_gen if help_gen is not None else HelpTableGenerator()

    def run(self):
        self.ui.display_message("--- Welcome to the Non-Transitive Dice Game! ---")
        while True:
            try:
                if self.play_round() is None:
                    break
            except InputError as e:
                self.ui.display_error(str(e))
                self.ui.display_message("The round is aborted.")
            play_again = self.ui.read_line("\nPlay another round? (y/n): ").strip().lower()
            if play_again != 'y':
                break
        self.ui.display_message("Thanks for playing!")

    def play_round(self) -> RoundOutcome | None:
        """Plays one round. Returns None when the user chose to exit at the dice menu."""
        user_first = self.protocol.determine_first_move()

        user_index = self._get_player_die_choice()
        if user_index is None:
            return None

        outcome = self.protocol.play(user_first, user_index)
        self._announce(outcome)
        return outcome

    def _announce(self, outcome: RoundOutcome):
        user, opponent = outcome.user_face, outcome.opponent_face
        self.ui.display_message("\n--- Results ---")
        if outcome.result is Result.USER_WINS:
            self.ui.display_message(f"You win! ({user} > {opponent})")
        elif outcome.result is Result.OPPONENT_WINS:
            self.ui.display_message(f"I win! ({opponent} > {user})")
        else:
            self.ui.display_message(f"It's a tie! ({user} = {opponent})")

    def _get_player_die_choice(self) -> int | None:
        options = [f"[{d}]" for d in self.all_dice]
        while True:
            self.ui.show_menu("Choose your dice:", options)
            selection = parse_menu(self.ui.read_line("Your selection: "), len(options))
            if selection.action is MenuAction.EXIT:
                return None
            if selection.action is MenuAction.HELP:
                self.ui.display_message(self.help_gen.generate_table(self.all_dice, ProbabilityCalculator))
                continue
            if selection.action is MenuAction.INVALID:
                self.ui.display_error(
                    f"Input Error: Please select a valid dice index between 0 and {len(options) - 1}, "
                    f"'{HELP_TOKEN}' or '{EXIT_TOKEN}'."
                )
                continue
            return selection.index

# ==============================================================================
# Main Execution Block
# ==============================================================================

def main(argv: list[str] | None = None, ui: GameUI | None = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    # Dynamically determine the command used to invoke the script
    if 'py.exe' in sys.executable.lower():
        ConfigurationError.set_invocation_command('py')
    else:
        ConfigurationError.set_invocation_command('python')

    args = sys.argv[1:] if argv is None else argv
    try:
        dice = DiceParser.parse(args)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    ui = ui if ui is not None else GameUI()
    try:
        GameController(dice, ui).run()
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted. Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
