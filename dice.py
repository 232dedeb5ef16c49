from errors import ConfigurationError

FACE_COUNT = 6
MIN_DICE = 3

# ==============================================================================
# Data Structure for a Die
# ==============================================================================

class Die:
    def __init__(self, faces: list[int]):
        if len(faces) != FACE_COUNT:
            raise ValueError(f"A die must have exactly {FACE_COUNT} faces.")
        self.faces = tuple(faces)

    def __str__(self) -> str:
        return ",".join(map(str, self.faces))

    def __repr__(self) -> str:
        return f"Die([{self}])"

    def __len__(self) -> int:
        return len(self.faces)

    def __getitem__(self, index: int) -> int:
        return self.faces[index]

    def __eq__(self, other) -> bool:
        return isinstance(other, Die) and self.faces == other.faces

    def __hash__(self) -> int:
        return hash(self.faces)

# ==============================================================================
# Command-Line Argument Parser
# ==============================================================================

class DiceParser:
    @staticmethod
    def parse(args: list[str]) -> list[Die]:
        if len(args) < MIN_DICE:
            raise ConfigurationError(f"Please specify at least {MIN_DICE} dice.")
        return [DiceParser.parse_die(arg, position) for position, arg in enumerate(args, start=1)]

    @staticmethod
    def parse_die(arg: str, position: int = 1) -> Die:
        try:
            faces = [int(token) for token in arg.split(',')]
        except ValueError:
            raise ConfigurationError("all faces must be integer values.", position, arg)
        if len(faces) != FACE_COUNT:
            raise ConfigurationError(
                f"a die must have exactly {FACE_COUNT} integers, got {len(faces)}.", position, arg
            )
        if any(face < 0 for face in faces):
            raise ConfigurationError("faces must not be negative.", position, arg)
        return Die(faces)
