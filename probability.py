from fractions import Fraction

from tabulate import tabulate

from dice import Die

# ==============================================================================
# Probability Calculation Logic
# ==============================================================================

class ProbabilityCalculator:
    @staticmethod
    def calculate_win_probability(die1: Die, die2: Die) -> Fraction:
        wins = sum(1 for f1 in die1.faces for f2 in die2.faces if f1 > f2)
        return Fraction(wins, len(die1) * len(die2))

    @staticmethod
    def calculate_matrix(all_dice: list[Die]) -> list[list[Fraction]]:
        return [
            [ProbabilityCalculator.calculate_win_probability(user_die, pc_die) for pc_die in all_dice]
            for user_die in all_dice
        ]

# ==============================================================================
# Help Table Generation
# ==============================================================================

class HelpTableGenerator:
    @staticmethod
    def generate_table(all_dice: list[Die], calculator=ProbabilityCalculator) -> str:
        headers = ["User v PC >"] + [str(d) for d in all_dice]
        table_data = []
        for i, probabilities in enumerate(calculator.calculate_matrix(all_dice)):
            row = [str(all_dice[i])]
            for j, prob in enumerate(probabilities):
                cell = f"{float(prob):.4f}"
                row.append(f"*{cell}*" if i == j else cell)
            table_data.append(row)

        intro = (
            "\n--- Win Probability Table ---\n"
            "This table shows the probability of the User's die (rows) winning against the PC's die (columns).\n"
            "* Diagonal values show probability of a die winning against an identical one.\n"
        )
        return intro + tabulate(table_data, headers=headers, tablefmt="grid", disable_numparse=True)
