"""
Per-player scoreboard state within a match.
"""
from dataclasses import dataclass, replace

from dartscore.core import Player

# Darts in a full visit
DARTS_PER_VISIT = 3


@dataclass(frozen=True)
class PlayerMatchState:
    """
    Scoreboard line for one player.

    remaining_score and the *_in_leg counters restart every leg; the
    totals run for the whole match.
    """
    player: Player
    remaining_score: int

    total_score: int = 0  # Points scored (busts excluded)
    total_darts: int = 0
    darts_in_leg: int = 0
    turns_in_leg: int = 0
    last_turn_score: int = 0

    legs_won: int = 0
    sets_won: int = 0

    @classmethod
    def initial(cls, player: Player, starting_score: int) -> "PlayerMatchState":
        return cls(player=player, remaining_score=starting_score)

    def apply_visit(self, score: int, darts: int = DARTS_PER_VISIT) -> "PlayerMatchState":
        """
        Subtract an accepted visit.

        Args:
            score: Points scored
            darts: Darts used (fewer than 3 only on a checkout)
        """
        return replace(
            self,
            remaining_score=self.remaining_score - score,
            total_score=self.total_score + score,
            total_darts=self.total_darts + darts,
            darts_in_leg=self.darts_in_leg + darts,
            turns_in_leg=self.turns_in_leg + 1,
            last_turn_score=score,
        )

    def bust(self) -> "PlayerMatchState":
        """Busted visit: score stays, but the darts and the turn are spent."""
        return replace(
            self,
            total_darts=self.total_darts + DARTS_PER_VISIT,
            darts_in_leg=self.darts_in_leg + DARTS_PER_VISIT,
            turns_in_leg=self.turns_in_leg + 1,
            last_turn_score=0,
        )

    def new_leg(self, starting_score: int) -> "PlayerMatchState":
        """Back to the starting score for the next leg."""
        return replace(
            self,
            remaining_score=starting_score,
            darts_in_leg=0,
            turns_in_leg=0,
        )

    @property
    def three_dart_average(self) -> float:
        """Points per three darts over the match so far."""
        if self.total_darts == 0:
            return 0.0
        return self.total_score / self.total_darts * DARTS_PER_VISIT
