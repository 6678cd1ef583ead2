"""
Checkout arithmetic.

Answers two questions about a remaining score:
- can it still be finished with three darts or fewer, ending on a double
- how many of those darts could have been aimed at a double

Nothing here validates a committed score; the match engine only uses these
answers to decide which follow-up question to put to the player.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Tuple

MAX_TURN_SCORE = 180
MAX_CHECKOUT = 170
BULLSEYE = 50

# Three-dart totals that no combination of darts can produce
IMPOSSIBLE_SCORES: FrozenSet[int] = frozenset({
    159, 162, 163, 165, 166, 168, 169, 172, 173, 175, 176, 178, 179,
})

# Finish bands keyed by the finishing turn score
ONE_DART_FINISHES: FrozenSet[int] = frozenset(range(2, 41, 2)) | {BULLSEYE}
# Auto one-dart-on-double band: big finishes are booked as one dart at the
# double without asking. Some (101, 104, 107, 110) take only two darts.
SINGLE_DOUBLE_DART_FINISHES: FrozenSet[int] = frozenset(
    {99, *range(101, 159), 160, 161, 164, 167, 170}
)


def _single_dart_values() -> Tuple[int, ...]:
    """All distinct scores a single dart can make (misses excluded)."""
    values = set()
    for segment in range(1, 21):
        values.update((segment, segment * 2, segment * 3))
    values.update((25, BULLSEYE))
    return tuple(sorted(values))


DART_VALUES: Tuple[int, ...] = _single_dart_values()


def is_double_value(value: int) -> bool:
    """True if a single dart of this value can be a double (D1-D20 or bull)."""
    return value == BULLSEYE or (value % 2 == 0 and 2 <= value <= 40)


def is_valid_turn_score(score: int) -> bool:
    """True if three darts can add up to this score."""
    return 0 <= score <= MAX_TURN_SCORE and score not in IMPOSSIBLE_SCORES


@dataclass(frozen=True)
class CheckoutInfo:
    """
    Result of analysing a remaining score.

    darts_on_double_options holds every count of darts (1-3) that could
    have been thrown at a double while finishing this score.
    dart_count_options holds every number of darts (1-3) the finish can
    be made with: 170 only with three, 40 with one, two or three.
    """
    possible: bool
    darts_on_double_options: FrozenSet[int] = frozenset()
    min_darts_to_finish: int = 0
    dart_count_options: FrozenSet[int] = frozenset()

    @property
    def min_darts_on_double(self) -> int:
        return min(self.darts_on_double_options, default=0)

    @property
    def max_darts_on_double(self) -> int:
        return max(self.darts_on_double_options, default=0)


NO_CHECKOUT = CheckoutInfo(possible=False)


@lru_cache(maxsize=None)
def min_darts_to_finish(score: int) -> int:
    """
    Fewest darts (1-3) that finish exactly on a double, 0 if none do.

    Unlike analyze(), odd scores are considered (e.g. 99 = T19, 10, D16).
    """
    if score < 2 or score > MAX_CHECKOUT:
        return 0
    if is_double_value(score):
        return 1
    if any(is_double_value(score - first) for first in DART_VALUES if first < score):
        return 2
    for first in DART_VALUES:
        for second in DART_VALUES:
            last = score - first - second
            if last <= 0:
                break
            if is_double_value(last):
                return 3
    return 0


@lru_cache(maxsize=None)
def analyze(remaining: int) -> CheckoutInfo:
    """
    Work out whether `remaining` can be checked out, with how many darts
    and with how many of them on a double.

    Odd scores are reported as not finishable: the prompt this feeds is only
    shown for even leaves.

    Args:
        remaining: Score left before the visit

    Returns:
        CheckoutInfo (NO_CHECKOUT when impossible)
    """
    if remaining < 2 or remaining > MAX_CHECKOUT or remaining % 2 == 1:
        return NO_CHECKOUT

    options = set()
    dart_counts = set()

    if is_double_value(remaining):
        options.add(1)
        dart_counts.add(1)

    for first in DART_VALUES:
        rest = remaining - first
        if rest <= 0:
            break
        first_on_double = int(is_double_value(first))

        # Two-dart route: first dart, then the double
        if is_double_value(rest):
            options.add(1 + first_on_double)
            dart_counts.add(2)

        # Three-dart route
        for second in DART_VALUES:
            last = rest - second
            if last <= 0:
                break
            if is_double_value(last):
                options.add(1 + first_on_double + int(is_double_value(second)))
                dart_counts.add(3)

    if not options:
        return NO_CHECKOUT

    return CheckoutInfo(
        possible=True,
        darts_on_double_options=frozenset(options),
        min_darts_to_finish=min_darts_to_finish(remaining),
        dart_count_options=frozenset(dart_counts),
    )


def checkout_dart_options(finish: int) -> FrozenSet[int]:
    """
    Darts-on-double counts a player may report for a finish of this size.

    - one-dart finishes (D1-D20, bull): 1, 2 or 3
    - big finishes (the auto one-dart-on-double band): exactly 1, no
      question asked
    - everything else: 1 or 2
    """
    if finish in ONE_DART_FINISHES:
        return frozenset({1, 2, 3})
    if finish in SINGLE_DOUBLE_DART_FINISHES:
        return frozenset({1})
    return frozenset({1, 2})


def checkout_darts(finish: int, darts_on_double: int) -> int:
    """
    Darts used in the finishing visit.

    A player cannot have used fewer darts than the finish needs, nor fewer
    than the darts they report at the double.
    """
    return min(3, max(darts_on_double, min_darts_to_finish(finish)))
