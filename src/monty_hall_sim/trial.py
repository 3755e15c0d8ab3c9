"""One complete Monty Hall trial with paired stay/switch outcomes."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .game import (
    Game,
    Outcome,
    Strategy,
    change_door,
    create_game,
    determine_winner,
    open_goat_door,
    select_door,
)


@dataclass(frozen=True)
class TrialResult:
    """Shared context of one trial and the outcome of each strategy.

    Attributes:
        game: Prize labels behind doors 1-3
        pick: The contestant's initial door
        opened_door: Goat door opened by the host
        stay_pick: Final door under the stay strategy
        switch_pick: Final door under the switch strategy
        stay_outcome: Outcome of staying
        switch_outcome: Outcome of switching
    """

    game: Game
    pick: int
    opened_door: int
    stay_pick: int
    switch_pick: int
    stay_outcome: Outcome
    switch_outcome: Outcome

    def rows(self) -> list[dict[str, str]]:
        """Return the (strategy, outcome) records, stay first."""
        return [
            {"strategy": Strategy.STAY.value, "outcome": self.stay_outcome.value},
            {"strategy": Strategy.SWITCH.value, "outcome": self.switch_outcome.value},
        ]


def play_game(rng: np.random.Generator | None = None) -> TrialResult:
    """Play one game and evaluate both strategies against it.

    The setup, initial pick and opened door are drawn once and shared, so the
    strategy is the only thing that differs between the two outcomes.

    Args:
        rng: Random generator for every draw in the trial. A fresh unseeded
            generator is used when omitted.
    """
    if rng is None:
        rng = np.random.default_rng()

    game = create_game(rng)
    pick = select_door(rng)
    opened_door = open_goat_door(game, pick, rng)

    stay_pick = change_door(True, opened_door, pick)
    switch_pick = change_door(False, opened_door, pick)

    return TrialResult(
        game=game,
        pick=pick,
        opened_door=opened_door,
        stay_pick=stay_pick,
        switch_pick=switch_pick,
        stay_outcome=determine_winner(stay_pick, game),
        switch_outcome=determine_winner(switch_pick, game),
    )
