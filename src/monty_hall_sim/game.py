"""Single-step operations of a Monty Hall game.

Doors are numbered 1-3. A game is a tuple of three prize labels, where
``game[door - 1]`` is the prize hidden behind ``door``.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np

DOORS: tuple[int, int, int] = (1, 2, 3)

CAR = "car"
GOAT = "goat"
PRIZES: tuple[str, str, str] = (GOAT, GOAT, CAR)

Game = tuple[str, str, str]


class Outcome(str, Enum):
    """Result of a final pick."""

    WIN = "WIN"
    LOSE = "LOSE"


class Strategy(str, Enum):
    """Contestant policy once the host has opened a door."""

    STAY = "stay"
    SWITCH = "switch"


def _check_door(door: int, name: str = "door") -> int:
    # bool is an int subclass; True would otherwise pass as door 1
    if isinstance(door, bool) or not isinstance(door, (int, np.integer)):
        raise ValueError(f"{name} must be an integer in {DOORS}, got {door!r}")
    if door not in DOORS:
        raise ValueError(f"{name} must be one of {DOORS}, got {door}")
    return int(door)


def _check_game(game: Sequence[str]) -> Game:
    prizes = tuple(str(p) for p in game)
    if len(prizes) != len(DOORS):
        raise ValueError(f"A game has exactly {len(DOORS)} doors, got {len(prizes)}")
    if sorted(prizes) != sorted(PRIZES):
        raise ValueError(f"A game must hide one car and two goats, got {list(prizes)}")
    return prizes  # type: ignore[return-value]


def create_game(rng: np.random.Generator | None = None) -> Game:
    """Hide one car and two goats behind the three doors.

    Args:
        rng: Random generator used for the permutation. A fresh unseeded
            generator is used when omitted.

    Returns:
        Tuple of three prize labels; each car position is equally likely.
    """
    if rng is None:
        rng = np.random.default_rng()
    return tuple(str(p) for p in rng.permutation(PRIZES))  # type: ignore[return-value]


def select_door(rng: np.random.Generator | None = None) -> int:
    """Pick one of the three doors uniformly at random."""
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.integers(DOORS[0], DOORS[-1] + 1))


def open_goat_door(
    game: Sequence[str], pick: int, rng: np.random.Generator | None = None
) -> int:
    """Choose the door the host opens after the contestant's first pick.

    The host never opens the picked door and never reveals the car. When the
    contestant already holds the car both other doors hide goats and the host
    chooses between them uniformly; otherwise only one door qualifies.

    Args:
        game: Prize labels for doors 1-3
        pick: The contestant's current door
        rng: Random generator for the tie-break between two goat doors

    Returns:
        Number of the opened door

    Raises:
        ValueError: If the game is malformed or the pick is not a valid door
    """
    game = _check_game(game)
    pick = _check_door(pick, "pick")

    if game[pick - 1] == CAR:
        if rng is None:
            rng = np.random.default_rng()
        goat_doors = [door for door in DOORS if door != pick]
        return int(rng.choice(goat_doors))

    # contestant holds a goat: the other goat door is the only option
    return next(door for door in DOORS if door != pick and game[door - 1] == GOAT)


def change_door(stay: bool | Strategy, opened_door: int, pick: int) -> int:
    """Resolve the final pick for the stay or switch strategy.

    Args:
        stay: True or Strategy.STAY keeps the pick; False or Strategy.SWITCH
            moves to the remaining door
        opened_door: Door opened by the host
        pick: The contestant's initial door

    Raises:
        ValueError: If the strategy or a door is invalid, or the opened door is the pick
    """
    if isinstance(stay, Strategy):
        stay = stay is Strategy.STAY
    elif not isinstance(stay, bool):
        raise ValueError(f"stay must be a bool or a Strategy, got {stay!r}")

    opened_door = _check_door(opened_door, "opened_door")
    pick = _check_door(pick, "pick")
    if opened_door == pick:
        raise ValueError(f"The host cannot open the picked door ({pick})")

    if stay:
        return pick
    return next(door for door in DOORS if door not in (opened_door, pick))


def determine_winner(final_pick: int, game: Sequence[str]) -> Outcome:
    """Return WIN when the final pick hides the car, LOSE otherwise."""
    final_pick = _check_door(final_pick, "final_pick")
    game = _check_game(game)
    return Outcome.WIN if game[final_pick - 1] == CAR else Outcome.LOSE
