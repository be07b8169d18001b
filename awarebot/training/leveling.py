"""
awarebot/training/leveling.py

XP and level tiers. Everything here is pure: the ledger reads the user's
stored totals, runs them through apply_completion() and writes the result
back. The tier itself is never stored; derive_level() recomputes it from
xp_points on every read.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Tuple

BEGINNER = "BEGINNER"
INTERMEDIATE = "INTERMEDIATE"
ADVANCED = "ADVANCED"

# (minimum xp, tier), ascending. The last tier has no real next threshold;
# progress for it is shown against XP_DISPLAY_CEILING.
LEVEL_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (0,   BEGINNER),
    (200, INTERMEDIATE),
    (500, ADVANCED),
)
XP_DISPLAY_CEILING = 1000


@dataclass(frozen=True)
class LevelInfo:
    tier: str
    xp_points: int
    next_threshold: int
    xp_to_next_level: int
    xp_progress_percent: int


@dataclass(frozen=True)
class XpState:
    xp_points: int = 0
    completed_modules: int = 0


def derive_level(xp_points: int) -> LevelInfo:
    if xp_points < 0:
        raise ValueError(f"xp_points must be non-negative, got {xp_points}")

    tier, next_threshold = LEVEL_THRESHOLDS[0][1], XP_DISPLAY_CEILING
    for i, (minimum, name) in enumerate(LEVEL_THRESHOLDS):
        if xp_points < minimum:
            break
        tier = name
        next_threshold = (
            LEVEL_THRESHOLDS[i + 1][0] if i + 1 < len(LEVEL_THRESHOLDS) else XP_DISPLAY_CEILING
        )

    xp_to_next = max(next_threshold - xp_points, 0)
    percent = round((next_threshold - xp_to_next) / next_threshold * 100)
    return LevelInfo(
        tier=tier,
        xp_points=xp_points,
        next_threshold=next_threshold,
        xp_to_next_level=xp_to_next,
        xp_progress_percent=percent,
    )


def apply_completion(state: XpState, xp_reward: int) -> XpState:
    """One rewarded completion: add the module's XP and bump the counter."""
    if xp_reward < 0:
        raise ValueError(f"xp_reward must be non-negative, got {xp_reward}")
    return XpState(
        xp_points=state.xp_points + xp_reward,
        completed_modules=state.completed_modules + 1,
    )


def replay_xp(rewards: Iterable[int], initial: XpState = XpState()) -> XpState:
    """Fold apply_completion over the rewards of a user's rewarded records."""
    return reduce(apply_completion, rewards, initial)
