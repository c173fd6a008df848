"""
Need scoring — how much the intake indicates a deficit in each pillar.

Categorical intake answers are mapped to normalised factors in [0, 1]
through fixed lookup tables:

    sleep_deficit   <- sleep_hours_bucket
    training_norm   <- training_frequency
    diet_risk       <- diet_pattern  (additive per tag, clamped)
    stress_norm     = (stress - 1) / 9
    age_norm        = (age - 35) / 30

Each pillar need is a weighted linear combination of these factors,
multiplied by ``1 + goal_boost[pillar]`` and clamped to 0-100.  The
supplements pillar is scaled by 0.30 and clamped to 0-30: supplements are
never allowed to dominate a plan.

Unknown bucket values fall back to a mid-range default and are logged;
they never raise.

This module also derives the plan-wide quantities that depend only on the
intake (intensity caps, adherence, goal pillar).
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from app.schemas.intake import Intake
from app.schemas.plan import IntensityCaps
from app.schemas.task import PILLARS, Pillar

logger = logging.getLogger(__name__)

# ======================================================================
# Lookup tables
# ======================================================================

_SLEEP_DEFICIT: dict[str, float] = {
    "<6": 1.0,
    "6-6.5": 0.8,
    "6.5-7": 0.6,
    "7-7.5": 0.3,
    "7.5-8": 0.1,
    ">8": 0.0,
}
_DEFAULT_SLEEP_DEFICIT = 0.6

_TRAINING_NORM: dict[str, float] = {
    "0": 0.0,
    "1-2": 0.33,
    "3-4": 0.66,
    "5+": 1.0,
}
_DEFAULT_TRAINING_NORM = 0.33

_DIET_RISK: dict[str, float] = {
    "high_ultra_processed": 0.35,
    "high_sugar_snacks": 0.25,
    "frequent_alcohol": 0.35,
    "late_eating": 0.25,
    "mostly_whole_foods": -0.20,
    "high_protein_focus": -0.15,
}

SHORT_SLEEP_BUCKETS = ("<6", "6-6.5")
GOOD_SLEEP_BUCKETS = ("7-7.5", "7.5-8", ">8")

# Multiplicative need boost per primary goal.
_GOAL_BOOSTS: dict[str, dict[Pillar, float]] = {
    "sleep": {
        Pillar.SLEEP_RECOVERY: 0.30,
        Pillar.CIRCADIAN_RHYTHM: 0.20,
        Pillar.MENTAL_RESILIENCE: 0.10,
    },
    "stress": {
        Pillar.MENTAL_RESILIENCE: 0.35,
        Pillar.SLEEP_RECOVERY: 0.20,
        Pillar.CIRCADIAN_RHYTHM: 0.15,
    },
    "energy": {
        Pillar.CIRCADIAN_RHYTHM: 0.25,
        Pillar.NUTRITION_METABOLISM: 0.20,
        Pillar.MOVEMENT_MUSCLE: 0.10,
        Pillar.SLEEP_RECOVERY: 0.10,
    },
    "fat_loss": {
        Pillar.NUTRITION_METABOLISM: 0.35,
        Pillar.MOVEMENT_MUSCLE: 0.20,
        Pillar.CIRCADIAN_RHYTHM: 0.10,
    },
    "strength_fitness": {
        Pillar.MOVEMENT_MUSCLE: 0.40,
        Pillar.NUTRITION_METABOLISM: 0.15,
        Pillar.SLEEP_RECOVERY: 0.10,
    },
    "focus_clarity": {
        Pillar.MENTAL_RESILIENCE: 0.30,
        Pillar.SLEEP_RECOVERY: 0.20,
        Pillar.CIRCADIAN_RHYTHM: 0.15,
    },
}

_GOAL_PILLAR: dict[str, Pillar] = {
    "sleep": Pillar.SLEEP_RECOVERY,
    "stress": Pillar.MENTAL_RESILIENCE,
    "energy": Pillar.CIRCADIAN_RHYTHM,
    "fat_loss": Pillar.NUTRITION_METABOLISM,
    "strength_fitness": Pillar.MOVEMENT_MUSCLE,
    "focus_clarity": Pillar.MENTAL_RESILIENCE,
}

SUPPLEMENTS_NEED_CAP = 30.0


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


class NeedProfile(BaseModel):
    """Pillar needs (0-100) plus the normalised factors behind them."""

    needs: dict[Pillar, float]
    sleep_deficit: float
    stress_norm: float
    training_norm: float
    age_norm: float
    diet_risk: float


# ======================================================================
# Factor mappings
# ======================================================================


def sleep_deficit_for(bucket: Optional[str]) -> float:
    if bucket in _SLEEP_DEFICIT:
        return _SLEEP_DEFICIT[bucket]
    logger.warning(
        "Unknown sleep_hours_bucket %r, using default deficit %.2f",
        bucket, _DEFAULT_SLEEP_DEFICIT,
    )
    return _DEFAULT_SLEEP_DEFICIT


def training_norm_for(frequency: Optional[str]) -> float:
    if frequency in _TRAINING_NORM:
        return _TRAINING_NORM[frequency]
    logger.warning(
        "Unknown training_frequency %r, using default %.2f",
        frequency, _DEFAULT_TRAINING_NORM,
    )
    return _DEFAULT_TRAINING_NORM


def diet_risk_for(diet_pattern: list[str]) -> float:
    risk = sum(_DIET_RISK.get(tag, 0.0) for tag in set(diet_pattern))
    return clamp(risk, 0.0, 1.0)


def goal_boosts(primary_goal: Optional[str]) -> dict[Pillar, float]:
    """Per-pillar need boost for a goal (all zero for unknown goals)."""
    boosts = _GOAL_BOOSTS.get(primary_goal or "", {})
    return {p: boosts.get(p, 0.0) for p in PILLARS}


def goal_pillar(primary_goal: Optional[str]) -> Optional[Pillar]:
    return _GOAL_PILLAR.get(primary_goal or "")


# ======================================================================
# Need scores
# ======================================================================


def compute_needs(intake: Intake) -> NeedProfile:
    """Compute the six pillar needs from the intake answers."""
    sleep_deficit = sleep_deficit_for(intake.sleep_hours_bucket)
    stress_norm = clamp((intake.stress_1_10 - 1) / 9, 0.0, 1.0)
    training_norm = training_norm_for(intake.training_frequency)
    age_norm = clamp((intake.age - 35) / 30, 0.0, 1.0)
    diet_risk = diet_risk_for(intake.diet_pattern)

    goal = intake.primary_goal
    goal_focus = 1.0 if goal == "focus_clarity" else 0.0
    goal_fat_loss_energy = 1.0 if goal in ("fat_loss", "energy") else 0.0
    goal_strength_fat_loss = 1.0 if goal in ("strength_fitness", "fat_loss") else 0.0

    raw: dict[Pillar, float] = {
        Pillar.SLEEP_RECOVERY: 100 * (
            0.60 * sleep_deficit + 0.25 * stress_norm + 0.15 * diet_risk
        ),
        Pillar.CIRCADIAN_RHYTHM: 100 * (
            0.45 * sleep_deficit + 0.25 * stress_norm + 0.30 * diet_risk
        ),
        Pillar.MENTAL_RESILIENCE: 100 * (
            0.70 * stress_norm + 0.20 * sleep_deficit + 0.10 * goal_focus
        ),
        Pillar.NUTRITION_METABOLISM: 100 * (
            0.70 * diet_risk + 0.15 * sleep_deficit + 0.15 * goal_fat_loss_energy
        ),
        Pillar.MOVEMENT_MUSCLE: 100 * (
            0.60 * (1 - training_norm) + 0.20 * age_norm + 0.20 * goal_strength_fat_loss
        ),
        Pillar.SUPPLEMENTS: 100 * (
            0.50 * sleep_deficit + 0.30 * stress_norm + 0.20 * diet_risk
        ) * 0.30,
    }

    boosts = goal_boosts(goal)
    needs: dict[Pillar, float] = {}
    for pillar in PILLARS:
        upper = SUPPLEMENTS_NEED_CAP if pillar is Pillar.SUPPLEMENTS else 100.0
        needs[pillar] = clamp(raw[pillar] * (1 + boosts[pillar]), 0.0, upper)

    return NeedProfile(
        needs=needs,
        sleep_deficit=sleep_deficit,
        stress_norm=stress_norm,
        training_norm=training_norm,
        age_norm=age_norm,
        diet_risk=diet_risk,
    )


def primary_focus_pillars(needs: dict[Pillar, float], count: int = 3) -> list[str]:
    """Short labels of the ``count`` highest-need pillars."""
    ranked = sorted(PILLARS, key=lambda p: needs.get(p, 0.0), reverse=True)
    return [p.short_label for p in ranked[:count]]


# ======================================================================
# Plan-wide rules
# ======================================================================


def compute_intensity_caps(
    intake: Intake,
    energy_intensity_cap: Optional[int] = None,
    health_cap: Optional[int] = None,
) -> IntensityCaps:
    """Derive the global intensity rules.

    Args:
        intake: Intake answers.
        energy_intensity_cap: Ceiling on ``global_mod`` from today's
            energy level (``None`` = no override).
        health_cap: Health-profile intensity cap (0 gentle, 1 moderate,
            ``None`` = no cap).  A gentle cap also bans HIIT.
    """
    short_sleep = intake.sleep_hours_bucket in SHORT_SLEEP_BUCKETS

    global_mod = 0
    if intake.stress_1_10 >= 8:
        global_mod -= 1
    if short_sleep:
        global_mod -= 1
    if intake.stress_1_10 <= 3 and intake.sleep_hours_bucket in GOOD_SLEEP_BUCKETS:
        global_mod += 1

    if energy_intensity_cap is not None:
        global_mod = min(global_mod, energy_intensity_cap)

    hiit_banned = intake.stress_1_10 >= 8 or short_sleep

    if health_cap is not None:
        global_mod = min(global_mod, health_cap)
        if health_cap == 0:
            hiit_banned = True

    return IntensityCaps(
        global_mod=global_mod,
        movement_cap=0 if intake.age >= 56 else 1,
        hiit_banned=hiit_banned,
    )


def compute_adherence(
    intake: Intake,
    profile: NeedProfile,
    difficulty_adjustment: float = 0.0,
) -> float:
    """Estimated probability (0.2-1.0) that the user follows the plan."""
    adherence = 1.0
    adherence *= intake.time_budget_minutes / 30
    adherence *= 1 - 0.35 * profile.stress_norm
    adherence *= 1 - 0.25 * profile.sleep_deficit
    adherence += difficulty_adjustment
    return clamp(adherence, 0.2, 1.0)
