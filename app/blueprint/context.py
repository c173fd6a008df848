"""
Contextual modifiers — per-day adjustments to a task's score.

Every function here is pure and independent.  Each one contributes a
single additive or multiplicative term to the task score for a given day:

    day-of-week     prefer / avoid tags of the weekday, intensity alignment
    season          pillar boosts and an outdoor penalty by calendar month
    freshness       multiplicative suppression of recently assigned tasks
    pillar fatigue  additive penalty for pillars used in the last 3 days
    mastery         hard level gate plus a zone-of-proximal-development bonus
    novelty         +0.15 for the underexplored pillar every 7th day
    completion      difficulty adjustment from the trailing completion rate

plus the day-independent inputs the engine needs per day (energy config,
phase of the plan and its tag preferences).

Weekdays are numbered 0=Sunday .. 6=Saturday.
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.task import PILLARS, Intensity, Level, Phase, Pillar, Task

# ======================================================================
# Day-of-week profiles
# ======================================================================


class DayProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    intensity_mod: float
    time_mod: float
    prefer: tuple[str, ...] = ()
    avoid: tuple[str, ...] = ()


DAY_PROFILES: dict[int, DayProfile] = {
    0: DayProfile(
        name="Sunday", type="rest", intensity_mod=-0.15, time_mod=1.3,
        prefer=("recovery", "light", "mobility"), avoid=("hiit", "intense"),
    ),
    1: DayProfile(
        name="Monday", type="fresh_start", intensity_mod=0.10, time_mod=0.9,
        prefer=("routine", "starter", "morning"),
    ),
    2: DayProfile(
        name="Tuesday", type="build", intensity_mod=0.15, time_mod=1.0,
        prefer=("strength", "focus"),
    ),
    3: DayProfile(
        name="Wednesday", type="mid_week", intensity_mod=0.05, time_mod=1.0,
        prefer=("zone2", "mental"), avoid=("hiit",),
    ),
    4: DayProfile(
        name="Thursday", type="push", intensity_mod=0.15, time_mod=1.0,
        prefer=("strength", "hiit"),
    ),
    5: DayProfile(
        name="Friday", type="wind_down", intensity_mod=-0.05, time_mod=0.85,
        prefer=("light", "social"), avoid=("advanced", "new_habit_complex"),
    ),
    6: DayProfile(
        name="Saturday", type="active_recovery", intensity_mod=0.0, time_mod=1.4,
        prefer=("outdoor", "mobility", "meal_prep"),
    ),
}


def weekday_index(date: datetime.date) -> int:
    """Sunday-based weekday number (0=Sunday .. 6=Saturday)."""
    return (date.weekday() + 1) % 7


def day_profile(date: datetime.date) -> DayProfile:
    return DAY_PROFILES[weekday_index(date)]


def day_of_week_bonus(task: Task, profile: DayProfile) -> float:
    bonus = 0.0
    for tag in profile.prefer:
        if task.has_tag(tag):
            bonus += 0.04
    for tag in profile.avoid:
        if task.has_tag(tag):
            bonus -= 0.06

    # Intensity alignment with the day's character.
    if task.intensity == Intensity.VIGOROUS and profile.intensity_mod > 0:
        bonus += 0.03
    if task.intensity == Intensity.GENTLE and profile.intensity_mod < 0:
        bonus += 0.03
    return bonus


# ======================================================================
# Seasons
# ======================================================================


class Season(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    months: tuple[int, ...]
    circadian_boost: float
    outdoor_penalty: float
    sleep_boost: float
    supplement_boost: float


SEASONS: dict[str, Season] = {
    "winter": Season(
        name="winter", months=(12, 1, 2), circadian_boost=0.20,
        outdoor_penalty=0.15, sleep_boost=0.10, supplement_boost=0.15,
    ),
    "spring": Season(
        name="spring", months=(3, 4, 5), circadian_boost=0.10,
        outdoor_penalty=0.0, sleep_boost=0.0, supplement_boost=0.05,
    ),
    "summer": Season(
        name="summer", months=(6, 7, 8), circadian_boost=0.0,
        outdoor_penalty=-0.10, sleep_boost=-0.05, supplement_boost=0.0,
    ),
    "autumn": Season(
        name="autumn", months=(9, 10, 11), circadian_boost=0.15,
        outdoor_penalty=0.05, sleep_boost=0.05, supplement_boost=0.10,
    ),
}


def season_for(date: datetime.date) -> Season:
    for season in SEASONS.values():
        if date.month in season.months:
            return season
    return SEASONS["spring"]


def seasonal_adjustment(task: Task, season: Season) -> float:
    """Raw seasonal term (the scorer weights it by 0.5)."""
    adjustment = 0.0
    if task.pillar is Pillar.CIRCADIAN_RHYTHM:
        adjustment += season.circadian_boost
    elif task.pillar is Pillar.SLEEP_RECOVERY:
        adjustment += season.sleep_boost
    elif task.pillar is Pillar.SUPPLEMENTS:
        adjustment += season.supplement_boost
    if task.has_tag("outdoor"):
        adjustment -= season.outdoor_penalty
    return adjustment


# ======================================================================
# Freshness and cooldown
# ======================================================================

# days since last assignment -> multiplier; 6+ days is fully fresh.
_FRESHNESS_STEPS: dict[int, float] = {
    1: 0.05,
    2: 0.15,
    3: 0.4,
    4: 0.7,
    5: 0.9,
}

HARD_COOLDOWN_DAYS = 2


def freshness(task_id: str, history: dict[str, int], current_day: int) -> float:
    """Score multiplier in [0, 1] for a task last assigned on ``history[task_id]``."""
    last_day = history.get(task_id)
    if last_day is None:
        return 1.0
    days_since = current_day - last_day
    if days_since <= 0:
        return 0.0
    return _FRESHNESS_STEPS.get(days_since, 1.0)


def in_hard_cooldown(task_id: str, history: dict[str, int], current_day: int) -> bool:
    last_day = history.get(task_id)
    return last_day is not None and current_day - last_day <= HARD_COOLDOWN_DAYS


# ======================================================================
# Pillar rotation
# ======================================================================

_FATIGUE_LOOKBACK_DAYS = 3
_FATIGUE_PER_DAY = 0.04


def pillar_fatigue(
    pillar: Pillar,
    pillar_history: dict[int, list[Pillar]],
    current_day: int,
) -> float:
    """0.04 per day among the previous three that included ``pillar``."""
    recent = 0
    for day in range(current_day - 1, max(1, current_day - _FATIGUE_LOOKBACK_DAYS) - 1, -1):
        if pillar in pillar_history.get(day, ()):
            recent += 1
    return recent * _FATIGUE_PER_DAY


# ======================================================================
# Mastery
# ======================================================================


def mastery_level(pillar: Pillar, completions: dict[Pillar, int]) -> Level:
    count = completions.get(pillar, 0)
    if count >= 15:
        return Level.ADVANCED
    if count >= 5:
        return Level.INTERMEDIATE
    return Level.BEGINNER


def mastery_levels(completions: dict[Pillar, int]) -> dict[Pillar, Level]:
    return {p: mastery_level(p, completions) for p in PILLARS}


def mastery_compatible(task: Task, levels: dict[Pillar, Level]) -> bool:
    """A task is eligible only at or below the user's level in its pillar."""
    user_level = levels.get(task.pillar, Level.BEGINNER)
    return task.level.rank <= user_level.rank


def mastery_bonus(task: Task, levels: dict[Pillar, Level]) -> float:
    user_level = levels.get(task.pillar, Level.BEGINNER)
    if task.level is user_level:
        return 0.05
    gap = user_level.rank - task.level.rank
    if gap > 0:
        return -0.02 * gap
    return 0.0


def prerequisites_met(task: Task, completed: set[str]) -> bool:
    return all(p in completed for p in task.prerequisites)


# ======================================================================
# Novelty
# ======================================================================

NOVELTY_BONUS = 0.15
_NOVELTY_MIN_NEED = 20.0


def is_novelty_day(day: int) -> bool:
    return day % 7 == 0


def underexplored_pillar(
    pillar_history: dict[int, list[Pillar]],
    needs: dict[Pillar, float],
) -> Optional[Pillar]:
    """Pillar with the fewest historic assignments among those with need > 20.

    Ties go to the earlier pillar in canonical order.  ``None`` when no
    pillar clears the need threshold.
    """
    counts = {p: 0 for p in PILLARS}
    for pillars in pillar_history.values():
        for p in pillars:
            counts[p] += 1

    best: Optional[Pillar] = None
    for p in PILLARS:
        if needs.get(p, 0.0) > _NOVELTY_MIN_NEED:
            if best is None or counts[p] < counts[best]:
                best = p
    return best


# ======================================================================
# Completion-rate adaptation
# ======================================================================


def difficulty_adjustment(completion_rate_7day: Optional[float]) -> float:
    if completion_rate_7day is None:
        return 0.0
    if completion_rate_7day < 0.5:
        return -0.15
    if completion_rate_7day < 0.7:
        return -0.05
    if completion_rate_7day > 0.9:
        return 0.10
    return 0.0


def completion_nudge(task: Task, adjustment: float) -> float:
    if adjustment < 0 and task.level is Level.BEGINNER:
        return 0.05
    if adjustment > 0 and task.level is Level.ADVANCED:
        return 0.05
    return 0.0


# ======================================================================
# Energy level
# ======================================================================


class EnergyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    intensity_cap: int
    time_mod: float


ENERGY_CONFIGS: dict[int, EnergyConfig] = {
    1: EnergyConfig(intensity_cap=-1, time_mod=0.6),
    2: EnergyConfig(intensity_cap=0, time_mod=0.8),
    3: EnergyConfig(intensity_cap=0, time_mod=1.0),
    4: EnergyConfig(intensity_cap=1, time_mod=1.1),
    5: EnergyConfig(intensity_cap=1, time_mod=1.2),
}


def energy_config(level: int) -> EnergyConfig:
    return ENERGY_CONFIGS.get(level, ENERGY_CONFIGS[3])


# ======================================================================
# Plan phases
# ======================================================================


class PhasePreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    prefer: tuple[str, ...]
    avoid: tuple[str, ...]


PHASE_PREFERENCES: dict[Phase, PhasePreferences] = {
    Phase.STABILIZE: PhasePreferences(
        prefer=("light", "morning", "sleep", "winddown", "steps", "protein", "timing", "beginner"),
        avoid=("hiit", "advanced", "new_habit_complex"),
    ),
    Phase.BUILD: PhasePreferences(
        prefer=("strength", "zone2", "protein", "after_meal", "shutdown", "intermediate"),
        avoid=("experimental",),
    ),
    Phase.OPTIMIZE: PhasePreferences(
        prefer=("after_meal", "breath", "focus", "mobility", "meal_timing", "advanced"),
        avoid=("experimental",),
    ),
    Phase.CONSOLIDATE: PhasePreferences(
        prefer=("routine", "review", "minimum_viable_day", "sleep", "light", "steps"),
        avoid=("new_habit_complex", "hiit", "advanced"),
    ),
}


def phase_for_day(day: int) -> Phase:
    if day <= 7:
        return Phase.STABILIZE
    if day <= 14:
        return Phase.BUILD
    if day <= 21:
        return Phase.OPTIMIZE
    return Phase.CONSOLIDATE


def phase_preference_boost(task: Task, phase: Phase) -> float:
    prefs = PHASE_PREFERENCES[phase]
    boost = 0.0
    for tag in prefs.prefer:
        if task.has_tag(tag):
            boost += 0.03
    for tag in prefs.avoid:
        if task.has_tag(tag):
            boost -= 0.05
    return boost
