"""
Task scorer — ranks eligible tasks for a slot on a given day.

Scores are unbounded reals; higher is better and negative scores simply
rank lower.  The score is built up in a fixed order, each step modifying
a running value:

     1. base = need/100 × base_effect × tag_boost × adherence
     2. − risk penalty
     3. − complexity penalty
     4. × freshness
     5. + day-of-week bonus
     6. + 0.5 × seasonal adjustment
     7. − pillar fatigue
     8. + mastery bonus
     9. + novelty bonus, + completion-rate nudge
    10. + phase preference boost
    11. + goal pillar boost (build / optimize phases only)
    12. − weekly coverage penalty
    13. + health preference boost
    14. + deterministic tiebreaker in [-0.01, +0.01]

The order matters: freshness multiplies only the need-driven part, so a
task assigned yesterday keeps its contextual bonuses but loses nearly all
of its intrinsic value.

The run context is split three ways:

* :class:`PlanContext` — fixed for the whole 30-day run.
* :class:`DayContext`  — fixed for one day.
* :class:`RunState`    — histories mutated by the engine after each day.
"""

from __future__ import annotations

import datetime
import zlib
from dataclasses import dataclass, field
from typing import Optional

from app.blueprint import context
from app.blueprint.health import preference_boost
from app.blueprint.needs import NeedProfile, clamp
from app.schemas.intake import HealthProfile, Intake
from app.schemas.plan import IntensityCaps
from app.schemas.task import PILLARS, Intensity, Level, Phase, Pillar, Task

# ======================================================================
# Run context
# ======================================================================


@dataclass(frozen=True)
class PlanContext:
    """Inputs and derived values shared by every day of a run."""

    intake: Intake
    profile: NeedProfile
    caps: IntensityCaps
    adherence: float
    goal_pillar: Optional[Pillar]
    mastery: dict[Pillar, Level]
    difficulty_adjustment: float
    coverage_targets: dict[Pillar, int]
    completed_tasks: frozenset[str]
    health_profile: Optional[HealthProfile] = None

    @property
    def needs(self) -> dict[Pillar, float]:
        return self.profile.needs


@dataclass(frozen=True)
class DayContext:
    day: int
    date: datetime.date
    day_profile: context.DayProfile
    season: context.Season
    phase: Phase
    novelty_pillar: Optional[Pillar] = None


@dataclass
class RunState:
    """Mutable histories owned by a single plan-generation run."""

    task_history: dict[str, int] = field(default_factory=dict)
    pillar_history: dict[int, list[Pillar]] = field(default_factory=dict)
    week_coverage: dict[Pillar, int] = field(
        default_factory=lambda: {p: 0 for p in PILLARS},
    )

    def reset_week(self) -> None:
        self.week_coverage = {p: 0 for p in PILLARS}

    def commit_day(self, day: int, tasks: list[Task]) -> None:
        for task in tasks:
            self.task_history[task.id] = day
            self.week_coverage[task.pillar] += 1
        self.pillar_history[day] = [t.pillar for t in tasks]


# ======================================================================
# Impact proxy
# ======================================================================

BASE_EFFECT: dict[Pillar, float] = {
    Pillar.SLEEP_RECOVERY: 1.00,
    Pillar.CIRCADIAN_RHYTHM: 0.90,
    Pillar.MOVEMENT_MUSCLE: 0.85,
    Pillar.NUTRITION_METABOLISM: 0.80,
    Pillar.MENTAL_RESILIENCE: 0.75,
    Pillar.SUPPLEMENTS: 0.30,
}

# (any of these tags, multiplier delta); each group counts once.
_TAG_BOOSTS: list[tuple[tuple[str, ...], float]] = [
    (("light", "morning"), 0.10),
    (("caffeine", "timing"), 0.10),
    (("late_eating", "after_meal"), 0.10),
    (("steps", "neat"), 0.08),
    (("protein",), 0.08),
    (("strength",), 0.08),
    (("breath", "downshift"), 0.05),
    (("meal_prep", "shopping"), 0.05),
    (("experimental",), -0.20),
]

MINIMUM_BUDGET_TIER = 10


def tag_boost(task: Task) -> float:
    mult = 1.0
    for tags, delta in _TAG_BOOSTS:
        if any(task.has_tag(t) for t in tags):
            mult += delta
    return clamp(mult, 0.7, 1.3)


def risk_penalty(task: Task, plan: PlanContext) -> float:
    profile = plan.profile
    is_hiit = task.has_tag("hiit")
    penalty = 0.0
    if task.intensity == Intensity.VIGOROUS and (
        profile.stress_norm > 0.5 or profile.sleep_deficit > 0.5
    ):
        penalty += 0.25
    if is_hiit and profile.age_norm > 0.7:
        penalty += 0.15
    if is_hiit and plan.caps.hiit_banned:
        penalty += 0.60
    if task.minutes > 20 and plan.intake.time_budget_minutes <= MINIMUM_BUDGET_TIER:
        penalty += 0.10
    return penalty


def complexity_penalty(task: Task) -> float:
    penalty = 0.0
    if task.minutes > 20:
        penalty += 0.05
    if task.has_tag("meal_prep"):
        penalty += 0.08
    if task.has_tag("advanced"):
        penalty += 0.08
    if task.has_tag("new_habit_complex"):
        penalty += 0.10
    return penalty


def allowed_intensity(task: Task, caps: IntensityCaps) -> Optional[int]:
    """Highest intensity the task may have, or ``None`` when HIIT is banned."""
    if task.has_tag("hiit") and caps.hiit_banned:
        return None
    allowed = int(clamp(1 + caps.global_mod, -1, 1))
    if task.pillar is Pillar.MOVEMENT_MUSCLE:
        allowed = min(allowed, caps.movement_cap)
    return allowed


# ======================================================================
# Weekly coverage
# ======================================================================


def coverage_targets(intake: Intake) -> dict[Pillar, int]:
    stress_high = intake.stress_1_10 >= 6
    return {
        Pillar.SLEEP_RECOVERY: 4,
        Pillar.CIRCADIAN_RHYTHM: 4,
        Pillar.MOVEMENT_MUSCLE: 2 if stress_high else 3,
        Pillar.NUTRITION_METABOLISM: 3,
        Pillar.MENTAL_RESILIENCE: 4 if stress_high else 2,
        Pillar.SUPPLEMENTS: 2,
    }


def coverage_penalty(
    pillar: Pillar,
    coverage: dict[Pillar, int],
    targets: dict[Pillar, int],
) -> float:
    excess = coverage.get(pillar, 0) - targets[pillar]
    if excess <= 0:
        return 0.0
    return min(0.12, 0.04 * excess)


# ======================================================================
# Tiebreaker
# ======================================================================


def tiebreaker(task_id: str, day: int) -> float:
    """Deterministic jitter in [-0.01, +0.01) from CRC-32 of ``task_id + day``."""
    unit = zlib.crc32(f"{task_id}{day}".encode("utf-8")) / 2**32
    return (unit - 0.5) * 0.02


# ======================================================================
# Score
# ======================================================================

GOAL_PILLAR_BONUS = 0.06
_GOAL_PHASES = (Phase.BUILD, Phase.OPTIMIZE)


def score_task(
    task: Task,
    plan: PlanContext,
    day: DayContext,
    state: RunState,
) -> float:
    """Full score of ``task`` for ``day`` given the run so far."""
    need = plan.needs.get(task.pillar, 0.0) / 100
    impact = BASE_EFFECT[task.pillar] * tag_boost(task)

    score = need * impact * plan.adherence
    score -= risk_penalty(task, plan)
    score -= complexity_penalty(task)
    score *= context.freshness(task.id, state.task_history, day.day)

    score += context.day_of_week_bonus(task, day.day_profile)
    score += 0.5 * context.seasonal_adjustment(task, day.season)
    score -= context.pillar_fatigue(task.pillar, state.pillar_history, day.day)
    score += context.mastery_bonus(task, plan.mastery)

    if day.novelty_pillar is not None and task.pillar is day.novelty_pillar:
        score += context.NOVELTY_BONUS
    score += context.completion_nudge(task, plan.difficulty_adjustment)

    score += context.phase_preference_boost(task, day.phase)
    if day.phase in _GOAL_PHASES and task.pillar is plan.goal_pillar:
        score += GOAL_PILLAR_BONUS

    score -= coverage_penalty(task.pillar, state.week_coverage, plan.coverage_targets)
    score += preference_boost(task, plan.health_profile)
    score += tiebreaker(task.id, day.day)
    return score
