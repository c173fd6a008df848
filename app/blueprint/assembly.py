"""
Daily assembly engine — builds the 30-day plan one day at a time.

Per run:

    Init -> (per day: reset weekly coverage -> day context -> AM slot
    -> circadian anchor -> any slot -> PM slot (conditional) -> fallback
    -> commit) x 30 -> Done

Days are processed strictly in order: day N's task and pillar histories
feed day N+1's freshness, cooldown and rotation terms.  All mutable state
lives in one :class:`~app.blueprint.scoring.RunState` owned by the call.

Slot selection
--------------
For each slot the engine keeps the library tasks that pass every hard
filter and takes the single highest-scoring one (ties resolved by the
deterministic tiebreaker, then library order):

* not already chosen today, not assigned in the last two days
* equipment tier available to the user
* fits the remaining minutes of the day
* valid for the slot (AM: am/any tasks, PM: pm/any tasks, the midday slot
  accepts every task)
* intensity at or below the allowed ceiling (HIIT excluded when banned)
* at or below the user's mastery level in the pillar
* all prerequisites completed

Degenerate input is not an error: with an empty (or fully filtered)
library every day simply has no tasks.
"""

from __future__ import annotations

import datetime
import logging
import math
from typing import Optional

from app.blueprint import context, health, needs as need_scoring
from app.blueprint.renderer import render_plan_text
from app.blueprint.scoring import (
    DayContext,
    PlanContext,
    RunState,
    allowed_intensity,
    coverage_targets,
    score_task,
)
from app.schemas.intake import HealthProfile, Intake, UserState
from app.schemas.plan import (
    AssignedTask,
    BlueprintResult,
    ComputedMeta,
    HealthAdaptation,
    Plan,
    PlanDay,
    PlanMeta,
)
from app.schemas.task import Intensity, Pillar, Task, validate_library

logger = logging.getLogger(__name__)

PLAN_VERSION = "blueprint-2.1-health-aware"
PLAN_DAYS = 30

MIN_DAY_BUDGET = 5
MAX_DAY_BUDGET = 45
PM_MIN_REMAINING = 4
ANCHOR_NEED_THRESHOLD = 40.0
SLEEP_PM_NEED_THRESHOLD = 40.0
THIRD_TASK_MIN_ADHERENCE = 0.6

_ANCHOR_EXEMPT_PILLARS = (
    Pillar.SLEEP_RECOVERY,
    Pillar.CIRCADIAN_RHYTHM,
    Pillar.MENTAL_RESILIENCE,
)
_FALLBACK_PILLARS = (Pillar.CIRCADIAN_RHYTHM, Pillar.MENTAL_RESILIENCE)

_EQUIPMENT_ACCESS: dict[str, frozenset[str]] = {
    "none": frozenset({"none", "any"}),
    "basic": frozenset({"none", "basic", "any"}),
    "gym": frozenset({"none", "basic", "gym", "any"}),
}

_SLOT_WHEN: dict[str, frozenset[str]] = {
    "am": frozenset({"am", "any"}),
    "pm": frozenset({"pm", "any"}),
    "any": frozenset({"am", "pm", "any"}),
}


# ======================================================================
# Hard filters
# ======================================================================


def equipment_compatible(task: Task, equipment_access: Optional[str]) -> bool:
    """Whether the user's equipment tier covers the task.

    Unrecognised tiers impose no restriction.
    """
    allowed = _EQUIPMENT_ACCESS.get(equipment_access or "none")
    return allowed is None or task.equipment.value in allowed


def day_time_budget(base_minutes: int, day_time_mod: float, energy_time_mod: float) -> int:
    """Adjusted budget for a day, rounded half-up and clamped to [5, 45]."""
    raw = math.floor(base_minutes * day_time_mod * energy_time_mod + 0.5)
    return int(need_scoring.clamp(raw, MIN_DAY_BUDGET, MAX_DAY_BUDGET))


def _eligible(
    task: Task,
    plan: PlanContext,
    day: DayContext,
    state: RunState,
    remaining: int,
    slot: str,
    chosen_ids: set[str],
) -> bool:
    if task.id in chosen_ids:
        return False
    if context.in_hard_cooldown(task.id, state.task_history, day.day):
        return False
    if not equipment_compatible(task, plan.intake.equipment_access):
        return False
    if task.minutes > remaining:
        return False
    if task.when.value not in _SLOT_WHEN[slot]:
        return False
    ceiling = allowed_intensity(task, plan.caps)
    if ceiling is None or task.intensity > ceiling:
        return False
    if not context.mastery_compatible(task, plan.mastery):
        return False
    return context.prerequisites_met(task, plan.completed_tasks)


def _best(
    candidates: list[Task],
    plan: PlanContext,
    day: DayContext,
    state: RunState,
) -> Optional[Task]:
    best: Optional[Task] = None
    best_score = float("-inf")
    for task in candidates:
        score = score_task(task, plan, day, state)
        if score > best_score:
            best, best_score = task, score
    return best


def pick_best(
    library: list[Task],
    plan: PlanContext,
    day: DayContext,
    state: RunState,
    remaining: int,
    slot: str,
    chosen_ids: set[str],
    pillar: Optional[Pillar] = None,
) -> Optional[Task]:
    """Highest-scoring eligible task for ``slot``, optionally within one pillar."""
    candidates = [
        t for t in library
        if (pillar is None or t.pillar is pillar)
        and _eligible(t, plan, day, state, remaining, slot, chosen_ids)
    ]
    return _best(candidates, plan, day, state)


def pick_fallback(
    library: list[Task],
    plan: PlanContext,
    day: DayContext,
    state: RunState,
    chosen_ids: set[str],
) -> Optional[Task]:
    """Gentle circadian / mental task that fits the unadjusted budget.

    Tasks outside the hard cooldown window are preferred; the cooldown is
    relaxed only when no such task exists.
    """
    base_budget = plan.intake.time_budget_minutes
    pool = [
        t for t in library
        if t.pillar in _FALLBACK_PILLARS
        and t.intensity <= Intensity.MODERATE
        and t.minutes <= base_budget
        and t.id not in chosen_ids
    ]
    rested = [
        t for t in pool
        if not context.in_hard_cooldown(t.id, state.task_history, day.day)
    ]
    return _best(rested or pool, plan, day, state)


# ======================================================================
# Plan context
# ======================================================================


def _plan_context(
    intake: Intake,
    user_state: UserState,
    health_profile: Optional[HealthProfile],
) -> PlanContext:
    profile = need_scoring.compute_needs(intake)
    energy = context.energy_config(user_state.energy_level)
    caps = need_scoring.compute_intensity_caps(
        intake,
        energy_intensity_cap=energy.intensity_cap,
        health_cap=health.intensity_cap(health_profile),
    )
    adjustment = context.difficulty_adjustment(user_state.completion_rate_7day)
    return PlanContext(
        intake=intake,
        profile=profile,
        caps=caps,
        adherence=need_scoring.compute_adherence(intake, profile, adjustment),
        goal_pillar=need_scoring.goal_pillar(intake.primary_goal),
        mastery=context.mastery_levels(user_state.user_completions),
        difficulty_adjustment=adjustment,
        coverage_targets=coverage_targets(intake),
        completed_tasks=frozenset(user_state.completed_tasks),
        health_profile=health_profile,
    )


def _day_context(day: int, start_date: datetime.date, state: RunState, plan: PlanContext) -> DayContext:
    date = start_date + datetime.timedelta(days=day - 1)
    novelty = (
        context.underexplored_pillar(state.pillar_history, plan.needs)
        if context.is_novelty_day(day)
        else None
    )
    return DayContext(
        day=day,
        date=date,
        day_profile=context.day_profile(date),
        season=context.season_for(date),
        phase=context.phase_for_day(day),
        novelty_pillar=novelty,
    )


# ======================================================================
# Day assembly
# ======================================================================


def _assemble_day(
    library: list[Task],
    plan: PlanContext,
    day: DayContext,
    state: RunState,
    budget: int,
) -> tuple[list[tuple[str, Task, float]], bool]:
    """Select the day's tasks as ``(slot, task, freshness)`` triples.

    Returns the selection and whether the fallback produced it.  ``state``
    is not modified.
    """
    picks: list[tuple[str, Task, float]] = []
    chosen_ids: set[str] = set()
    remaining = budget

    def take(slot: str, task: Task) -> None:
        nonlocal remaining
        fresh = context.freshness(task.id, state.task_history, day.day)
        picks.append((slot, task, round(fresh, 2)))
        chosen_ids.add(task.id)
        remaining -= task.minutes

    # AM, with circadian anchor for high sleep / circadian need.
    am = pick_best(library, plan, day, state, remaining, "am", chosen_ids)
    anchor_need = max(plan.needs[Pillar.SLEEP_RECOVERY], plan.needs[Pillar.CIRCADIAN_RHYTHM])
    if am is not None and anchor_need >= ANCHOR_NEED_THRESHOLD and am.pillar not in _ANCHOR_EXEMPT_PILLARS:
        anchor = pick_best(
            library, plan, day, state, remaining, "am", chosen_ids,
            pillar=Pillar.CIRCADIAN_RHYTHM,
        )
        if anchor is not None:
            am = anchor
    if am is not None:
        take("am", am)

    midday = pick_best(library, plan, day, state, remaining, "any", chosen_ids)
    if midday is not None:
        take("any", midday)

    if remaining >= PM_MIN_REMAINING:
        pm = None
        if plan.needs[Pillar.SLEEP_RECOVERY] >= SLEEP_PM_NEED_THRESHOLD:
            pm = pick_best(
                library, plan, day, state, remaining, "pm", chosen_ids,
                pillar=Pillar.SLEEP_RECOVERY,
            )
        if pm is None:
            pm = pick_best(library, plan, day, state, remaining, "pm", chosen_ids)
        if pm is not None and pm.minutes <= remaining and (
            plan.adherence >= THIRD_TASK_MIN_ADHERENCE or len(picks) < 2
        ):
            take("pm", pm)

    if picks:
        return picks, False

    fallback = pick_fallback(library, plan, day, state, chosen_ids)
    if fallback is not None:
        take("fallback", fallback)
        return picks, True
    return picks, False


def _plan_day(
    day: DayContext,
    budget: int,
    picks: list[tuple[str, Task, float]],
    used_fallback: bool,
) -> PlanDay:
    assigned = [
        AssignedTask(
            id=f"d{day.day}_t{n}_{task.id}",
            task_id=task.id,
            pillar=task.pillar.short_label,
            raw_pillar=task.pillar,
            slot=slot,
            when=task.when,
            task=task.how,
            title=task.title,
            time_minutes=task.minutes,
            level=task.level,
            intensity=task.intensity,
            freshness=fresh,
        )
        for n, (slot, task, fresh) in enumerate(picks, start=1)
    ]
    return PlanDay(
        day=day.day,
        date=day.date,
        phase=day.phase,
        day_of_week=day.day_profile.name,
        day_type=day.day_profile.type,
        season=day.season.name,
        is_novelty_day=context.is_novelty_day(day.day),
        novelty_pillar=day.novelty_pillar,
        theme=f"Day {day.day} - {day.phase.value.capitalize()} ({day.day_profile.name})",
        time_budget_minutes=budget,
        total_time_minutes=sum(t.minutes for _, t, _ in picks),
        used_fallback=used_fallback,
        tasks=assigned,
    )


# ======================================================================
# Entry point
# ======================================================================


def build_30_day_blueprint(
    intake: Intake,
    task_library: list[Task],
    user_state: Optional[UserState] = None,
    health_profile: Optional[HealthProfile] = None,
    start_date: Optional[datetime.date] = None,
) -> BlueprintResult:
    """Generate a 30-day plan and its text rendering.

    Args:
        intake: Questionnaire answers.
        task_library: Ordered task library; never modified.
        user_state: Returning-user context (defaults to a first plan).
        health_profile: Optional health constraints (``None`` = none).
        start_date: Calendar date of day 1 (defaults to today).  Weekday
            and season depend on it, so pin it for reproducible output.

    Raises:
        ValueError: If the library contains duplicate task ids.
    """
    validate_library(task_library)
    user_state = user_state or UserState()
    start_date = start_date or datetime.date.today()

    library = health.filter_library(task_library, health_profile)
    plan_ctx = _plan_context(intake, user_state, health_profile)
    energy = context.energy_config(user_state.energy_level)
    base_budget = intake.time_budget_minutes

    state = RunState()
    days: list[PlanDay] = []
    for day_number in range(1, PLAN_DAYS + 1):
        if (day_number - 1) % 7 == 0:
            state.reset_week()

        day = _day_context(day_number, start_date, state, plan_ctx)
        budget = day_time_budget(base_budget, day.day_profile.time_mod, energy.time_mod)
        picks, used_fallback = _assemble_day(library, plan_ctx, day, state, budget)

        state.commit_day(day_number, [task for _, task, _ in picks])
        days.append(_plan_day(day, budget, picks, used_fallback))

    tasks_filtered = len(task_library) - len(library) if health_profile is not None else 0
    plan = Plan(
        user_name=intake.name or "You",
        plan_summary=(
            f"Generated specifically for {intake.primary_goal or 'general health'} "
            f"with a {base_budget} min daily budget."
        ),
        start_date=start_date,
        primary_focus_pillars=need_scoring.primary_focus_pillars(plan_ctx.needs),
        meta=PlanMeta(
            version=PLAN_VERSION,
            inputs=intake,
            computed=ComputedMeta(
                needs=plan_ctx.needs,
                adherence=plan_ctx.adherence,
                caps=plan_ctx.caps,
                user_mastery_levels=plan_ctx.mastery,
                difficulty_adjustment=plan_ctx.difficulty_adjustment,
                energy_level=user_state.energy_level,
            ),
            health=HealthAdaptation(
                has_profile=health_profile is not None,
                warnings=health.warnings(health_profile),
                summary=health.health_summary(health_profile),
                intensity_cap=health.intensity_cap(health_profile),
                tasks_filtered=tasks_filtered,
            ),
        ),
        days=days,
    )

    assigned = sum(len(d.tasks) for d in days)
    logger.info(
        "Built %d-day plan: %d tasks assigned, %d fallback days, %d tasks filtered by health",
        PLAN_DAYS, assigned,
        sum(1 for d in days if d.used_fallback), tasks_filtered,
    )
    return BlueprintResult(plan=plan, text=render_plan_text(plan))
