"""
Unit tests for the daily assembly engine.

Covers the full 30-day run against the built-in catalog (structure,
hard constraints, determinism) and small hand-built libraries that force
a specific path through slot selection (circadian anchor, fallback,
prerequisite and mastery gates, empty days).
"""

import datetime
import logging

import pytest

from app.blueprint import build_30_day_blueprint
from app.blueprint.assembly import (
    MAX_DAY_BUDGET,
    PLAN_DAYS,
    PLAN_VERSION,
    day_time_budget,
    equipment_compatible,
)
from app.blueprint.renderer import TITLE
from app.catalog import all_tasks
from app.schemas.intake import HealthProfile, Intake, UserState
from app.schemas.task import Equipment, Intensity, Level, Phase, Pillar, Slot, Task


START = datetime.date(2026, 3, 2)  # Monday


# ======================================================================
# Helpers
# ======================================================================


def _make_intake(**overrides) -> Intake:
    defaults = dict(
        name="Alex",
        age=38,
        primary_goal="energy",
        sleep_hours_bucket="6.5-7",
        stress_1_10=6,
        training_frequency="1-2",
        diet_pattern=["high_ultra_processed", "late_eating"],
        daily_time_budget="20",
        equipment_access="none",
    )
    defaults.update(overrides)
    return Intake(**defaults)


def _make_task(task_id: str, pillar: Pillar, **kwargs) -> Task:
    defaults = dict(
        minutes=5,
        intensity=Intensity.GENTLE,
        equipment=Equipment.NONE,
        level=Level.BEGINNER,
        when=Slot.ANY,
        how=f"Do {task_id}",
    )
    defaults.update(kwargs)
    return Task(id=task_id, pillar=pillar, **defaults)


def _build(intake=None, library=None, **kwargs):
    return build_30_day_blueprint(
        intake or _make_intake(),
        all_tasks() if library is None else library,
        start_date=START,
        **kwargs,
    )


def _task_ids(plan) -> set[str]:
    return {t.task_id for d in plan.days for t in d.tasks}


# ======================================================================
# Helpers under test
# ======================================================================


class TestDayTimeBudget:

    @pytest.mark.parametrize("base,day_mod,energy_mod,expected", [
        (20, 0.9, 1.0, 18),
        (20, 1.3, 1.0, 26),
        (20, 0.85, 1.0, 17),
        (15, 0.9, 1.0, 14),
        (20, 0.9, 0.6, 11),
        (5, 0.85, 0.6, 5),
        (45, 1.4, 1.2, MAX_DAY_BUDGET),
    ])
    def test_budget(self, base, day_mod, energy_mod, expected):
        assert day_time_budget(base, day_mod, energy_mod) == expected


class TestEquipmentCompatible:

    @pytest.mark.parametrize("equipment,access,expected", [
        (Equipment.NONE, "none", True),
        (Equipment.ANY, "none", True),
        (Equipment.BASIC, "none", False),
        (Equipment.GYM, "basic", False),
        (Equipment.BASIC, "gym", True),
        (Equipment.GYM, "gym", True),
        (Equipment.GYM, None, False),
        (Equipment.GYM, "garage", True),
    ])
    def test_tiers(self, equipment, access, expected):
        task = _make_task("E1", Pillar.MOVEMENT_MUSCLE, equipment=equipment)
        assert equipment_compatible(task, access) is expected


# ======================================================================
# Full run on the catalog
# ======================================================================


class TestCatalogPlan:

    def test_structure(self):
        plan = _build().plan

        assert len(plan.days) == PLAN_DAYS
        assert [d.day for d in plan.days] == list(range(1, 31))
        assert plan.days[0].date == START
        assert plan.days[-1].date == START + datetime.timedelta(days=29)
        assert plan.meta.version == PLAN_VERSION
        assert plan.user_name == "Alex"
        assert plan.generation_method == "algorithm"
        assert plan.plan_summary == "Generated specifically for energy with a 20 min daily budget."
        assert plan.primary_focus_pillars == ["nutrition", "circadian", "sleep"]
        assert all(d.tasks for d in plan.days)

    def test_phases_and_themes(self):
        days = _build().plan.days
        assert days[6].phase is Phase.STABILIZE
        assert days[7].phase is Phase.BUILD
        assert days[14].phase is Phase.OPTIMIZE
        assert days[21].phase is Phase.CONSOLIDATE
        assert days[0].theme == "Day 1 - Stabilize (Monday)"
        assert days[0].day_of_week == "Monday"
        assert days[6].day_type == "rest"
        assert days[0].season == "spring"

    def test_novelty_days(self):
        for d in _build().plan.days:
            assert d.is_novelty_day is (d.day % 7 == 0)
            if d.is_novelty_day:
                assert d.novelty_pillar is not None
            else:
                assert d.novelty_pillar is None

    def test_day_budgets_follow_weekday(self):
        days = _build().plan.days
        assert days[0].time_budget_minutes == 18  # Monday
        assert days[4].time_budget_minutes == 17  # Friday
        assert days[5].time_budget_minutes == 28  # Saturday
        assert days[6].time_budget_minutes == 26  # Sunday

    def test_no_duplicate_tasks_within_a_day(self):
        for d in _build().plan.days:
            ids = [t.task_id for t in d.tasks]
            assert len(ids) == len(set(ids))

    def test_hard_cooldown(self):
        last_seen: dict[str, int] = {}
        for d in _build().plan.days:
            for t in d.tasks:
                if not d.used_fallback and t.task_id in last_seen:
                    assert d.day - last_seen[t.task_id] >= 3
            for t in d.tasks:
                last_seen[t.task_id] = d.day

    def test_budget_respected(self):
        for d in _build().plan.days:
            assert d.total_time_minutes == sum(t.time_minutes for t in d.tasks)
            if not d.used_fallback:
                assert d.total_time_minutes <= d.time_budget_minutes

    def test_low_adherence_caps_tasks_per_day(self):
        plan = _build().plan
        assert plan.meta.computed.adherence < 0.6
        assert all(len(d.tasks) <= 2 for d in plan.days)

    def test_at_most_three_tasks(self):
        intake = _make_intake(daily_time_budget="45", stress_1_10=2, sleep_hours_bucket="7.5-8")
        plan = _build(intake).plan
        assert all(len(d.tasks) <= 3 for d in plan.days)

    def test_assigned_task_fields(self):
        day = _build().plan.days[0]
        for n, t in enumerate(day.tasks, start=1):
            assert t.id == f"d1_t{n}_{t.task_id}"
            assert t.pillar == t.raw_pillar.short_label
            assert 0.0 <= t.freshness <= 1.0
            assert t.slot in ("am", "any", "pm", "fallback")

    def test_first_plan_is_beginner_only(self):
        catalog = {t.id: t for t in all_tasks()}
        for d in _build().plan.days:
            if d.used_fallback:
                continue
            for t in d.tasks:
                assert t.level is Level.BEGINNER
                assert catalog[t.task_id].prerequisites == ()

    def test_equipment_respected(self):
        catalog = {t.id: t for t in all_tasks()}
        for d in _build().plan.days:
            if d.used_fallback:
                continue
            for t in d.tasks:
                assert catalog[t.task_id].equipment in (Equipment.NONE, Equipment.ANY)

    def test_deterministic(self):
        first = _build()
        second = _build()
        assert first.plan.model_dump() == second.plan.model_dump()
        assert first.text == second.text

    def test_text_rendering_included(self):
        result = _build()
        assert result.text.startswith(TITLE)
        assert "Day 01 - stabilize - Monday" in result.text

    def test_stressed_short_sleeper_gets_no_vigorous_tasks(self):
        intake = _make_intake(stress_1_10=9, sleep_hours_bucket="<6")
        plan = _build(intake).plan
        assert plan.meta.computed.caps.hiit_banned is True
        for d in plan.days:
            if d.used_fallback:
                continue
            for t in d.tasks:
                assert t.intensity <= Intensity.GENTLE

    def test_low_energy_shrinks_budget(self):
        plan = _build(user_state=UserState(energy_level=1)).plan
        assert plan.days[0].time_budget_minutes == 11
        assert plan.meta.computed.energy_level == 1

    def test_returning_user_unlocks_prerequisites(self):
        completed = [t.id for t in all_tasks() if t.level is Level.BEGINNER]
        state = UserState(
            completed_tasks=completed,
            user_completions={p: 20 for p in Pillar},
        )
        plan = _build(_make_intake(equipment_access="gym"), user_state=state).plan
        assert plan.meta.computed.user_mastery_levels[Pillar.SLEEP_RECOVERY] is Level.ADVANCED
        assert any(t.level is not Level.BEGINNER for d in plan.days for t in d.tasks)

    def test_duplicate_library_ids_rejected(self):
        library = all_tasks() + [all_tasks()[0]]
        with pytest.raises(ValueError):
            _build(library=library)

    def test_library_not_modified(self):
        library = all_tasks()
        before = list(library)
        _build(library=library)
        assert library == before


class TestHealthAwarePlan:

    def test_heart_disease(self):
        profile = HealthProfile(chronic_conditions=["heart_disease"])
        plan = _build(health_profile=profile).plan
        health = plan.meta.health

        assert health.has_profile is True
        assert health.intensity_cap == 0
        assert health.tasks_filtered > 0
        assert health.summary.intensity_level == "gentle"
        assert "Train only with medical clearance" in health.warnings
        assert plan.meta.computed.caps.hiit_banned is True

        catalog = {t.id: t for t in all_tasks()}
        for d in plan.days:
            for t in d.tasks:
                assert t.intensity <= Intensity.MODERATE
                assert not any("hiit" in tag or "cold_exposure" in tag for tag in catalog[t.task_id].tags)

    def test_warnings_rendered(self):
        profile = HealthProfile(chronic_conditions=["asthma"])
        text = _build(health_profile=profile).text
        assert "Health notes:" in text
        assert "- Keep your inhaler at hand" in text

    def test_heart_disease_days_never_empty(self):
        profile = HealthProfile(chronic_conditions=["heart_disease"])
        plan = _build(health_profile=profile).plan
        assert all(d.tasks for d in plan.days)

    def test_without_profile(self):
        health = _build().plan.meta.health
        assert health.has_profile is False
        assert health.intensity_cap is None
        assert health.tasks_filtered == 0
        assert health.summary is None


# ======================================================================
# Hand-built libraries
# ======================================================================


class TestSlotSelection:

    def test_empty_library(self):
        plan = _build(library=[]).plan
        assert len(plan.days) == PLAN_DAYS
        for d in plan.days:
            assert d.tasks == []
            assert d.used_fallback is False
            assert d.total_time_minutes == 0

    def test_circadian_anchor_takes_am_slot(self):
        library = [
            _make_task("MOVAM", Pillar.MOVEMENT_MUSCLE, when=Slot.AM, tags=("strength", "steps")),
            _make_task("CIRAM", Pillar.CIRCADIAN_RHYTHM, when=Slot.AM),
        ]
        day = _build(library=library).plan.days[0]
        assert [(t.slot, t.task_id) for t in day.tasks] == [("am", "CIRAM"), ("any", "MOVAM")]

    def test_fallback_ignores_equipment(self):
        library = [
            _make_task("CIRGYM", Pillar.CIRCADIAN_RHYTHM, equipment=Equipment.GYM, level=Level.ADVANCED),
        ]
        plan = _build(library=library).plan
        for d in plan.days:
            assert d.used_fallback is True
            assert [(t.slot, t.task_id) for t in d.tasks] == [("fallback", "CIRGYM")]

    def test_no_fallback_candidate_leaves_day_empty(self):
        library = [
            _make_task("HIIT1", Pillar.MOVEMENT_MUSCLE, intensity=Intensity.VIGOROUS, tags=("hiit",)),
            _make_task("HIIT2", Pillar.MOVEMENT_MUSCLE, intensity=Intensity.VIGOROUS, tags=("hiit",)),
        ]
        intake = _make_intake(stress_1_10=9, sleep_hours_bucket="<6")
        plan = _build(intake, library=library).plan
        assert all(d.tasks == [] and not d.used_fallback for d in plan.days)

    def test_prerequisites_gate(self):
        library = [
            _make_task("BASE", Pillar.MOVEMENT_MUSCLE),
            _make_task("NEXT", Pillar.MOVEMENT_MUSCLE, prerequisites=("BASE",)),
        ]
        assert "NEXT" not in _task_ids(_build(library=library).plan)

        state = UserState(completed_tasks=["BASE"])
        assert "NEXT" in _task_ids(_build(library=library, user_state=state).plan)

    def test_mastery_gate(self):
        library = [
            _make_task("EASY", Pillar.NUTRITION_METABOLISM),
            _make_task("HARD", Pillar.NUTRITION_METABOLISM, level=Level.INTERMEDIATE),
        ]
        assert "HARD" not in _task_ids(_build(library=library).plan)

        state = UserState(user_completions={Pillar.NUTRITION_METABOLISM: 5})
        assert "HARD" in _task_ids(_build(library=library, user_state=state).plan)

    def test_task_longer_than_budget_never_assigned(self):
        library = [
            _make_task("LONG", Pillar.NUTRITION_METABOLISM, minutes=40),
            _make_task("SHORT", Pillar.NUTRITION_METABOLISM),
        ]
        assert _task_ids(_build(library=library).plan) == {"SHORT"}


# ======================================================================
# Input robustness and logging
# ======================================================================


class TestNullAnswers:

    @pytest.mark.parametrize("field", [
        "name", "age", "stress_1_10", "diet_pattern",
        "daily_time_budget", "sleep_hours_bucket", "training_frequency",
    ])
    def test_null_answer_reads_as_default(self, field):
        intake = Intake(**{field: None})
        plan = _build(intake).plan
        assert len(plan.days) == PLAN_DAYS

    def test_null_defaults(self):
        intake = Intake(name=None, age=None, stress_1_10=None, diet_pattern=None)
        assert intake.name == "You"
        assert intake.age == 35
        assert intake.stress_1_10 == 5
        assert intake.diet_pattern == []


class TestPlanLogging:

    def test_summary_log_omits_user_name(self, caplog):
        with caplog.at_level(logging.INFO, logger="app.blueprint.assembly"):
            _build(_make_intake(name="Zelda Quartermaine"))
        assert "Built 30-day plan" in caplog.text
        assert "Zelda Quartermaine" not in caplog.text
