"""
Unit tests for the health constraint filter.
"""

import pytest

from app.blueprint.health import (
    MEDICATION_WARNING,
    MULTIPLE_CONDITIONS_WARNING,
    PREGNANCY_WARNING,
    filter_library,
    health_summary,
    intensity_cap,
    preference_boost,
    should_exclude,
    warnings,
)
from app.catalog import all_tasks, get_task
from app.schemas.intake import HealthProfile
from app.schemas.task import Intensity, Pillar, Task


# ======================================================================
# Helpers
# ======================================================================


def _make_task(task_id: str = "T001", tags: tuple = (), intensity: Intensity = Intensity.GENTLE) -> Task:
    return Task(
        id=task_id,
        pillar=Pillar.MOVEMENT_MUSCLE,
        minutes=5,
        intensity=intensity,
        tags=tags,
        how="test task",
    )


def _profile(**kwargs) -> HealthProfile:
    return HealthProfile(**kwargs)


# ======================================================================
# should_exclude
# ======================================================================


class TestShouldExclude:

    @pytest.mark.parametrize("task_id", ["MOV021", "MOV025", "MEN012", "MEN021", "MEN023"])
    def test_heart_disease_excludes_risky_catalog_tasks(self, task_id):
        profile = _profile(chronic_conditions=["heart_disease"])
        assert should_exclude(get_task(task_id), profile) is True

    def test_heart_disease_keeps_gentle_sleep_task(self):
        profile = _profile(chronic_conditions=["heart_disease"])
        assert should_exclude(get_task("SLP001"), profile) is False

    def test_no_profile_never_excludes(self):
        assert should_exclude(_make_task(tags=("hiit",)), None) is False

    def test_empty_profile_never_excludes(self):
        assert should_exclude(_make_task(tags=("hiit",)), _profile()) is False

    def test_rule_tag_matches_by_substring(self):
        task = _make_task(tags=("hiit_intense",))
        assert should_exclude(task, _profile(chronic_conditions=["hypertension"])) is True

    def test_rule_tag_matches_task_id(self):
        task = _make_task(task_id="RUNNING01")
        assert should_exclude(task, _profile(injuries_limitations=["knee_issues"])) is True

    def test_injuries_trigger_rules(self):
        task = _make_task(tags=("lunges",))
        assert should_exclude(task, _profile(injuries_limitations=["knee_issues"])) is True

    def test_daily_smoker_flag(self):
        task = _make_task(tags=("hiit_intense",))
        assert should_exclude(task, _profile(smoking_frequency="daily")) is True
        assert should_exclude(task, _profile(is_smoker=True)) is True

    def test_daily_alcohol_flag_does_not_trigger_unrelated_rules(self):
        task = _make_task(tags=("hiit",))
        assert should_exclude(task, _profile(alcohol_frequency="daily")) is False


# ======================================================================
# intensity_cap
# ======================================================================


class TestIntensityCap:

    @pytest.mark.parametrize("conditions,expected", [
        (["heart_disease"], 0),
        (["copd"], 0),
        (["hypertension"], 1),
        (["arthritis", "kidney_disease"], 1),
        (["hypertension", "heart_disease"], 0),
        (["heart_disease", "hypertension"], 0),
        (["insomnia"], None),
        ([], None),
    ])
    def test_caps(self, conditions, expected):
        assert intensity_cap(_profile(chronic_conditions=conditions)) == expected

    def test_injuries_count_towards_cap(self):
        assert intensity_cap(_profile(injuries_limitations=["post_surgery"])) == 0
        assert intensity_cap(_profile(injuries_limitations=["pregnancy"])) == 1

    def test_no_profile(self):
        assert intensity_cap(None) is None


# ======================================================================
# preference_boost
# ======================================================================


class TestPreferenceBoost:

    def test_mental_flags_and_high_stress(self):
        task = _make_task(tags=("breathing",))
        profile = _profile(mental_health_flags=["anxiety"], stress_level=8)
        assert preference_boost(task, profile) == pytest.approx(0.10)

    def test_normal_stress_does_not_count(self):
        task = _make_task(tags=("breathing",))
        profile = _profile(mental_health_flags=["anxiety"], stress_level=5)
        assert preference_boost(task, profile) == pytest.approx(0.05)

    def test_capped_at_030(self):
        task = _make_task(tags=("gentle", "light_cardio", "light_walk", "restorative"))
        profile = _profile(chronic_conditions=["heart_disease", "cancer_active", "copd"])
        assert preference_boost(task, profile) == pytest.approx(0.30)

    def test_smoker_preference_needs_declared_flag(self):
        task = _make_task(tags=("breathing_exercises",))
        assert preference_boost(task, _profile(is_smoker=True)) == pytest.approx(0.05)
        assert preference_boost(task, _profile(smoking_frequency="daily")) == 0.0

    def test_no_matching_tag(self):
        task = _make_task(tags=("strength",))
        assert preference_boost(task, _profile(chronic_conditions=["arthritis"])) == 0.0

    def test_no_profile(self):
        assert preference_boost(_make_task(tags=("breathing",)), None) == 0.0


# ======================================================================
# filter_library
# ======================================================================


class TestFilterLibrary:

    def test_heart_disease_filters_catalog(self):
        profile = _profile(chronic_conditions=["heart_disease"])
        kept = filter_library(all_tasks(), profile)

        assert 0 < len(kept) < len(all_tasks())
        for task in kept:
            assert task.intensity <= 0
            for tag in task.tags:
                assert "hiit" not in tag
                assert "heavy_lifting" not in tag
                assert "cold_exposure" not in tag

    def test_moderate_cap_drops_vigorous_tasks(self):
        kept = filter_library(all_tasks(), _profile(chronic_conditions=["hypertension"]))
        assert all(t.intensity <= Intensity.MODERATE for t in kept)

    def test_preserves_order(self):
        library = all_tasks()
        kept = filter_library(library, _profile(chronic_conditions=["arthritis"]))
        positions = [library.index(t) for t in kept]
        assert positions == sorted(positions)

    def test_no_profile_keeps_everything(self):
        assert filter_library(all_tasks(), None) == all_tasks()


# ======================================================================
# warnings / health_summary
# ======================================================================


class TestWarnings:

    def test_condition_warnings(self):
        result = warnings(_profile(chronic_conditions=["asthma"]))
        assert result == ["Keep your inhaler at hand", "Warm up slowly"]

    def test_multiple_conditions_medication_and_pregnancy(self):
        profile = _profile(
            chronic_conditions=["diabetes_type2", "hypertension", "asthma"],
            injuries_limitations=["pregnancy"],
            takes_medications=True,
        )
        result = warnings(profile)
        assert MULTIPLE_CONDITIONS_WARNING in result
        assert MEDICATION_WARNING in result
        assert result[-1] == PREGNANCY_WARNING

    def test_deduplicated(self):
        result = warnings(_profile(chronic_conditions=["asthma", "asthma"]))
        assert len(result) == len(set(result))

    def test_unknown_condition_has_no_warning(self):
        assert warnings(_profile(chronic_conditions=["insomnia"])) == []

    def test_no_profile(self):
        assert warnings(None) == []


class TestHealthSummary:

    def test_none_without_conditions(self):
        assert health_summary(_profile(takes_medications=True)) is None
        assert health_summary(None) is None

    def test_gentle_summary(self):
        summary = health_summary(_profile(chronic_conditions=["heart_disease"], injuries_limitations=["back_pain"]))
        assert summary.condition_count == 1
        assert summary.injury_count == 1
        assert summary.intensity_level == "gentle"
        assert summary.has_restrictions is True
        assert "Train only with medical clearance" in summary.warnings

    def test_normal_label_without_cap(self):
        summary = health_summary(_profile(injuries_limitations=["back_pain"]))
        assert summary.intensity_level == "normal"
