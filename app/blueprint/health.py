"""
Health constraint filter — adapts the task library to a health profile.

The rules are data, not code:

* ``TAG_AVOIDANCE_RULES``   tag -> conditions for which the tag is unsafe.
* ``TAG_PREFERENCE_RULES``  tag -> conditions for which the tag is helpful.
* ``INTENSITY_CAP_CONDITIONS``  gentle / moderate ceilings by condition.
* ``CONDITION_WARNINGS``    fixed warning text per chronic condition.

A profile's *active conditions* are its chronic conditions and injuries
plus derived flags (``is_smoker``, ``alcohol_daily``).  Preference matching
also includes mental-health flags and ``stress_high`` (stress_level >= 7).

Rule tags match by substring: a rule tag applies when it occurs inside any
task tag or inside the lower-cased task id (``hiit`` matches
``hiit_intense``).

Every operation accepts ``None`` as "no profile" and then imposes no
constraint.  Nothing here raises.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.schemas.intake import HealthProfile
from app.schemas.plan import HealthSummary
from app.schemas.task import Task

logger = logging.getLogger(__name__)

# ======================================================================
# Rule tables
# ======================================================================

TAG_AVOIDANCE_RULES: dict[str, tuple[str, ...]] = {
    # Cardiovascular / intensity
    "hiit": ("heart_disease", "hypertension", "cancer_active", "copd", "pregnancy"),
    "hiit_intense": ("diabetes_type1", "asthma", "is_smoker"),
    "heavy_lifting": ("heart_disease", "hypertension", "cancer_active", "post_surgery", "pregnancy"),
    # Impact
    "jumping": ("arthritis", "osteoporosis", "knee_issues", "hip_issues", "ankle_issues", "pregnancy"),
    "running": ("arthritis", "knee_issues", "back_pain", "copd"),
    "high_impact": ("arthritis", "osteoporosis", "pregnancy", "mobility_limited"),
    # Temperature / breath
    "cold_exposure": ("heart_disease", "asthma"),
    "cold_exposure_intense": ("asthma", "copd", "heart_disease"),
    "hot_yoga": ("pregnancy", "heart_disease"),
    "breath_hold": ("heart_disease", "hypertension", "asthma"),
    # Fasting
    "fasting": ("diabetes_type1", "cancer_active", "pregnancy"),
    "fasting_extended": ("diabetes_type1", "diabetes_type2", "kidney_disease"),
    "extreme_fasting": ("diabetes_type1", "diabetes_type2", "cancer_remission", "liver_disease"),
    # Movement patterns
    "overhead_press": ("shoulder_issues",),
    "pull_ups": ("shoulder_issues", "wrist_issues"),
    "deep_squats": ("knee_issues", "hip_issues", "back_pain"),
    "lunges": ("knee_issues",),
    "deadlift_heavy": ("back_pain",),
    "twisting": ("osteoporosis", "back_pain"),
    "lying_on_back": ("pregnancy",),
    # Nutrition / load
    "alcohol": ("liver_disease",),
    "high_protein_extreme": ("kidney_disease",),
    "extreme_stress": ("autoimmune", "burnout"),
    "overtraining": ("autoimmune", "burnout", "chronic_fatigue"),
}

TAG_PREFERENCE_RULES: dict[str, tuple[str, ...]] = {
    "gentle": ("heart_disease", "cancer_active", "copd", "post_surgery", "mobility_limited"),
    "low_impact": ("arthritis", "osteoporosis", "knee_issues"),
    "restorative": ("cancer_active", "burnout", "chronic_fatigue"),
    "breathing": ("anxiety", "asthma", "copd", "stress_high"),
    "breathing_exercises": ("anxiety", "asthma", "is_smoker"),
    "mindfulness": ("depression", "anxiety", "burnout"),
    "meditation": ("anxiety", "hypertension", "stress_high"),
    "outdoor": ("depression", "anxiety"),
    "nature": ("depression", "anxiety", "burnout"),
    "morning_light": ("depression", "insomnia"),
    "zone2": ("hypertension", "diabetes_type2", "heart_disease_stable"),
    "light_cardio": ("heart_disease", "copd"),
    "light_walk": ("heart_disease", "cancer_active"),
    "mobility": ("arthritis", "back_pain", "shoulder_issues", "hip_issues"),
    "stretching": ("arthritis", "back_pain"),
    "swimming": ("arthritis", "back_pain", "knee_issues"),
    "balance": ("osteoporosis",),
    "core_stability": ("back_pain",),
    "anti_inflammatory": ("cancer_remission", "autoimmune", "arthritis"),
    "stress_reduction": ("autoimmune", "burnout"),
    "recovery": ("thyroid_disorder", "burnout"),
    "hydration": ("kidney_disease", "alcohol_daily"),
    "prenatal": ("pregnancy",),
    "pelvic_floor": ("pregnancy", "post_pregnancy"),
}

GENTLE_CAP_CONDITIONS: frozenset[str] = frozenset({
    "heart_disease", "cancer_active", "copd", "post_surgery", "mobility_limited",
})
MODERATE_CAP_CONDITIONS: frozenset[str] = frozenset({
    "hypertension", "diabetes_type1", "cancer_remission", "osteoporosis",
    "arthritis", "kidney_disease", "liver_disease", "autoimmune", "pregnancy",
})
INTENSITY_CAP_CONDITIONS: dict[str, frozenset[str]] = {
    "gentle": GENTLE_CAP_CONDITIONS,
    "moderate": MODERATE_CAP_CONDITIONS,
}

CONDITION_WARNINGS: dict[str, tuple[str, ...]] = {
    "diabetes_type1": ("Check blood sugar before and after training",),
    "diabetes_type2": ("A short walk after meals is recommended",),
    "hypertension": (
        "Avoid maximal exertion",
        "Measure blood pressure regularly",
    ),
    "heart_disease": (
        "Train only with medical clearance",
        "Stop immediately if symptoms appear",
    ),
    "cancer_active": (
        "Exercise only after consulting your oncologist",
        "Watch your energy level",
        "Plan rest days",
    ),
    "cancer_remission": ("Keep up regular follow-up checks",),
    "asthma": (
        "Keep your inhaler at hand",
        "Warm up slowly",
    ),
    "copd": (
        "Monitor your breathing",
        "Pause when short of breath",
    ),
    "arthritis": (
        "Protect your joints",
        "Warm up longer in the morning",
    ),
    "osteoporosis": (
        "Minimise fall risk",
        "Prefer bone-strengthening exercise",
    ),
    "thyroid_disorder": (
        "Energy may fluctuate",
        "Have your levels checked regularly",
    ),
    "autoimmune": (
        "Watch for flare-ups",
        "Plan enough recovery",
    ),
    "kidney_disease": (
        "Agree protein intake with your doctor",
        "Drink enough fluids",
    ),
    "liver_disease": (
        "Avoid alcohol",
        "Mind interactions with medication",
    ),
    "depression": (
        "Movement demonstrably helps",
        "Small steps count",
    ),
    "anxiety": (
        "Prioritise breathing exercises",
        "Avoid overload",
    ),
}

MULTIPLE_CONDITIONS_WARNING = "With several conditions, regular medical check-ups are recommended"
MEDICATION_WARNING = "Medication can affect training; ask your doctor if unsure"
PREGNANCY_WARNING = "Pregnancy: train only with clearance from your doctor or midwife"

_PREFERENCE_STEP = 0.05
_PREFERENCE_CAP = 0.30
_STRESS_HIGH_LEVEL = 7


# ======================================================================
# Condition sets
# ======================================================================


def active_conditions(profile: Optional[HealthProfile]) -> set[str]:
    """Conditions that trigger avoidance rules and intensity caps."""
    if profile is None:
        return set()
    conditions = set(profile.chronic_conditions) | set(profile.injuries_limitations)
    if profile.smokes:
        conditions.add("is_smoker")
    if profile.drinks_daily:
        conditions.add("alcohol_daily")
    return conditions


def _preference_conditions(profile: HealthProfile) -> set[str]:
    conditions = active_conditions(profile) | set(profile.mental_health_flags)
    # Preferences count only the declared smoker flag, not the daily frequency.
    if not profile.is_smoker:
        conditions.discard("is_smoker")
    if profile.stress_level >= _STRESS_HIGH_LEVEL:
        conditions.add("stress_high")
    return conditions


def _matches(rule_tag: str, task: Task, include_id: bool) -> bool:
    if any(rule_tag in tag.lower() for tag in task.tags):
        return True
    return include_id and rule_tag in task.id.lower()


# ======================================================================
# Operations
# ======================================================================


def should_exclude(task: Task, profile: Optional[HealthProfile]) -> bool:
    """True if any avoidance rule matching the task is triggered by the profile."""
    conditions = active_conditions(profile)
    if not conditions:
        return False
    for rule_tag, triggers in TAG_AVOIDANCE_RULES.items():
        if _matches(rule_tag, task, include_id=True) and conditions.intersection(triggers):
            return True
    return False


def preference_boost(task: Task, profile: Optional[HealthProfile]) -> float:
    """Score bonus in [0, 0.30]: 0.05 per (preferred tag, matching condition)."""
    if profile is None:
        return 0.0
    conditions = _preference_conditions(profile)
    if not conditions:
        return 0.0
    boost = 0.0
    for rule_tag, triggers in TAG_PREFERENCE_RULES.items():
        if _matches(rule_tag, task, include_id=False):
            boost += _PREFERENCE_STEP * len(conditions.intersection(triggers))
    return min(boost, _PREFERENCE_CAP)


def intensity_cap(profile: Optional[HealthProfile]) -> Optional[int]:
    """Maximum task intensity the profile allows.

    Returns 0 (gentle only) when any condition is in the gentle set, else 1
    (moderate maximum) when any is in the moderate set, else ``None``.  The
    gentle check always runs first.
    """
    if profile is None:
        return None
    conditions = set(profile.chronic_conditions) | set(profile.injuries_limitations)
    if conditions & GENTLE_CAP_CONDITIONS:
        return 0
    if conditions & MODERATE_CAP_CONDITIONS:
        return 1
    return None


def filter_library(tasks: list[Task], profile: Optional[HealthProfile]) -> list[Task]:
    """Drop tasks the profile excludes or whose intensity exceeds its cap.

    Library order is preserved.
    """
    if profile is None:
        return list(tasks)
    cap = intensity_cap(profile)
    kept = [
        t for t in tasks
        if not should_exclude(t, profile) and (cap is None or t.intensity <= cap)
    ]
    logger.debug(
        "Health filter kept %d of %d tasks (intensity cap: %s)",
        len(kept), len(tasks), cap,
    )
    return kept


def warnings(profile: Optional[HealthProfile]) -> list[str]:
    """Plan warnings for the profile, deduplicated in first-seen order."""
    if profile is None:
        return []
    collected: list[str] = []
    for condition in profile.chronic_conditions:
        collected.extend(CONDITION_WARNINGS.get(condition, ()))
    if len(profile.chronic_conditions) >= 3:
        collected.append(MULTIPLE_CONDITIONS_WARNING)
    if profile.takes_medications:
        collected.append(MEDICATION_WARNING)
    if "pregnancy" in profile.injuries_limitations:
        collected.append(PREGNANCY_WARNING)
    return list(dict.fromkeys(collected))


_INTENSITY_LABELS: dict[Optional[int], str] = {
    0: "gentle",
    1: "moderate",
    None: "normal",
}


def health_summary(profile: Optional[HealthProfile]) -> Optional[HealthSummary]:
    """Display summary, or ``None`` when there are no conditions or injuries."""
    if profile is None:
        return None
    if not profile.chronic_conditions and not profile.injuries_limitations:
        return None
    cap = intensity_cap(profile)
    return HealthSummary(
        condition_count=len(profile.chronic_conditions),
        injury_count=len(profile.injuries_limitations),
        intensity_level=_INTENSITY_LABELS[cap],
        has_restrictions=True,
        warnings=warnings(profile),
    )
