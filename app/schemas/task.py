"""
Task (micro-habit) schema and its closed vocabularies.

A task is a small, immutable habit prescription from the library.  Every
task belongs to exactly one **pillar** and is characterised by:

* **Intensity** (gentle / moderate / vigorous) — compared against the
  user's intensity ceiling.
* **Equipment** (none / basic / gym / any) — minimum equipment tier.
* **Level** (beginner / intermediate / advanced) — mastery gate.
* **Slot** (am / pm / any) — when in the day the task may be placed.
* **Tags** — free-form attributes drawn from :data:`TAG_VOCABULARY`,
  matched by the scoring and health rules.

Tags are validated when the task is constructed so that a typo in the
library (``"hitt"``) fails at import time instead of silently never
matching a rule.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ======================================================================
# Enums
# ======================================================================

class Pillar(str, Enum):
    """Lifestyle domain a task (and a need score) belongs to."""
    SLEEP_RECOVERY = "sleep_recovery"
    CIRCADIAN_RHYTHM = "circadian_rhythm"
    MENTAL_RESILIENCE = "mental_resilience"
    NUTRITION_METABOLISM = "nutrition_metabolism"
    MOVEMENT_MUSCLE = "movement_muscle"
    SUPPLEMENTS = "supplements"

    @property
    def short_label(self) -> str:
        """Display label: the text before the first underscore."""
        return self.value.split("_")[0]


PILLARS: list[Pillar] = list(Pillar)


class Intensity(IntEnum):
    """Physical / physiological demand of a task."""
    GENTLE = -1
    MODERATE = 0
    VIGOROUS = 1


class Equipment(str, Enum):
    """Minimum equipment tier required by a task."""
    NONE = "none"
    BASIC = "basic"
    GYM = "gym"
    ANY = "any"


class Level(str, Enum):
    """Mastery tier of a task (and of a user within a pillar)."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK: dict[Level, int] = {
    Level.BEGINNER: 0,
    Level.INTERMEDIATE: 1,
    Level.ADVANCED: 2,
}


class Slot(str, Enum):
    """Time-of-day window a task is valid for."""
    AM = "am"
    PM = "pm"
    ANY = "any"


class Phase(str, Enum):
    """Block of the 30-day plan a day belongs to."""
    STABILIZE = "stabilize"
    BUILD = "build"
    OPTIMIZE = "optimize"
    CONSOLIDATE = "consolidate"


# ======================================================================
# Tag vocabulary
# ======================================================================

# Descriptive tags used by the built-in library.
_LIBRARY_TAGS = {
    "sleep", "winddown", "starter", "temperature", "routine", "light",
    "environment", "hydration", "breathing", "journaling", "stretching",
    "recovery", "audio", "protocol", "advanced", "tracking", "biohacking",
    "morning", "caffeine", "timing", "evening", "meals", "screen",
    "outdoor", "fasting", "after_meal", "walk", "afternoon", "breath",
    "stress", "downshift", "mindfulness", "quick", "nature", "gratitude",
    "digital", "detox", "meditation", "focus", "reflection", "resilience",
    "visualization", "walking", "flow", "deep_work", "breathwork",
    "protein", "fiber", "vegetables", "snacking", "awareness", "sugar",
    "alcohol", "planning", "meal_prep", "glucose", "hack", "prebiotic",
    "omega3", "supplement", "batch", "macros", "monitoring", "microbiome",
    "steps", "neat", "beginner", "intermediate", "mobility", "posture",
    "desk", "stairs", "bodyweight", "strength", "push_pull", "zone2",
    "cardio", "hip", "resistance", "full_body", "hiit", "compound",
    "running", "vitamin_d", "basic", "magnesium", "creatine", "stack",
    "adaptogens", "bloodwork", "nootropics", "mental", "social",
    "shutdown", "review", "minimum_viable_day", "meal_timing", "shopping",
    "late_eating", "experimental", "new_habit_complex", "intense",
}

# Tags referenced by the health avoidance / preference rules.
_HEALTH_RULE_TAGS = {
    "hiit_intense", "heavy_lifting", "jumping", "high_impact",
    "cold_exposure", "cold_exposure_intense", "hot_yoga", "breath_hold",
    "fasting_extended", "extreme_fasting", "overhead_press", "pull_ups",
    "deep_squats", "lunges", "deadlift_heavy", "twisting", "lying_on_back",
    "high_protein_extreme", "extreme_stress", "overtraining",
    "gentle", "low_impact", "restorative", "breathing_exercises",
    "morning_light", "light_cardio", "light_walk", "swimming", "balance",
    "core_stability", "anti_inflammatory", "stress_reduction", "prenatal",
    "pelvic_floor",
}

TAG_VOCABULARY: frozenset[str] = frozenset(_LIBRARY_TAGS | _HEALTH_RULE_TAGS)


# ======================================================================
# Task model
# ======================================================================

class Task(BaseModel):
    """Library entry describing a single micro-habit."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique id, e.g. 'SLP001'")
    pillar: Pillar
    minutes: int = Field(..., gt=0, description="Duration in minutes")
    intensity: Intensity
    equipment: Equipment = Equipment.ANY
    level: Level = Level.BEGINNER
    tags: tuple[str, ...] = Field(default_factory=tuple)
    when: Slot = Slot.ANY
    how: str = Field(..., description="Human-readable instruction text")
    title: Optional[str] = None
    prerequisites: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Task ids that must have been completed before this one",
    )

    @field_validator("tags")
    @classmethod
    def _tags_in_vocabulary(cls, tags: tuple[str, ...]) -> tuple[str, ...]:
        unknown = sorted(t for t in tags if t not in TAG_VOCABULARY)
        if unknown:
            raise ValueError(f"Unknown task tags: {unknown}")
        return tags

    @model_validator(mode="after")
    def _no_self_prerequisite(self) -> Task:
        if self.id in self.prerequisites:
            raise ValueError(f"Task '{self.id}' lists itself as a prerequisite")
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def validate_library(tasks: list[Task]) -> list[Task]:
    """Check library-level invariants (unique ids).

    Raises :class:`ValueError` on duplicate ids.  Returns the tasks
    unchanged so it can be used inline.
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for task in tasks:
        if task.id in seen:
            duplicates.append(task.id)
        seen.add(task.id)
    if duplicates:
        raise ValueError(f"Duplicate task ids in library: {sorted(set(duplicates))}")
    return tasks
