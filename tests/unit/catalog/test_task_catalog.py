"""Tests for the built-in task catalog."""

import pytest

from app.catalog import TASK_CATALOG, all_tasks, get_task, tasks_by_pillar
from app.catalog.tasks import register_task
from app.schemas.task import PILLARS, TAG_VOCABULARY, Level, Pillar, Task


class TestCatalogContents:
    """Verify the built-in task library is well-formed."""

    def test_catalog_not_empty(self):
        assert len(TASK_CATALOG) >= 60, (
            f"Expected at least 60 tasks, got {len(TASK_CATALOG)}"
        )

    def test_task_id_matches_key(self):
        for key, task in TASK_CATALOG.items():
            assert task.id == key, f"Key '{key}' does not match id '{task.id}'"

    def test_every_pillar_has_beginner_tasks(self):
        for pillar in PILLARS:
            beginners = [t for t in tasks_by_pillar(pillar) if t.level is Level.BEGINNER]
            assert beginners, f"No beginner tasks for {pillar.value}"

    def test_tags_in_vocabulary(self):
        for task in all_tasks():
            unknown = set(task.tags) - TAG_VOCABULARY
            assert not unknown, f"{task.id}: unknown tags {unknown}"

    def test_prerequisites_exist(self):
        for task in all_tasks():
            for prereq in task.prerequisites:
                assert prereq in TASK_CATALOG, (
                    f"{task.id}: prerequisite '{prereq}' is not in the catalog"
                )

    def test_beginner_tasks_have_no_prerequisites(self):
        for task in all_tasks():
            if task.level is Level.BEGINNER:
                assert task.prerequisites == (), f"{task.id} is beginner but has prerequisites"

    def test_prerequisites_are_not_harder(self):
        for task in all_tasks():
            for prereq in task.prerequisites:
                assert TASK_CATALOG[prereq].level.rank <= task.level.rank, (
                    f"{task.id}: prerequisite '{prereq}' is harder than the task"
                )

    def test_ids_prefixed_by_pillar(self):
        prefixes = {
            Pillar.SLEEP_RECOVERY: "SLP",
            Pillar.CIRCADIAN_RHYTHM: "CIR",
            Pillar.MENTAL_RESILIENCE: "MEN",
            Pillar.NUTRITION_METABOLISM: "NUT",
            Pillar.MOVEMENT_MUSCLE: "MOV",
            Pillar.SUPPLEMENTS: "SUP",
        }
        for task in all_tasks():
            assert task.id.startswith(prefixes[task.pillar]), task.id


class TestCatalogLookup:

    def test_get_task(self):
        task = get_task("SLP001")
        assert task is not None
        assert task.pillar is Pillar.SLEEP_RECOVERY

    def test_unknown_task(self):
        assert get_task("NOPE999") is None

    def test_all_tasks_returns_copy(self):
        tasks = all_tasks()
        tasks.clear()
        assert len(all_tasks()) == len(TASK_CATALOG)

    def test_tasks_by_pillar_partitions_catalog(self):
        total = sum(len(tasks_by_pillar(p)) for p in PILLARS)
        assert total == len(TASK_CATALOG)

    def test_register_duplicate_raises(self):
        with pytest.raises(ValueError, match="already registered"):
            register_task(get_task("SLP001"))


class TestTaskValidation:

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValueError, match="Unknown task tags"):
            Task(id="BAD001", pillar=Pillar.SLEEP_RECOVERY, minutes=5, intensity=-1,
                 tags=("hitt",), how="typo")

    def test_self_prerequisite_rejected(self):
        with pytest.raises(ValueError, match="itself"):
            Task(id="BAD002", pillar=Pillar.SLEEP_RECOVERY, minutes=5, intensity=-1,
                 prerequisites=("BAD002",), how="loop")

    def test_non_positive_minutes_rejected(self):
        with pytest.raises(ValueError):
            Task(id="BAD003", pillar=Pillar.SLEEP_RECOVERY, minutes=0, intensity=-1, how="zero")
