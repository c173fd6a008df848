"""What would the blueprint plan for a typical user?

Builds a 30-day plan for a fixed example intake (and optionally a
heart-disease health profile) with a pinned start date, then prints the
text rendering and a per-pillar tally.

Usage:
    python scripts/simulate_blueprint.py [--heart]
"""

import datetime
import sys
from collections import Counter
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.blueprint import build_30_day_blueprint
from app.catalog import all_tasks
from app.core.logging import configure_logging
from app.schemas.intake import HealthProfile, Intake

START_DATE = datetime.date(2026, 3, 2)

INTAKE = Intake(
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


def main() -> None:
    configure_logging(log_level="INFO")
    profile = HealthProfile(chronic_conditions=["heart_disease"]) if "--heart" in sys.argv else None

    result = build_30_day_blueprint(INTAKE, all_tasks(), health_profile=profile, start_date=START_DATE)
    print(result.text)

    tally = Counter(t.raw_pillar.value for d in result.plan.days for t in d.tasks)
    print("─" * 60)
    print("Assignments per pillar:")
    for pillar, count in tally.most_common():
        print(f"  {pillar:<22} {count:>3}")
    print(f"  fallback days: {sum(1 for d in result.plan.days if d.used_fallback)}")


if __name__ == "__main__":
    main()
