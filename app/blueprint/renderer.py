"""Plain-text rendering of a generated plan."""

from __future__ import annotations

from app.schemas.plan import Plan

TITLE = "LONGEVITY BLUEPRINT - 30-Day Plan"


def render_plan_text(plan: Plan) -> str:
    computed = plan.meta.computed
    lines = [
        TITLE,
        f"For: {plan.user_name}, starting {plan.start_date.isoformat()}",
        "",
        "Summary (Need Scores 0-100):",
    ]
    for pillar, need in computed.needs.items():
        lines.append(f"- {pillar.value}: {round(need)}")
    lines.append(f"Adherence score (0.2-1): {computed.adherence:.2f}")

    if plan.meta.health.warnings:
        lines.append("")
        lines.append("Health notes:")
        lines.extend(f"- {w}" for w in plan.meta.health.warnings)
    lines.append("")

    for day in plan.days:
        novelty = " [novelty]" if day.is_novelty_day else ""
        lines.append(
            f"Day {day.day:02d} - {day.phase.value} - {day.day_of_week} - "
            f"{day.total_time_minutes} min{novelty}"
        )
        for t in day.tasks:
            lines.append(
                f"  * [{t.id}] ({t.raw_pillar.value}, {t.level.value}, "
                f"{t.time_minutes}m, fresh:{t.freshness:.2f}) {t.task}"
            )
        lines.append("")
    return "\n".join(lines)
