"""Plan-generation core: pure functions from intake to a 30-day plan."""

from app.blueprint.assembly import build_30_day_blueprint

__all__ = ["build_30_day_blueprint"]
