"""
Saved plan database model.

Stores a generated 30-day plan as a JSON document together with its
text rendering and a few columns used for listing.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, Text
from sqlmodel import Field, SQLModel


class SavedPlan(SQLModel, table=True):
    """A generated plan, stored as the serialised :class:`~app.schemas.plan.Plan`."""

    __tablename__ = "saved_plans"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_name: str = Field(nullable=False, max_length=200)
    primary_goal: Optional[str] = Field(default=None, max_length=50, index=True)
    start_date: datetime.date = Field(nullable=False, index=True)

    plan: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    rendered_text: str = Field(default="", sa_column=Column(Text, nullable=False))

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
