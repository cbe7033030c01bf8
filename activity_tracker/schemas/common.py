from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python, strings stripped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class Area(str, Enum):
    study = "study"
    football = "football"


class Intensity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class PlanStatus(str, Enum):
    planned = "planned"
    completed = "completed"
    skipped = "skipped"
