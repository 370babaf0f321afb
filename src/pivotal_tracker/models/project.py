"""Project domain model."""

from typing import Any

from pydantic import BaseModel


class ProjectDetails(BaseModel):
    """Project metadata as returned by the service."""

    name: str | None = None
    iteration_weeks: int | None = None  # Length of an iteration in weeks
    point_scale: str | None = None  # e.g. "0,1,2,3"
    start_day: str | None = None  # Day iterations start on, e.g. "Monday"

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "ProjectDetails":
        """Create ProjectDetails from a parsed <project> element."""
        return cls(
            name=data.get("name"),
            iteration_weeks=data.get("iteration_length"),
            point_scale=_as_text(data.get("point_scale")),
            start_day=data.get("week_start_day"),
        )


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
