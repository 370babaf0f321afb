"""Story domain models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import StoryState, StoryType

# Keys accepted when creating a story
STORY_FIELD_NAMES = frozenset(
    {
        "created_at",
        "current_state",
        "description",
        "estimate",
        "labels",
        "name",
        "note",
        "requested_by",
        "story_type",
    }
)

REQUIRED_STORY_FIELDS = ("name", "requested_by")


class StoryFields(BaseModel):
    """Fields sent to the service when creating a story."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    requested_by: str = Field(..., min_length=1)
    description: str | None = None
    estimate: int | None = None
    labels: list[str] = Field(default_factory=list)
    created_at: str | None = None
    note: str | None = None
    story_type: StoryType | None = None
    current_state: StoryState | None = None

    @field_validator("labels")
    @classmethod
    def validate_labels(cls, v: list[str]) -> list[str]:
        """Reject blank labels."""
        for label in v:
            if not label.strip():
                raise ValueError("Labels cannot be blank")
        return v

    def to_xml_dict(self) -> dict[str, Any]:
        """Convert to an ordered dict of set fields for XML serialization.

        Unset fields and empty label lists are left out; enums are reduced
        to their string values.
        """
        data = self.model_dump(mode="json", exclude_none=True)
        if not data.get("labels"):
            data.pop("labels", None)
        return data


class Story(BaseModel):
    """A story record as returned by the service."""

    id: int | None = None
    name: str | None = None
    description: str | None = None
    estimate: int | None = None
    # Kept as plain strings so unexpected server values never fail a write
    current_state: str | None = None
    created_at: str | None = None
    story_type: str | None = None
    requested_by: str | None = None
    labels: list[str] = Field(default_factory=list)
    url: str | None = None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "Story":
        """Create Story from a parsed <story> element."""
        labels = data.get("labels") or []
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            description=data.get("description"),
            estimate=data.get("estimate"),
            current_state=data.get("current_state"),
            created_at=data.get("created_at"),
            story_type=data.get("story_type"),
            requested_by=data.get("requested_by"),
            labels=[str(label) for label in labels if label is not None],
            url=data.get("url"),
        )
