"""Tests for data models."""

import pytest
from pydantic import ValidationError

from pivotal_tracker.models import (
    FALLBACK_ERROR,
    STORY_FIELD_NAMES,
    ConfigError,
    Failure,
    ProjectDetails,
    Story,
    StoryFields,
    StoryState,
    StoryType,
    Success,
    TrackerConfig,
)


class TestStoryFields:
    """Tests for the StoryFields request model."""

    def test_required_fields(self):
        """name and requested_by are required."""
        with pytest.raises(ValidationError):
            StoryFields(name="Fix bug")
        with pytest.raises(ValidationError):
            StoryFields(requested_by="Alice")

    def test_enums_from_strings(self):
        """Type and state strings become enum members."""
        fields = StoryFields(
            name="Fix bug", requested_by="Alice", story_type="release", current_state="accepted"
        )

        assert fields.story_type is StoryType.RELEASE
        assert fields.current_state is StoryState.ACCEPTED

    def test_unknown_field_rejected(self):
        """Extra keys are rejected."""
        with pytest.raises(ValidationError):
            StoryFields(name="Fix bug", requested_by="Alice", owner="Bob")

    def test_blank_label_rejected(self):
        """Blank labels are rejected."""
        with pytest.raises(ValidationError):
            StoryFields(name="Fix bug", requested_by="Alice", labels=["ok", " "])

    def test_frozen(self):
        """Fields cannot be changed after construction."""
        fields = StoryFields(name="Fix bug", requested_by="Alice")
        with pytest.raises(ValidationError):
            fields.name = "Other"

    def test_to_xml_dict_skips_unset(self):
        """Only set fields are serialized, enums as values."""
        fields = StoryFields(name="Fix bug", requested_by="Alice", story_type=StoryType.BUG)

        assert fields.to_xml_dict() == {
            "name": "Fix bug",
            "requested_by": "Alice",
            "story_type": "bug",
        }

    def test_to_xml_dict_keeps_labels(self):
        """Non-empty labels are kept."""
        fields = StoryFields(name="Fix bug", requested_by="Alice", labels=["urgent", "ui"])

        assert fields.to_xml_dict()["labels"] == ["urgent", "ui"]

    def test_model_fields_match_allow_list(self):
        """Every allowed key is a StoryFields field and vice versa."""
        assert set(StoryFields.model_fields) == STORY_FIELD_NAMES


class TestStoryFromResponse:
    """Tests for Story.from_response."""

    def test_missing_labels_is_empty(self):
        """Absent labels become an empty list."""
        story = Story.from_response({"id": 1, "name": "One"})

        assert story.labels == []
        assert story.description is None

    def test_none_labels_is_empty(self):
        """Empty labels element becomes an empty list."""
        assert Story.from_response({"labels": None}).labels == []


class TestProjectDetailsFromResponse:
    """Tests for ProjectDetails.from_response."""

    def test_field_mapping(self):
        """Response keys map onto the model's field names."""
        details = ProjectDetails.from_response(
            {
                "name": "Website",
                "iteration_length": 3,
                "point_scale": "0,1,3,5,8",
                "week_start_day": "Sunday",
            }
        )

        assert details.iteration_weeks == 3
        assert details.start_day == "Sunday"
        assert details.point_scale == "0,1,3,5,8"


class TestResult:
    """Tests for Success and Failure."""

    def test_success_variant(self):
        """Success carries a value and no errors."""
        result = Success("payload")

        assert result.success is True
        assert result.value == "payload"
        assert result.errors == ()

    def test_failure_variant(self):
        """Failure carries its error list."""
        result = Failure(["a", "b"])

        assert result.success is False
        assert result.error_count == 2

    def test_failure_errors_are_immutable(self):
        """Errors are stored as a tuple, so a frozen Failure cannot be changed through them."""
        messages = ["a", "b"]
        result = Failure(messages)
        messages.append("c")

        assert result.errors == ("a", "b")
        assert isinstance(result.errors, tuple)
        with pytest.raises(AttributeError):
            result.errors.append("d")

    def test_failure_from_none(self):
        """No errors falls back to a generic message."""
        assert Failure.from_errors(None).errors == (FALLBACK_ERROR,)
        assert Failure.from_errors([]).errors == (FALLBACK_ERROR,)

    def test_failure_from_string(self):
        """A single string becomes a one-element tuple."""
        assert Failure.from_errors("Boom").errors == ("Boom",)

    def test_failure_drops_empty_entries(self):
        """None and blank entries are dropped."""
        assert Failure.from_errors(["a", None, " "]).errors == ("a",)


class TestTrackerConfig:
    """Tests for the TrackerConfig model."""

    def test_aliases(self):
        """YAML key names map onto model fields."""
        config = TrackerConfig.model_validate(
            {
                "General": {"APIKey": "abc", "Me": "Alice", "DefaultProject": "web"},
                "Projects": {"web": 42, "mobile": 77},
            }
        )

        assert config.api_key == "abc"
        assert config.me == "Alice"
        assert config.default_project_id == 42
        assert config.resolve_project("mobile") == 77

    def test_empty_config(self):
        """Everything is optional."""
        config = TrackerConfig()

        assert config.api_key is None
        assert config.projects == {}
        assert config.default_project_id is None

    def test_default_project_must_exist(self):
        """DefaultProject must name a configured project."""
        with pytest.raises(ValidationError) as exc_info:
            TrackerConfig.model_validate(
                {"General": {"DefaultProject": "nope"}, "Projects": {"web": 42}}
            )
        assert "DefaultProject 'nope'" in str(exc_info.value)

    def test_project_ids_must_be_positive(self):
        """Project IDs must be positive integers."""
        with pytest.raises(ValidationError):
            TrackerConfig.model_validate({"Projects": {"web": 0}})
        with pytest.raises(ValidationError):
            TrackerConfig.model_validate({"Projects": {"web": "abc"}})

    def test_resolve_unknown_project(self):
        """Unknown project names raise ConfigError."""
        config = TrackerConfig.model_validate({"Projects": {"web": 42}})

        with pytest.raises(ConfigError) as exc_info:
            config.resolve_project("mobile")
        assert "web" in str(exc_info.value)

    def test_frozen(self):
        """Configuration cannot be changed after loading."""
        config = TrackerConfig()
        with pytest.raises(ValidationError):
            config.projects = {"web": 1}
