"""Data models."""

from .enums import StoryState, StoryType
from .project import ProjectDetails
from .result import FALLBACK_ERROR, Confirmation, Failure, Result, Success
from .story import REQUIRED_STORY_FIELDS, STORY_FIELD_NAMES, Story, StoryFields
from .tracker_config import ConfigError, GeneralConfig, TrackerConfig

__all__ = [
    "FALLBACK_ERROR",
    "REQUIRED_STORY_FIELDS",
    "STORY_FIELD_NAMES",
    "ConfigError",
    "Confirmation",
    "Failure",
    "GeneralConfig",
    "ProjectDetails",
    "Result",
    "Story",
    "StoryFields",
    "StoryState",
    "StoryType",
    "Success",
    "TrackerConfig",
]
