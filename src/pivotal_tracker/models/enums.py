"""Enums for story type and state."""

from enum import Enum


class StoryType(str, Enum):
    """Valid story types."""

    FEATURE = "feature"
    RELEASE = "release"
    BUG = "bug"
    CHORE = "chore"


class StoryState(str, Enum):
    """Valid story states, in workflow order."""

    UNSCHEDULED = "unscheduled"
    UNSTARTED = "unstarted"
    STARTED = "started"
    FINISHED = "finished"
    DELIVERED = "delivered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
