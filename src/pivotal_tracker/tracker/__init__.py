"""Pivotal Tracker API access.

The module-level functions open a client for a single call:

    from pivotal_tracker.tracker import project_details

    result = project_details("API token", "42")
    if result.success:
        print(result.value.name)
"""

from collections.abc import Mapping
from typing import Any

from ..models import Confirmation, ProjectDetails, Result, Story, StoryFields
from .client import (
    DEFAULT_BASE_URL,
    TrackerClient,
    TrackerError,
    TrackerResponseError,
    TrackerTransportError,
    TrackerValidationError,
)
from .xml_codec import make_xml, parse_xml


def project_details(token: str, project_id: str | int) -> Result[ProjectDetails]:
    """Fetch project details with a one-off client."""
    with TrackerClient(token) as client:
        return client.get_project_details(project_id)


def add_story(
    token: str, project_id: str | int, fields: StoryFields | Mapping[str, Any]
) -> Result[Story]:
    """Create a story with a one-off client."""
    with TrackerClient(token) as client:
        return client.add_story(project_id, fields)


def delete_story(token: str, project_id: str | int, story_id: str | int) -> Result[Confirmation]:
    """Delete a story with a one-off client."""
    with TrackerClient(token) as client:
        return client.delete_story(project_id, story_id)


__all__ = [
    "DEFAULT_BASE_URL",
    "TrackerClient",
    "TrackerError",
    "TrackerResponseError",
    "TrackerTransportError",
    "TrackerValidationError",
    "add_story",
    "delete_story",
    "make_xml",
    "parse_xml",
    "project_details",
]
