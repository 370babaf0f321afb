"""Pivotal Tracker XML API client."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from ..models import (
    REQUIRED_STORY_FIELDS,
    STORY_FIELD_NAMES,
    Confirmation,
    Failure,
    ProjectDetails,
    Result,
    Story,
    StoryFields,
    Success,
)
from ..utils.validation import is_numeric_id
from .xml_codec import XMLParseError, make_xml, parse_xml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.pivotaltracker.com/services/v1/"
DEFAULT_TIMEOUT = 30.0


class TrackerError(Exception):
    """Base exception for tracker client errors."""

    pass


class TrackerValidationError(TrackerError, ValueError):
    """Caller input rejected before any request was made."""

    pass


class TrackerTransportError(TrackerError):
    """Request could not be completed."""

    pass


class TrackerResponseError(TrackerTransportError):
    """Response body could not be parsed."""

    pass


def check_id(value: str | int, label: str) -> str:
    """Validate a numeric identifier and return it as a string.

    Raises:
        TrackerValidationError: If the value is not a string of digits
    """
    if not is_numeric_id(value):
        raise TrackerValidationError(f"Malformed {label} ID: '{value}'")
    return str(value)


def build_story_fields(fields: StoryFields | Mapping[str, Any]) -> StoryFields:
    """Validate caller-supplied story fields.

    Unknown keys are rejected first, then the required keys are checked,
    then values are validated.

    Raises:
        TrackerValidationError: If any check fails
    """
    if isinstance(fields, StoryFields):
        return fields

    for key in fields:
        if key not in STORY_FIELD_NAMES:
            raise TrackerValidationError(f"Unrecognized option: {key}")
    for key in REQUIRED_STORY_FIELDS:
        if key not in fields:
            label = key.replace("_", " ").title()
            raise TrackerValidationError(f"{label} is required for a new story")

    try:
        return StoryFields(**fields)
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise TrackerValidationError(f"Invalid story fields: {messages}") from e


class TrackerClient:
    """Pivotal Tracker v1 API client.

    Each operation makes exactly one request and returns a Success or a
    Failure. Invalid input raises TrackerValidationError before any request;
    transport problems raise TrackerTransportError. Nothing is retried.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            token: Pivotal Tracker API token
            base_url: API base URL ending in "/services/v1/"
            timeout: Request timeout in seconds
        """
        self.token = token
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                "X-TrackerToken": token,
                "Content-Type": "application/xml",
            },
            timeout=timeout,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> TrackerClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_project_details(self, project_id: str | int) -> Result[ProjectDetails]:
        """Fetch a project's name and iteration settings.

        Args:
            project_id: Numeric project ID

        Returns:
            Success with ProjectDetails, or Failure with the service's errors

        Raises:
            TrackerResponseError: If the <project> element cannot be read
        """
        project_id = check_id(project_id, "Project")

        response = self._request("GET", f"projects/{project_id}")
        if not _is_success(response):
            return _failure(response)

        return Success(_from_element(ProjectDetails, "project", response.get("project") or {}))

    def add_story(
        self, project_id: str | int, fields: StoryFields | Mapping[str, Any]
    ) -> Result[Story]:
        """Create a story in a project.

        Args:
            project_id: Numeric project ID
            fields: StoryFields, or a mapping of story field names to values

        Returns:
            Success with the created Story, or Failure with the service's errors

        Raises:
            TrackerResponseError: If the returned <story> element cannot be read
        """
        project_id = check_id(project_id, "Project")
        story_fields = build_story_fields(fields)

        content = make_xml("story", story_fields.to_xml_dict())
        response = self._request("POST", f"projects/{project_id}/stories", content)
        if not _is_success(response):
            return _failure(response)

        stories = response.get("story") or [{}]
        return Success(_from_element(Story, "story", stories[0] or {}))

    def delete_story(
        self, project_id: str | int, story_id: str | int
    ) -> Result[Confirmation]:
        """Delete a story.

        Args:
            project_id: Numeric project ID
            story_id: Numeric story ID

        Returns:
            Success with the service's Confirmation message, or Failure
        """
        project_id = check_id(project_id, "Project")
        story_id = check_id(story_id, "Story")

        response = self._request("DELETE", f"projects/{project_id}/stories/{story_id}")
        if not _is_success(response):
            return _failure(response)

        return Success(Confirmation(message=response.get("message")))

    def _request(self, method: str, path: str, content: str | None = None) -> dict[str, Any] | None:
        """Send one request and parse the XML response.

        Returns:
            Parsed response, or None if the body was empty

        Raises:
            TrackerTransportError: Request failed, or HTTP error without an API payload
            TrackerResponseError: Response body is not XML
        """
        if content is not None:
            logger.debug("%s %s body=%s", method, path, content)

        start_time = time.monotonic()
        try:
            response = self._client.request(method, path, content=content)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise TrackerTransportError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code
        logger.debug("%s %s response body: %s", method, path, response.text)

        if not response.text.strip():
            if status >= 400:
                logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
                raise TrackerTransportError(_status_line(response))
            logger.warning("%s %s: empty response body (%.0fms)", method, path, elapsed_ms)
            return None

        try:
            parsed = parse_xml(response.text)
        except XMLParseError as e:
            logger.error(
                "%s %s: HTTP %d, unparseable body (%.0fms)", method, path, status, elapsed_ms
            )
            if status >= 400:
                raise TrackerTransportError(_status_line(response)) from e
            raise TrackerResponseError(str(e)) from e

        # Error statuses only count as API responses when they carry a payload
        if status >= 400:
            if "success" not in parsed and "errors" not in parsed:
                logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
                raise TrackerTransportError(_status_line(response))
            logger.warning(
                "%s %s: HTTP %d with error payload (%.0fms)", method, path, status, elapsed_ms
            )
        else:
            logger.info("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        return parsed


def _is_success(response: dict[str, Any] | None) -> bool:
    return response is not None and response.get("success") == "true"


def _from_element(model: Any, tag: str, data: Any) -> Any:
    """Build a response record, treating malformed elements as a bad response."""
    if not isinstance(data, dict):
        raise TrackerResponseError(f"Unexpected <{tag}> element in response: {data!r}")
    try:
        return model.from_response(data)
    except ValidationError as e:
        raise TrackerResponseError(f"Unexpected <{tag}> element in response: {e}") from e


def _failure(response: dict[str, Any] | None) -> Failure:
    errors = response.get("errors") if response is not None else None
    return Failure.from_errors(errors)


def _status_line(response: httpx.Response) -> str:
    return f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
