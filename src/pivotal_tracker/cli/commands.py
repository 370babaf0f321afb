"""Command runners: call the client and print the result."""

from typing import Any

from ..models import Failure, TrackerConfig
from ..tracker import TrackerClient
from .output import errors, field, header, info, project_line, success


def report_failure(result: Failure) -> int:
    """Print each error message on its own line.

    Returns:
        Exit code 1
    """
    errors(result.errors)
    return 1


def run_list_projects(config: TrackerConfig) -> int:
    """Print the configured projects, marking the default one."""
    if not config.projects:
        info("No projects configured")
        return 0

    header("Projects:")
    default = config.general.default_project
    for name, project_id in sorted(config.projects.items()):
        project_line(name, project_id, is_default=name == default)
    return 0


def run_show_project(client: TrackerClient, project_id: str) -> int:
    """Fetch and print project details.

    Returns:
        Exit code (0 for success, 1 for an API error)
    """
    result = client.get_project_details(project_id)
    if isinstance(result, Failure):
        return report_failure(result)

    project = result.value
    header(project.name or f"Project {project_id}")
    field("Iteration length (weeks)", project.iteration_weeks)
    field("Point scale", project.point_scale)
    field("Week start day", project.start_day)
    return 0


def run_add_story(client: TrackerClient, project_id: str, fields: dict[str, Any]) -> int:
    """Create a story and print what the service recorded.

    Returns:
        Exit code (0 for success, 1 for an API error)
    """
    result = client.add_story(project_id, fields)
    if isinstance(result, Failure):
        return report_failure(result)

    story = result.value
    success(f"Created story {story.id}: {story.name}")
    field("Type", story.story_type)
    field("State", story.current_state)
    field("Estimate", story.estimate)
    field("Requested by", story.requested_by)
    field("Labels", story.labels)
    field("Created at", story.created_at)
    field("Description", story.description)
    field("URL", story.url)
    return 0


def run_delete_story(client: TrackerClient, project_id: str, story_id: str) -> int:
    """Delete a story and print the service's confirmation.

    Returns:
        Exit code (0 for success, 1 for an API error)
    """
    result = client.delete_story(project_id, story_id)
    if isinstance(result, Failure):
        return report_failure(result)

    success(result.value.message or f"Deleted story {story_id}")
    return 0
