"""CLI entry point for pivotal-tracker."""

import argparse
from pathlib import Path
from typing import Any

from . import __version__
from .cli.commands import run_add_story, run_delete_story, run_list_projects, run_show_project
from .cli.output import error, info
from .config import Settings
from .logging import setup_logging
from .models import ConfigError, StoryState, StoryType, TrackerConfig
from .services import default_config_paths, load_config
from .tracker import TrackerClient, TrackerTransportError, TrackerValidationError

IMPLEMENTED_ACTIONS = ("add-story", "delete-story", "show-project", "list-projects")
UNSUPPORTED_ACTIONS = ("show-story", "all-stories", "update-story", "comment", "deliver-all")

MANUAL = """\
Configuration
  Settings are read from ~/.pivotal_tracker.yml, then ./.pivotal_tracker.yml,
  then the file given with --config (or PIVOTAL_TRACKER_CONFIG_FILE). Later
  files override earlier ones; Projects entries are combined.

    General:
      APIKey: 0123456789abcdef
      Me: Alice Example
      DefaultProject: website
    Projects:
      website: 42
      mobile: 77

Examples
  pivotal-tracker --list-projects
  pivotal-tracker --show-project --project mobile
  pivotal-tracker --add-story --story "Fix login" --bug --label urgent --label ui
  pivotal-tracker --delete-story --project-id 42 --story-id 7

Environment
  PIVOTAL_TRACKER_BASE_URL   API base URL
  PIVOTAL_TRACKER_TIMEOUT    request timeout in seconds
  PIVOTAL_TRACKER_LOG_FILE   write logs to this file

Exit status
  0 on success, 1 on any configuration, validation, API or network error.
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pivotal-tracker",
        description="Create, delete and inspect Pivotal Tracker stories and projects",
    )

    actions = parser.add_argument_group("actions")
    action_group = actions.add_mutually_exclusive_group()
    for name in IMPLEMENTED_ACTIONS + UNSUPPORTED_ACTIONS:
        action_group.add_argument(
            f"--{name}",
            dest="action",
            action="store_const",
            const=name,
            help="not supported yet" if name in UNSUPPORTED_ACTIONS else None,
        )

    selection = parser.add_argument_group("selection")
    project_group = selection.add_mutually_exclusive_group()
    project_group.add_argument(
        "--project-id",
        default=None,
        metavar="ID",
        help="Numeric project ID",
    )
    project_group.add_argument(
        "--project",
        default=None,
        metavar="NAME",
        help="Project name from the config file (default: General.DefaultProject)",
    )
    selection.add_argument(
        "--story-id",
        default=None,
        metavar="ID",
        help="Numeric story ID",
    )

    fields = parser.add_argument_group("story fields")
    fields.add_argument("--story", default=None, metavar="NAME", help="Story name")
    fields.add_argument("--description", default=None, help="Story description")
    fields.add_argument(
        "--requested-by",
        default=None,
        metavar="NAME",
        help="Requester (default: General.Me)",
    )
    fields.add_argument(
        "--label",
        dest="labels",
        action="append",
        default=None,
        help="Label to add (repeatable)",
    )
    fields.add_argument("--estimate", type=int, default=None, help="Point estimate")
    fields.add_argument("--created-at", default=None, metavar="TIMESTAMP", help="Creation time")
    fields.add_argument("--note", default=None, help="Note to attach")

    types = parser.add_argument_group("story type")
    type_group = types.add_mutually_exclusive_group()
    for story_type in StoryType:
        type_group.add_argument(
            f"--{story_type.value}",
            dest="story_type",
            action="store_const",
            const=story_type.value,
        )

    states = parser.add_argument_group("story state")
    state_group = states.add_mutually_exclusive_group()
    for state in StoryState:
        state_group.add_argument(
            f"--{state.value}",
            dest="current_state",
            action="store_const",
            const=state.value,
        )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Extra config file, read after the default locations",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--man",
        action="store_true",
        help="Show the full manual and exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def story_fields_from_args(args: argparse.Namespace, config: TrackerConfig) -> dict[str, Any]:
    """Collect the story fields given on the command line.

    Only fields that were actually given are included, so missing required
    fields are reported by the client's validation.
    """
    values = {
        "name": args.story,
        "description": args.description,
        "requested_by": args.requested_by or config.me,
        "labels": args.labels,
        "estimate": args.estimate,
        "created_at": args.created_at,
        "note": args.note,
        "story_type": args.story_type,
        "current_state": args.current_state,
    }
    return {key: value for key, value in values.items() if value is not None}


def resolve_project_id(args: argparse.Namespace, config: TrackerConfig) -> str:
    """Pick the project from --project-id, --project or the configured default.

    Raises:
        ConfigError: If --project is unknown or no project can be determined
    """
    if args.project_id is not None:
        return args.project_id
    if args.project is not None:
        return str(config.resolve_project(args.project))
    if config.default_project_id is not None:
        return str(config.default_project_id)
    raise ConfigError("No project given; use --project-id, --project or set General.DefaultProject")


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Run the selected action.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args.action is None:
        error("No action given")
        info("Run 'pivotal-tracker --help' to see the available actions")
        return 1

    if args.action in UNSUPPORTED_ACTIONS:
        error(f"--{args.action} is not supported yet")
        return 1

    # An explicitly named config file must exist
    required = [settings.config_file] if settings.config_file is not None else []
    try:
        config = load_config(default_config_paths(override=settings.config_file), required)
    except ConfigError as e:
        error(str(e))
        return 1

    if args.action == "list-projects":
        return run_list_projects(config)

    if not config.api_key:
        error("No API token configured")
        info("Add 'APIKey' to the General section of your config file")
        return 1

    try:
        project_id = resolve_project_id(args, config)
    except ConfigError as e:
        error(str(e))
        return 1

    if args.action == "delete-story" and args.story_id is None:
        error("--delete-story requires --story-id")
        return 1

    with TrackerClient(config.api_key, settings.base_url, settings.timeout) as client:
        try:
            if args.action == "show-project":
                return run_show_project(client, project_id)
            if args.action == "add-story":
                return run_add_story(client, project_id, story_fields_from_args(args, config))
            return run_delete_story(client, project_id, args.story_id)
        except TrackerValidationError as e:
            error(str(e))
            return 1
        except TrackerTransportError as e:
            error(f"Request failed: {e}")
            return 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.man:
        parser.print_help()
        print()
        print(MANUAL, end="")
        raise SystemExit(0)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.config:
        settings_kwargs["config_file"] = args.config
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    raise SystemExit(run(args, settings))


if __name__ == "__main__":
    main()
