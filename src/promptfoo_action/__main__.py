#!/usr/bin/env python3
"""
promptfoo-action - GitHub Actions entry point

Run with: python3 -m promptfoo_action <command>
"""

import logging
import os
import sys

from promptfoo_action.cli.commands.detect_changes import cmd_detect_changes
from promptfoo_action.cli.commands.evaluate import cmd_evaluate
from promptfoo_action.cli.commands.manual_run import cmd_manual_run
from promptfoo_action.cli.parser import create_parser
from promptfoo_action.domain.action_inputs import ActionInputs
from promptfoo_action.domain.eval_environment import EvalEnvironment
from promptfoo_action.domain.exceptions import PromptfooActionError, format_error_message
from promptfoo_action.infrastructure.filesystem.glob_expander import FilesystemGlobExpander
from promptfoo_action.infrastructure.git.operations import GitClient
from promptfoo_action.infrastructure.github.actions import GitHubActionsHelper
from promptfoo_action.infrastructure.promptfoo.runner import PromptfooRunner
from promptfoo_action.services.composite.change_detection_service import ChangeDetectionService
from promptfoo_action.services.core.change_set_service import ChangeSetService
from promptfoo_action.services.core.dependency_service import DependencyService


def read_event(environ) -> tuple:
    """Return (event_name, event_json) from EVENT_NAME/EVENT_JSON or the runner's event file"""
    event_name = environ.get("EVENT_NAME") or environ.get("GITHUB_EVENT_NAME", "")
    event_json = environ.get("EVENT_JSON", "")
    if not event_json:
        event_path = environ.get("GITHUB_EVENT_PATH", "")
        if event_path and os.path.exists(event_path):
            with open(event_path, "r") as f:
                event_json = f.read()
    return event_name, event_json or "{}"


def build_detection_service(cwd: str) -> ChangeDetectionService:
    glob_expander = FilesystemGlobExpander()
    return ChangeDetectionService(
        change_set_service=ChangeSetService(GitClient(cwd)),
        dependency_service=DependencyService(glob_expander=glob_expander, cwd=cwd),
        glob_expander=glob_expander,
        cwd=cwd,
    )


def main():
    """Main entry point for the script"""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("RUNNER_DEBUG") == "1" else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize GitHub Actions helper
    gh = GitHubActionsHelper()

    try:
        inputs = ActionInputs.from_environment(os.environ)
    except PromptfooActionError as e:
        gh.set_error(format_error_message(e))
        return 1

    if getattr(args, "force", False):
        inputs.force_run = True
    for name in ("prompt_file", "input_file", "provider"):
        if getattr(args, name, None):
            setattr(inputs, name, getattr(args, name))

    if inputs.working_directory:
        os.chdir(inputs.working_directory)
    cwd = os.getcwd()

    environment = EvalEnvironment.from_inputs(inputs, os.environ, cwd)
    runner = PromptfooRunner(cwd)

    # Route to appropriate command handler
    if args.command in ("evaluate", "detect-changes"):
        event_name, event_json = read_event(os.environ)
        detection_service = build_detection_service(cwd)
        if args.command == "detect-changes":
            return cmd_detect_changes(gh, inputs, event_name, event_json, detection_service)
        return cmd_evaluate(
            gh=gh,
            inputs=inputs,
            event_name=event_name,
            event_json=event_json,
            detection_service=detection_service,
            runner=runner,
            environment=environment,
            working_directory=cwd,
        )
    elif args.command == "manual-run":
        return cmd_manual_run(gh, inputs, runner, environment, root=cwd)
    else:
        gh.set_error(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
