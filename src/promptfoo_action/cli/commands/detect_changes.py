"""Detect whether prompt, config or dependency changes require an evaluation.

This command runs change detection only and publishes the decision as step
outputs, so workflows can gate later steps on it without running promptfoo.
"""

import json

from promptfoo_action.domain.action_inputs import ActionInputs
from promptfoo_action.domain.exceptions import PromptfooActionError, format_error_message
from promptfoo_action.domain.trigger_context import parse_trigger_context
from promptfoo_action.infrastructure.github.actions import GitHubActionsHelper
from promptfoo_action.services.composite.change_detection_service import (
    ChangeDetection,
    ChangeDetectionService,
)


def cmd_detect_changes(
    gh: GitHubActionsHelper,
    inputs: ActionInputs,
    event_name: str,
    event_json: str,
    detection_service: ChangeDetectionService,
) -> int:
    """Detect changes and output the run/skip decision.

    Args:
        gh: GitHubActionsHelper for writing outputs
        inputs: Parsed action inputs
        event_name: GitHub event name
        event_json: GitHub event JSON payload
        detection_service: Service computing the decision

    Returns:
        0 on success (run or skip), 1 on fatal error

    Outputs (via GITHUB_OUTPUT):
        should_run: "true" or "false"
        reason: DecisionReason value
        changed_files: JSON list of changed files (empty when unresolved)
        prompt_files: JSON list of prompt files to evaluate
    """
    try:
        detect_and_publish(gh, inputs, event_name, event_json, detection_service)
        return 0
    except PromptfooActionError as e:
        fatal = e.to_fatal()
        print(f"\n❌ [{fatal.code}] {fatal.message}")
        gh.set_error(format_error_message(e))
        return 1
    except json.JSONDecodeError as e:
        gh.set_error(f"Invalid event JSON: {e}")
        return 1


def detect_and_publish(
    gh: GitHubActionsHelper,
    inputs: ActionInputs,
    event_name: str,
    event_json: str,
    detection_service: ChangeDetectionService,
) -> ChangeDetection:
    """Run change detection and write its outputs

    Raises:
        PromptfooActionError: For fatal detection failures
        json.JSONDecodeError: If event_json is not valid JSON
    """
    print("=== promptfoo-action change detection ===")
    print(f"Event name: {event_name}")
    print(f"Config: {inputs.config_path}")
    print(f"Prompt globs: {inputs.prompt_globs or '(none)'}")

    context = parse_trigger_context(event_name, event_json)
    detection = detection_service.detect(
        context=context,
        config_path=inputs.config_path,
        prompt_globs=inputs.prompt_globs,
        force_run=inputs.force_run,
    )

    if detection.change_set.degraded:
        gh.set_warning(detection.change_set.degraded.warning)

    decision = detection.decision
    if decision.should_run:
        print(f"\n✓ Evaluation required: {decision.message}")
    else:
        print(f"\n⏭️  Skipping: {decision.message}")

    gh.write_output("should_run", "true" if decision.should_run else "false")
    gh.write_output("reason", decision.reason.value)
    gh.write_output("changed_files", json.dumps(list(detection.change_set.files)))
    gh.write_output("prompt_files", json.dumps(list(decision.prompt_files)))
    return detection
