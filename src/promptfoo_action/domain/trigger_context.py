"""GitHub trigger context for change detection.

This module parses GitHub event payloads into one of four trigger variants.
Each variant carries only the fields the change-set resolver needs for that
event type, so downstream code can branch on the variant type instead of
checking which optional fields happen to be set.

Following the principle: "Parse once into well-formed models"
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from promptfoo_action.domain.exceptions import ConfigurationError, ErrorCodes


@dataclass(frozen=True)
class PullRequestTrigger:
    """A pull_request (or pull_request_target) event

    Attributes:
        base_ref: Branch the PR targets
        head_ref: Branch the PR comes from
        pr_number: Pull request number
    """

    base_ref: str
    head_ref: str
    pr_number: int


@dataclass(frozen=True)
class PushTrigger:
    """A push event

    Attributes:
        before_sha: SHA before the push (all zeros for a new branch)
        after_sha: SHA after the push
    """

    before_sha: Optional[str]
    after_sha: Optional[str]


@dataclass(frozen=True)
class ManualDispatchTrigger:
    """A workflow_dispatch event

    Attributes:
        files_override: Explicit list of files to treat as changed
        base_ref_override: Base ref to compare HEAD against
    """

    files_override: Optional[Tuple[str, ...]] = None
    base_ref_override: Optional[str] = None


@dataclass(frozen=True)
class UnsupportedTrigger:
    """Any event type the action does not know how to diff"""

    event_name: str


TriggerContext = Union[PullRequestTrigger, PushTrigger, ManualDispatchTrigger, UnsupportedTrigger]

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


def parse_trigger_context(event_name: str, event_json: str) -> TriggerContext:
    """Parse a GitHub event payload into a trigger variant.

    Args:
        event_name: The GitHub event name (e.g., "pull_request", "push")
        event_json: The JSON payload from ${{ toJson(github.event) }}

    Returns:
        The TriggerContext variant matching the event

    Raises:
        json.JSONDecodeError: If event_json is not valid JSON
        ConfigurationError: If a pull_request event has no pull_request payload

    Examples:
        >>> parse_trigger_context("push", '{"before": "abc", "after": "def"}')
        PushTrigger(before_sha='abc', after_sha='def')
        >>> parse_trigger_context("schedule", "{}")
        UnsupportedTrigger(event_name='schedule')
    """
    event = json.loads(event_json) if event_json else {}
    return trigger_from_event(event_name, event or {})


def trigger_from_event(event_name: str, event: Dict[str, Any]) -> TriggerContext:
    """Build a trigger variant from an already-decoded event payload"""
    if event_name in PULL_REQUEST_EVENTS:
        return _parse_pull_request_event(event)
    if event_name == "push":
        return PushTrigger(
            before_sha=event.get("before") or None,
            after_sha=event.get("after") or None,
        )
    if event_name == "workflow_dispatch":
        return _parse_workflow_dispatch_event(event)
    return UnsupportedTrigger(event_name=event_name)


def _parse_pull_request_event(event: Dict[str, Any]) -> PullRequestTrigger:
    pr = event.get("pull_request")
    if not pr:
        raise ConfigurationError(
            "No pull request found in the event payload.",
            code=ErrorCodes.NO_PULL_REQUEST,
            help_text="This action must be triggered by a pull_request event "
                      "or receive the event JSON via EVENT_JSON.",
        )

    return PullRequestTrigger(
        base_ref=(pr.get("base") or {}).get("ref", ""),
        head_ref=(pr.get("head") or {}).get("ref", ""),
        pr_number=int(pr.get("number") or 0),
    )


def _parse_workflow_dispatch_event(event: Dict[str, Any]) -> ManualDispatchTrigger:
    inputs = event.get("inputs") or {}

    files = split_file_list(inputs.get("files") or "")
    base = (inputs.get("base") or "").strip()

    return ManualDispatchTrigger(
        files_override=tuple(files) if files else None,
        base_ref_override=base or None,
    )


def split_file_list(value: str) -> List[str]:
    """Split a workflow_dispatch "files" input into paths

    Entries may be separated by newlines or commas.

    Examples:
        >>> split_file_list("a.txt, b.txt\\nc.txt")
        ['a.txt', 'b.txt', 'c.txt']
    """
    return [item.strip() for item in re.split(r"[\n,]", value) if item.strip()]
