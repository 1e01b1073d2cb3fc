"""Tests for trigger context parsing"""

import json

import pytest

from promptfoo_action.domain.exceptions import ConfigurationError, ErrorCodes
from promptfoo_action.domain.trigger_context import (
    ManualDispatchTrigger,
    PullRequestTrigger,
    PushTrigger,
    UnsupportedTrigger,
    parse_trigger_context,
    split_file_list,
)
from tests.builders import EventBuilder


class TestParsePullRequest:
    """Tests for pull_request event parsing"""

    def test_parses_refs_and_number(self):
        """Should read base/head refs and the PR number"""
        # Arrange
        event = EventBuilder.pull_request().with_number(42).with_base("main").with_head("feature/x")

        # Act
        context = parse_trigger_context("pull_request", event.to_json())

        # Assert
        assert context == PullRequestTrigger(base_ref="main", head_ref="feature/x", pr_number=42)

    def test_pull_request_target_is_treated_as_pull_request(self):
        """Should parse pull_request_target the same way"""
        event = EventBuilder.pull_request().with_number(3)

        context = parse_trigger_context("pull_request_target", event.to_json())

        assert isinstance(context, PullRequestTrigger)
        assert context.pr_number == 3

    def test_missing_pull_request_payload_is_fatal(self):
        """Should raise NO_PULL_REQUEST when the payload lacks pull_request"""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_trigger_context("pull_request", json.dumps({"action": "opened"}))

        assert exc_info.value.code == ErrorCodes.NO_PULL_REQUEST


class TestParsePush:
    """Tests for push event parsing"""

    def test_parses_before_and_after(self):
        event = EventBuilder.push(before="1" * 40, after="2" * 40)

        context = parse_trigger_context("push", event.to_json())

        assert context == PushTrigger(before_sha="1" * 40, after_sha="2" * 40)

    def test_missing_shas_become_none(self):
        """Should map absent or empty SHAs to None"""
        event = EventBuilder.push(before=None, after="")

        context = parse_trigger_context("push", event.to_json())

        assert context == PushTrigger(before_sha=None, after_sha=None)


class TestParseWorkflowDispatch:
    """Tests for workflow_dispatch event parsing"""

    def test_no_inputs(self):
        context = parse_trigger_context("workflow_dispatch", EventBuilder.workflow_dispatch().to_json())

        assert context == ManualDispatchTrigger(files_override=None, base_ref_override=None)

    def test_files_input_split_on_newlines_and_commas(self):
        """Should accept newline and comma separated file lists"""
        event = EventBuilder.workflow_dispatch().with_files(["prompts/a.txt", "prompts/b.txt"], separator=", ")

        context = parse_trigger_context("workflow_dispatch", event.to_json())

        assert context.files_override == ("prompts/a.txt", "prompts/b.txt")

    def test_base_input(self):
        event = EventBuilder.workflow_dispatch().with_base_input(" origin/main ")

        context = parse_trigger_context("workflow_dispatch", event.to_json())

        assert context.base_ref_override == "origin/main"

    def test_blank_files_input_is_no_override(self):
        event = EventBuilder.workflow_dispatch().with_files(["", "  "])

        context = parse_trigger_context("workflow_dispatch", event.to_json())

        assert context.files_override is None


class TestUnsupportedEvents:
    """Tests for events the action does not diff"""

    @pytest.mark.parametrize("event_name", ["schedule", "release", ""])
    def test_other_events_are_unsupported(self, event_name):
        context = parse_trigger_context(event_name, "{}")

        assert context == UnsupportedTrigger(event_name=event_name)

    def test_empty_json_is_accepted(self):
        assert parse_trigger_context("schedule", "") == UnsupportedTrigger(event_name="schedule")

    def test_invalid_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_trigger_context("push", "{not json")


class TestSplitFileList:
    """Tests for split_file_list"""

    def test_keeps_spaces_inside_paths(self):
        """Paths containing spaces must survive splitting"""
        assert split_file_list("prompts/my prompt.txt\nother.txt") == ["prompts/my prompt.txt", "other.txt"]

    def test_empty(self):
        assert split_file_list("") == []
