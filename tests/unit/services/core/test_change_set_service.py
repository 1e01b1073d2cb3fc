"""Unit tests for ChangeSetService"""

import pytest

from promptfoo_action.domain.exceptions import ErrorCodes, GitError
from promptfoo_action.domain.trigger_context import (
    ManualDispatchTrigger,
    PullRequestTrigger,
    PushTrigger,
    UnsupportedTrigger,
)
from promptfoo_action.services.core.change_set_service import PR_COMPARISON_HELP, ChangeSetService

NULL_SHA = "0" * 40


class TestResolvePullRequest:
    """Tests for pull request comparisons"""

    def test_fetches_both_refs_and_diffs_fetched_shas(self, mock_git):
        """Should fetch base then head and diff the resolved SHAs"""
        # Arrange
        shas = iter(["base-sha", "head-sha"])
        mock_git.rev_parse.side_effect = lambda ref: next(shas)
        mock_git.diff_name_only.return_value = "prompts/a.txt\nREADME.md\n"
        service = ChangeSetService(mock_git)

        # Act
        change_set = service.resolve(PullRequestTrigger("main", "feature/x", 5))

        # Assert
        assert change_set.files == ("prompts/a.txt", "README.md")
        assert change_set.resolved is True
        assert [c.args for c in mock_git.fetch.call_args_list] == [("origin", "main"), ("origin", "feature/x")]
        mock_git.diff_name_only.assert_called_once_with("base-sha", "head-sha")

    @pytest.mark.parametrize("base,head", [
        ("--upload-pack=evil", "feature"),
        ("main", "-x"),
        ("", "feature"),
    ])
    def test_invalid_refs_fail_before_git(self, mock_git, base, head):
        """Should raise INVALID_GIT_REF without issuing any git command"""
        service = ChangeSetService(mock_git)

        with pytest.raises(GitError) as exc_info:
            service.resolve(PullRequestTrigger(base, head, 1))

        assert exc_info.value.code == ErrorCodes.INVALID_GIT_REF
        mock_git.fetch.assert_not_called()
        mock_git.diff_name_only.assert_not_called()

    def test_git_failure_propagates(self, mock_git):
        """Pull request comparisons do not degrade"""
        mock_git.fetch.side_effect = GitError("Git command failed: fetch")
        service = ChangeSetService(mock_git)

        with pytest.raises(GitError) as exc_info:
            service.resolve(PullRequestTrigger("main", "feature", 1))

        assert exc_info.value.code == ErrorCodes.GIT_OPERATION_FAILED
        assert "fetch-depth: 0" in exc_info.value.help_text

    def test_diff_failure_carries_checkout_hint(self, mock_git):
        mock_git.diff_name_only.side_effect = GitError("Git command failed: diff")
        service = ChangeSetService(mock_git)

        with pytest.raises(GitError) as exc_info:
            service.resolve(PullRequestTrigger("main", "feature", 1))

        assert "Git command failed: diff" in str(exc_info.value)
        assert exc_info.value.help_text == PR_COMPARISON_HELP


class TestResolvePush:
    """Tests for push comparisons"""

    def test_diffs_before_and_after(self, mock_git):
        mock_git.diff_name_only.return_value = "prompts/a.txt"
        service = ChangeSetService(mock_git)

        change_set = service.resolve(PushTrigger("1" * 40, "2" * 40))

        assert change_set.files == ("prompts/a.txt",)
        mock_git.diff_name_only.assert_called_once_with("1" * 40, "2" * 40)

    def test_null_before_sha_is_unresolved_without_diff(self, mock_git):
        """A new branch push has nothing to compare against"""
        service = ChangeSetService(mock_git)

        change_set = service.resolve(PushTrigger(NULL_SHA, "2" * 40))

        assert change_set.resolved is False
        assert change_set.files == ()
        assert change_set.degraded is not None
        mock_git.diff_name_only.assert_not_called()

    @pytest.mark.parametrize("before,after", [(None, "2" * 40), ("1" * 40, None)])
    def test_missing_sha_is_unresolved(self, mock_git, before, after):
        change_set = ChangeSetService(mock_git).resolve(PushTrigger(before, after))

        assert change_set.resolved is False
        mock_git.diff_name_only.assert_not_called()

    def test_diff_failure_degrades(self, mock_git):
        mock_git.diff_name_only.side_effect = GitError("bad object")
        service = ChangeSetService(mock_git)

        change_set = service.resolve(PushTrigger("1" * 40, "2" * 40))

        assert change_set.resolved is False
        assert "bad object" in change_set.degraded.warning


class TestResolveManualDispatch:
    """Tests for workflow_dispatch comparisons"""

    def test_files_override_returned_verbatim(self, mock_git):
        """Should use the override list and never call git"""
        service = ChangeSetService(mock_git)

        change_set = service.resolve(ManualDispatchTrigger(files_override=("b.txt", "a.txt")))

        assert change_set.files == ("b.txt", "a.txt")
        assert change_set.resolved is True
        mock_git.diff_name_only.assert_not_called()
        mock_git.fetch.assert_not_called()

    def test_default_base_is_previous_commit(self, mock_git):
        mock_git.diff_name_only.return_value = "prompts/a.txt"

        change_set = ChangeSetService(mock_git).resolve(ManualDispatchTrigger())

        assert change_set.files == ("prompts/a.txt",)
        mock_git.diff_name_only.assert_called_once_with("HEAD~1", "HEAD")

    def test_base_override(self, mock_git):
        ChangeSetService(mock_git).resolve(ManualDispatchTrigger(base_ref_override="origin/main"))

        mock_git.diff_name_only.assert_called_once_with("origin/main", "HEAD")

    def test_invalid_base_override_is_fatal(self, mock_git):
        with pytest.raises(GitError) as exc_info:
            ChangeSetService(mock_git).resolve(ManualDispatchTrigger(base_ref_override="--output=x"))

        assert exc_info.value.code == ErrorCodes.INVALID_GIT_REF
        mock_git.diff_name_only.assert_not_called()

    def test_diff_failure_degrades(self, mock_git):
        mock_git.diff_name_only.side_effect = GitError("unknown revision HEAD~1")

        change_set = ChangeSetService(mock_git).resolve(ManualDispatchTrigger())

        assert change_set.resolved is False
        assert change_set.degraded is not None


class TestResolveUnsupported:
    """Tests for unsupported events"""

    def test_unsupported_event_is_unresolved_with_warning(self, mock_git):
        change_set = ChangeSetService(mock_git).resolve(UnsupportedTrigger("schedule"))

        assert change_set.resolved is False
        assert "schedule" in change_set.degraded.warning
        mock_git.diff_name_only.assert_not_called()
