"""Core service for resolving the set of changed files.

Follows Service Layer pattern (Fowler, PoEAA) - encapsulates the comparison
rules for each trigger type. Pull request comparisons are strict: invalid
refs and git failures abort the run. Push and manual comparisons degrade to
an unresolved change set so that every matching prompt is evaluated.
"""

from promptfoo_action.domain.change_set import ChangeSet
from promptfoo_action.domain.constants import DEFAULT_MANUAL_BASE_REF, NULL_SHA
from promptfoo_action.domain.exceptions import GitError
from promptfoo_action.domain.trigger_context import (
    ManualDispatchTrigger,
    PullRequestTrigger,
    PushTrigger,
    TriggerContext,
    UnsupportedTrigger,
)
from promptfoo_action.infrastructure.git.operations import GitClient, validate_git_ref

PR_COMPARISON_HELP = (
    "Check out with actions/checkout and fetch-depth: 0, and make sure both "
    "branches of the pull request exist on origin."
)


class ChangeSetService:
    """Core service for change-set resolution.

    Stateless apart from the injected git client; each call to resolve()
    is independent.
    """

    def __init__(self, git: GitClient):
        """Initialize ChangeSetService

        Args:
            git: Git client used for fetch/rev-parse/diff
        """
        self.git = git

    # Public API methods

    def resolve(self, context: TriggerContext) -> ChangeSet:
        """Produce the change set for a trigger

        Args:
            context: Parsed trigger context

        Returns:
            ChangeSet; unresolved (with a Degraded warning) when the
            comparison was unavailable

        Raises:
            GitError: For invalid refs, and for any git failure while
                comparing a pull request
        """
        if isinstance(context, PullRequestTrigger):
            return self._resolve_pull_request(context)
        if isinstance(context, PushTrigger):
            return self._resolve_push(context)
        if isinstance(context, ManualDispatchTrigger):
            return self._resolve_manual_dispatch(context)
        if isinstance(context, UnsupportedTrigger):
            return ChangeSet.unresolved(
                f"Unsupported event type '{context.event_name}', processing all prompt files"
            )
        raise TypeError(f"Unknown trigger context: {context!r}")

    # Private helper methods

    def _resolve_pull_request(self, context: PullRequestTrigger) -> ChangeSet:
        base_ref = validate_git_ref(context.base_ref)
        head_ref = validate_git_ref(context.head_ref)

        print(f"Comparing PR #{context.pr_number}: origin/{base_ref}...origin/{head_ref}")
        try:
            self.git.fetch("origin", base_ref)
            base_sha = self.git.rev_parse("FETCH_HEAD")
            self.git.fetch("origin", head_ref)
            head_sha = self.git.rev_parse("FETCH_HEAD")
            diff = self.git.diff_name_only(base_sha, head_sha)
        except GitError as e:
            raise GitError(e.message, code=e.code, help_text=PR_COMPARISON_HELP) from e

        change_set = ChangeSet.from_diff(diff)
        print(f"Found {len(change_set)} changed files")
        return change_set

    def _resolve_push(self, context: PushTrigger) -> ChangeSet:
        before, after = context.before_sha, context.after_sha
        if not before or not after or before == NULL_SHA:
            return ChangeSet.unresolved(
                "Push has no previous commit to compare against, processing all prompt files"
            )

        print(f"Comparing push: {before[:8]}...{after[:8]}")
        try:
            change_set = ChangeSet.from_diff(self.git.diff_name_only(before, after))
        except (GitError, OSError) as e:
            return ChangeSet.unresolved(
                f"Could not compare {before[:8]}...{after[:8]}, processing all prompt files: {e}"
            )
        print(f"Found {len(change_set)} changed files")
        return change_set

    def _resolve_manual_dispatch(self, context: ManualDispatchTrigger) -> ChangeSet:
        if context.files_override:
            print(f"Using {len(context.files_override)} files from the files input")
            return ChangeSet.from_override(context.files_override)

        base_ref = validate_git_ref(context.base_ref_override or DEFAULT_MANUAL_BASE_REF)

        print(f"Comparing manual run: {base_ref}...HEAD")
        try:
            change_set = ChangeSet.from_diff(self.git.diff_name_only(base_ref, "HEAD"))
        except (GitError, OSError) as e:
            return ChangeSet.unresolved(
                f"Could not compare {base_ref}...HEAD, processing all prompt files: {e}"
            )
        print(f"Found {len(change_set)} changed files")
        return change_set
