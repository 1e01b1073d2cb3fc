"""Run/skip decision for an evaluation.

`decide` is a pure function: everything it needs (the change set, extracted
dependencies, and the already-expanded prompt globs) is passed in, so it
never touches git or the filesystem.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from promptfoo_action.domain.change_set import ChangeSet
from promptfoo_action.domain.dependencies import ConfigDependency


class DecisionReason(Enum):
    """Why an evaluation runs or is skipped"""
    FILES_CHANGED = "files_changed"
    CONFIG_CHANGED = "config_changed"
    DEPENDENCY_CHANGED = "dependency_changed"
    FORCED_RUN = "forced_run"
    NO_CHANGES_DETECTED = "no_changes_detected"
    NO_PROMPTS_CONFIGURED = "no_prompts_configured"
    COMPARISON_UNAVAILABLE = "comparison_unavailable"


REASON_MESSAGES = {
    DecisionReason.FILES_CHANGED: "Prompt files changed",
    DecisionReason.CONFIG_CHANGED: "Config file changed",
    DecisionReason.DEPENDENCY_CHANGED: "A config dependency changed",
    DecisionReason.FORCED_RUN: "Run forced by input",
    DecisionReason.NO_CHANGES_DETECTED: "No prompt, config or dependency changes detected",
    DecisionReason.NO_PROMPTS_CONFIGURED: "No prompt globs configured, using prompts from config",
    DecisionReason.COMPARISON_UNAVAILABLE: "Changes could not be computed, running full evaluation",
}


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of the run/skip decision

    Attributes:
        should_run: Whether promptfoo should be invoked
        reason: Primary reason for the decision
        prompt_files: Prompt files to evaluate (changed matches, or every
            match in degraded mode)
        config_changed: Whether the config file itself is in the change set
        dependency_changed: Whether any config dependency is in the change set
    """

    should_run: bool
    reason: DecisionReason
    prompt_files: Tuple[str, ...] = field(default_factory=tuple)
    config_changed: bool = False
    dependency_changed: bool = False

    @property
    def message(self) -> str:
        return REASON_MESSAGES[self.reason]


def decide(
    change_set: ChangeSet,
    dependencies: Iterable[ConfigDependency],
    prompt_globs: Sequence[str],
    prompt_candidates: Sequence[str],
    config_path: str,
    force_run: bool = False,
) -> DecisionResult:
    """Decide whether an evaluation should run.

    Args:
        change_set: Files changed for this trigger
        dependencies: Dependencies extracted from the config
        prompt_globs: User-configured prompt globs (only emptiness matters here)
        prompt_candidates: Files matched by `prompt_globs`, in match order
        config_path: Working-directory-relative path of the config file
        force_run: Run regardless of changes

    Returns:
        DecisionResult

    Examples:
        >>> decide(ChangeSet(files=("README.md",)), [], ["prompts/*.txt"],
        ...        ["prompts/test.txt"], "promptfooconfig.yaml").reason
        <DecisionReason.NO_CHANGES_DETECTED: 'no_changes_detected'>
    """
    candidates = _unique(prompt_candidates)

    if change_set.resolved:
        prompt_files = tuple(path for path in candidates if path in change_set)
    else:
        prompt_files = candidates

    config_changed = change_set.resolved and os.path.normpath(config_path) in change_set
    dependency_changed = change_set.resolved and _any_dependency_changed(change_set, dependencies)

    def result(should_run: bool, reason: DecisionReason) -> DecisionResult:
        return DecisionResult(
            should_run=should_run,
            reason=reason,
            prompt_files=prompt_files,
            config_changed=config_changed,
            dependency_changed=dependency_changed,
        )

    if force_run:
        return result(True, DecisionReason.FORCED_RUN)
    if not prompt_globs:
        return result(True, DecisionReason.NO_PROMPTS_CONFIGURED)
    if not change_set.resolved:
        if prompt_files:
            return result(True, DecisionReason.FILES_CHANGED)
        return result(True, DecisionReason.COMPARISON_UNAVAILABLE)
    if prompt_files:
        return result(True, DecisionReason.FILES_CHANGED)
    if config_changed:
        return result(True, DecisionReason.CONFIG_CHANGED)
    if dependency_changed:
        return result(True, DecisionReason.DEPENDENCY_CHANGED)
    return result(False, DecisionReason.NO_CHANGES_DETECTED)


def _any_dependency_changed(change_set: ChangeSet, dependencies: Iterable[ConfigDependency]) -> bool:
    deps: List[ConfigDependency] = list(dependencies)
    return any(dep.matches(path) for path in change_set.files for dep in deps)


def _unique(paths: Sequence[str]) -> Tuple[str, ...]:
    seen = set()
    ordered = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            ordered.append(path)
    return tuple(ordered)
