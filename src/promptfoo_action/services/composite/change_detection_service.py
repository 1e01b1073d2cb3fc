"""Composite service that decides whether an evaluation should run.

Combines change-set resolution, config dependency extraction and prompt glob
expansion, then hands the results to the pure decide() function.
"""

import os
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

from promptfoo_action.domain.change_set import ChangeSet
from promptfoo_action.domain.decision import DecisionResult, decide
from promptfoo_action.domain.dependencies import ConfigDependency
from promptfoo_action.domain.trigger_context import TriggerContext
from promptfoo_action.infrastructure.filesystem.glob_expander import GlobExpander
from promptfoo_action.services.core.change_set_service import ChangeSetService
from promptfoo_action.services.core.dependency_service import DependencyService


@dataclass(frozen=True)
class ChangeDetection:
    """Everything computed while deciding whether to run

    Attributes:
        change_set: Resolved (or degraded) change set
        dependencies: Dependencies extracted from the config
        prompt_candidates: Files matched by the prompt globs
        decision: Final run/skip decision
    """

    change_set: ChangeSet
    dependencies: FrozenSet[ConfigDependency]
    prompt_candidates: Tuple[str, ...]
    decision: DecisionResult


class ChangeDetectionService:
    """Composite service for run/skip decisions"""

    def __init__(
        self,
        change_set_service: ChangeSetService,
        dependency_service: DependencyService,
        glob_expander: GlobExpander,
        cwd: Optional[str] = None,
    ):
        self.change_set_service = change_set_service
        self.dependency_service = dependency_service
        self.glob_expander = glob_expander
        self.cwd = cwd

    def detect(
        self,
        context: TriggerContext,
        config_path: str,
        prompt_globs: Sequence[str],
        force_run: bool = False,
    ) -> ChangeDetection:
        """Resolve changes and decide whether the evaluation should run

        Args:
            context: Parsed trigger context
            config_path: promptfoo config path
            prompt_globs: User-configured prompt globs
            force_run: Run regardless of changes

        Returns:
            ChangeDetection

        Raises:
            PromptfooActionError: For fatal change-set failures (invalid refs,
                pull request git failures)
        """
        change_set = self.change_set_service.resolve(context)
        if change_set.resolved:
            print(f"Changed files: {list(change_set.files)}")
        else:
            print("Changed files: unavailable, all matching prompt files will be processed")

        dependencies = frozenset(self.dependency_service.extract(config_path))
        if dependencies:
            print(f"Config dependencies: {sorted(dep.path for dep in dependencies)}")

        candidates = self.expand_prompt_globs(prompt_globs)
        print(f"Prompt files matching globs: {candidates}")

        decision = decide(
            change_set=change_set,
            dependencies=dependencies,
            prompt_globs=prompt_globs,
            prompt_candidates=candidates,
            config_path=self._relative_config_path(config_path),
            force_run=force_run,
        )

        return ChangeDetection(
            change_set=change_set,
            dependencies=dependencies,
            prompt_candidates=tuple(candidates),
            decision=decision,
        )

    def expand_prompt_globs(self, prompt_globs: Sequence[str]) -> List[str]:
        """Expand every prompt glob, keeping first-match order"""
        matches: List[str] = []
        for pattern in prompt_globs:
            for path in self.glob_expander.expand(pattern):
                if path not in matches:
                    matches.append(path)
        return matches

    def _relative_config_path(self, config_path: str) -> str:
        cwd = self.cwd or os.getcwd()
        return os.path.relpath(os.path.join(cwd, config_path), cwd)
