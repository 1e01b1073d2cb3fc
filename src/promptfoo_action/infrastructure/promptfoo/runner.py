"""promptfoo CLI invocation"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from promptfoo_action.domain.constants import DEFAULT_PROMPTFOO_VERSION
from promptfoo_action.domain.eval_environment import EvalEnvironment
from promptfoo_action.domain.exceptions import EvaluationError
from promptfoo_action.infrastructure.git.operations import run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvalRequest:
    """Arguments for one `promptfoo eval` run

    Attributes:
        config_path: promptfoo config file
        output_file: Where promptfoo writes its JSON results
        prompt_files: Prompt files to pass with --prompts (empty = use config prompts)
        promptfoo_version: npm version spec
        share: Pass --share (True) or --no-share (False)
        no_cache: Pass --no-cache
        max_concurrency: Optional --max-concurrency value
        extra_args: Additional arguments appended verbatim
    """

    config_path: str
    output_file: str
    prompt_files: Sequence[str] = field(default_factory=tuple)
    promptfoo_version: str = DEFAULT_PROMPTFOO_VERSION
    share: bool = True
    no_cache: bool = False
    max_concurrency: Optional[int] = None
    extra_args: Sequence[str] = field(default_factory=tuple)


def build_promptfoo_command(request: EvalRequest) -> List[str]:
    """Build the npx command line for a request

    Examples:
        >>> build_promptfoo_command(EvalRequest("c.yaml", "out.json", share=False))
        ['npx', '--yes', 'promptfoo@latest', 'eval', '-c', 'c.yaml', '-o', 'out.json', '--no-share']
    """
    cmd = [
        "npx", "--yes", f"promptfoo@{request.promptfoo_version}",
        "eval",
        "-c", request.config_path,
    ]
    if request.prompt_files:
        cmd.append("--prompts")
        cmd.extend(request.prompt_files)
    cmd.extend(["-o", request.output_file])
    cmd.append("--share" if request.share else "--no-share")
    if request.no_cache:
        cmd.append("--no-cache")
    if request.max_concurrency is not None:
        cmd.extend(["--max-concurrency", str(request.max_concurrency)])
    cmd.extend(request.extra_args)
    return cmd


class PromptfooRunner:
    """Runs promptfoo as a child process"""

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd

    def run(self, request: EvalRequest, environment: EvalEnvironment) -> int:
        """Run an evaluation and return promptfoo's exit code.

        promptfoo exits non-zero when assertions fail, so the exit code is
        reported rather than raised. The caller decides success from the
        output file.

        Raises:
            EvaluationError: If npx cannot be started
        """
        if environment.cache:
            os.makedirs(environment.cache.path, exist_ok=True)

        cmd = build_promptfoo_command(request)
        logger.info("Running promptfoo with args: %s", json.dumps(cmd[3:]))
        try:
            result = run_command(
                cmd,
                check=False,
                capture_output=False,
                cwd=self.cwd,
                env=environment.to_env(),
            )
        except OSError as e:
            raise EvaluationError(
                f"Could not start promptfoo: {e}",
                help_text="Node.js and npx must be available on the runner (use actions/setup-node).",
            )

        logger.info("Finished running promptfoo with exit code: %s", result.returncode)
        return result.returncode
