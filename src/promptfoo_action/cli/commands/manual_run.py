"""Run a single generated prompt against one provider and test file."""

import os

from promptfoo_action.domain.action_inputs import ActionInputs
from promptfoo_action.domain.constants import OUTPUT_FILE_NAME
from promptfoo_action.domain.eval_environment import EvalEnvironment
from promptfoo_action.domain.eval_report import EvalReport
from promptfoo_action.domain.exceptions import (
    ConfigurationError,
    ErrorCodes,
    PromptfooActionError,
    format_error_message,
)
from promptfoo_action.infrastructure.filesystem.operations import (
    find_config_referencing,
    find_prompt_output_file,
)
from promptfoo_action.infrastructure.github.actions import GitHubActionsHelper
from promptfoo_action.infrastructure.promptfoo.runner import EvalRequest, PromptfooRunner


def cmd_manual_run(
    gh: GitHubActionsHelper,
    inputs: ActionInputs,
    runner: PromptfooRunner,
    environment: EvalEnvironment,
    root: str = ".",
) -> int:
    """Evaluate one prompt from prompts-output/ with a chosen provider.

    Args:
        gh: GitHub Actions helper for outputs and errors
        inputs: Parsed action inputs (prompt_file, input_file, provider)
        runner: promptfoo runner
        environment: Child-process configuration for promptfoo
        root: Directory holding prompts-output/ and the configs

    Outputs:
        output_path: promptfoo JSON output file

    Returns:
        0 on success (or when no config references the prompt), 1 on fatal error
    """
    for secret in environment.secrets:
        gh.add_mask(secret)

    try:
        missing = [
            name for name, value in (
                ("prompt-file", inputs.prompt_file),
                ("input-file", inputs.input_file),
                ("provider", inputs.provider),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required inputs for manual-run: {', '.join(missing)}"
            )

        print("=== promptfoo-action manual run ===")
        print(f"Prompt: {inputs.prompt_file}")
        print(f"Provider: {inputs.provider}")
        print(f"Tests: {inputs.input_file}")

        prompt_path = find_prompt_output_file(inputs.prompt_file, root=root)
        if prompt_path is None:
            raise ConfigurationError(
                f"No generated prompt matching '{inputs.prompt_file}' found",
                code=ErrorCodes.PROMPT_FILE_NOT_FOUND,
                help_text="Generated prompts are looked up under prompts-output/**/*.json.",
            )
        prompt_path = os.path.relpath(prompt_path, root)
        print(f"✓ Found prompt file: {prompt_path}")

        config_path = find_config_referencing(prompt_path, root=root)
        if config_path is None:
            gh.set_notice(f"No promptfoo config references {prompt_path}, nothing to run")
            gh.write_step_summary(f"No promptfoo config references `{prompt_path}`.")
            return 0
        config_path = os.path.relpath(config_path, root)
        print(f"✓ Using config: {config_path}")

        output_file = os.path.join(root, OUTPUT_FILE_NAME)
        request = EvalRequest(
            config_path=config_path,
            output_file=output_file,
            prompt_files=[prompt_path],
            promptfoo_version=inputs.promptfoo_version,
            share=not inputs.no_share,
            no_cache=inputs.no_cache,
            max_concurrency=inputs.max_concurrency,
            extra_args=("--filter-providers", inputs.provider, "--tests", inputs.input_file),
        )
        runner.run(request, environment)

        report = EvalReport.from_output_file(output_file)
        summary = report.to_markdown(f"Manual run: {prompt_path} with {inputs.provider}")
        print(summary)
        gh.write_step_summary(summary)
        gh.write_output("output_path", output_file)
        return 0

    except PromptfooActionError as e:
        fatal = e.to_fatal()
        print(f"\n❌ [{fatal.code}] {fatal.message}")
        gh.set_error(format_error_message(e))
        return 1
