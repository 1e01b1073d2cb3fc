"""Run a promptfoo evaluation for changed prompts and report the results.

This is the main command behind action.yml. It detects changes, runs
promptfoo when needed, and posts the results as a PR comment (pull request
events) and to the workflow step summary.
"""

import json
import os

from promptfoo_action.domain.action_inputs import ActionInputs
from promptfoo_action.domain.constants import OUTPUT_FILE_NAME
from promptfoo_action.domain.eval_environment import EvalEnvironment
from promptfoo_action.domain.eval_report import EvalReport
from promptfoo_action.domain.exceptions import (
    ConfigurationError,
    ErrorCodes,
    EvaluationError,
    PromptfooActionError,
    format_error_message,
)
from promptfoo_action.domain.trigger_context import PullRequestTrigger, parse_trigger_context
from promptfoo_action.infrastructure.github.actions import GitHubActionsHelper
from promptfoo_action.infrastructure.github.operations import post_pr_comment
from promptfoo_action.infrastructure.promptfoo.runner import EvalRequest, PromptfooRunner
from promptfoo_action.services.composite.change_detection_service import ChangeDetectionService
from promptfoo_action.cli.commands.detect_changes import detect_and_publish


def cmd_evaluate(
    gh: GitHubActionsHelper,
    inputs: ActionInputs,
    event_name: str,
    event_json: str,
    detection_service: ChangeDetectionService,
    runner: PromptfooRunner,
    environment: EvalEnvironment,
    working_directory: str,
) -> int:
    """Detect changes, evaluate, and report.

    All parameters passed explicitly, no environment variable access.

    Args:
        gh: GitHub Actions helper for outputs and errors
        inputs: Parsed action inputs
        event_name: GitHub event name
        event_json: GitHub event JSON payload
        detection_service: Service computing the run/skip decision
        runner: promptfoo runner
        environment: Child-process configuration for promptfoo
        working_directory: Directory the output file is written to

    Outputs:
        should_run, reason, changed_files, prompt_files (see detect-changes)
        output_path: promptfoo JSON output file
        successes / failures / pass_rate: Result counts

    Returns:
        0 on success or skip, 1 on fatal error
    """
    for secret in [inputs.github_token] + environment.secrets:
        gh.add_mask(secret)
    for rejected in environment.rejected_keys:
        gh.set_warning(rejected)

    try:
        detection = detect_and_publish(gh, inputs, event_name, event_json, detection_service)
        decision = detection.decision
        if not decision.should_run:
            return 0

        if not os.path.exists(os.path.join(working_directory, inputs.config_path)):
            raise ConfigurationError(
                f"Config file not found: {inputs.config_path}",
                help_text="Set the config input to the path of your promptfoo config file.",
            )

        prompt_files = [] if inputs.use_config_prompts else list(decision.prompt_files)
        output_file = os.path.join(working_directory, OUTPUT_FILE_NAME)
        request = EvalRequest(
            config_path=inputs.config_path,
            output_file=output_file,
            prompt_files=prompt_files,
            promptfoo_version=inputs.promptfoo_version,
            share=not inputs.no_share,
            no_cache=inputs.no_cache,
            max_concurrency=inputs.max_concurrency,
        )

        print(f"\nRunning promptfoo for: {prompt_files or 'prompts from config'}")
        exit_code = runner.run(request, environment)
        if exit_code != 0 and not os.path.exists(output_file):
            raise EvaluationError(
                f"promptfoo exited with code {exit_code} and produced no output",
                help_text="Check the promptfoo logs above for details.",
            )

        report = EvalReport.from_output_file(output_file)
        print(f"✓ Evaluation complete: {report.successes} passed, {report.failures} failed")

        gh.write_output("output_path", output_file)
        gh.write_output("successes", str(report.successes))
        gh.write_output("failures", str(report.failures))
        gh.write_output("pass_rate", f"{report.pass_rate:.2f}")

        body = _build_report_body(report, prompt_files, decision.message)
        gh.write_step_summary(body)

        context = parse_trigger_context(event_name, event_json)
        if isinstance(context, PullRequestTrigger):
            print(f"Posting results to PR #{context.pr_number}...")
            post_pr_comment(inputs.repo, context.pr_number, body, token=inputs.github_token)
            print(f"✅ PR comment posted to PR #{context.pr_number}")

        if inputs.fail_on_threshold is not None and report.pass_rate < inputs.fail_on_threshold:
            raise EvaluationError(
                f"Pass rate {report.pass_rate:.2f}% is below the threshold of {inputs.fail_on_threshold}%",
                code=ErrorCodes.THRESHOLD_NOT_MET,
                help_text="Fix the failing tests or lower fail-on-threshold.",
            )

        return 0

    except PromptfooActionError as e:
        fatal = e.to_fatal()
        print(f"\n❌ [{fatal.code}] {fatal.message}")
        gh.set_error(format_error_message(e))
        return 1
    except json.JSONDecodeError as e:
        gh.set_error(f"Invalid event JSON: {e}")
        return 1


def _build_report_body(report: EvalReport, prompt_files, reason: str) -> str:
    lines = [f"_{reason}_", ""]
    if prompt_files:
        lines.append("Evaluated prompt files:")
        lines.extend(f"- `{path}`" for path in prompt_files)
        lines.append("")
    return report.to_markdown("promptfoo evaluation results") + "\n" + "\n".join(lines)
