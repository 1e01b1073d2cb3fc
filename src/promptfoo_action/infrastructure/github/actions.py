"""GitHub Actions workflow commands and environment files"""

import os
import uuid
from typing import Optional


class GitHubActionsHelper:
    """Writes step outputs, the step summary and log annotations.

    Outside a runner (GITHUB_OUTPUT / GITHUB_STEP_SUMMARY unset) outputs and
    summaries are printed instead, which keeps local runs readable.
    """

    def __init__(self):
        self.github_output_file = os.environ.get("GITHUB_OUTPUT")
        self.github_step_summary_file = os.environ.get("GITHUB_STEP_SUMMARY")

    def write_output(self, name: str, value: str) -> None:
        """Set a step output for later steps

        Args:
            name: Output name as declared in action.yml
            value: Output value; multi-line values use the delimiter syntax
        """
        if not _append(self.github_output_file, format_output(name, value)):
            print(f"{name}={value}")

    def write_step_summary(self, text: str) -> None:
        """Append markdown to the job summary"""
        if not _append(self.github_step_summary_file, f"{text}\n"):
            print(f"SUMMARY: {text}")

    def set_error(self, message: str) -> None:
        self._annotate("error", message)

    def set_notice(self, message: str) -> None:
        self._annotate("notice", message)

    def set_warning(self, message: str) -> None:
        self._annotate("warning", message)

    def add_mask(self, value: str) -> None:
        """Mask a secret value in all subsequent log output

        Args:
            value: Secret to mask; empty values are ignored
        """
        if value:
            print(f"::add-mask::{value}")

    def _annotate(self, level: str, message: str) -> None:
        print(f"::{level}::{_escape(message)}")


def format_output(name: str, value: str) -> str:
    """Render one GITHUB_OUTPUT entry

    Examples:
        >>> format_output("should_run", "true")
        'should_run=true\\n'
    """
    if "\n" not in value:
        return f"{name}={value}\n"
    # https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/workflow-commands-for-github-actions#multiline-strings
    delimiter = f"EOF_{uuid.uuid4().hex}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def _append(path: Optional[str], text: str) -> bool:
    if not path:
        return False
    with open(path, "a") as f:
        f.write(text)
    return True


def _escape(message: str) -> str:
    # Workflow commands end at the first newline unless it is encoded
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
