"""GitHub CLI operations"""

import logging
import os
import subprocess
import tempfile
from typing import Dict, List, Optional

from promptfoo_action.domain.exceptions import GitHubAPIError
from promptfoo_action.infrastructure.git.operations import run_command

logger = logging.getLogger(__name__)


def run_gh_command(args: List[str], env: Optional[Dict[str, str]] = None) -> str:
    """Run a GitHub CLI command and return stdout

    Args:
        args: gh command arguments (without 'gh' prefix)
        env: Environment for the gh process (used to pass GH_TOKEN)

    Returns:
        Command stdout as string

    Raises:
        GitHubAPIError: If gh command fails
    """
    try:
        result = run_command(["gh"] + args, env=env)
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitHubAPIError(f"GitHub CLI command failed: {' '.join(args)}\n{e.stderr}")
    except OSError as e:
        raise GitHubAPIError(
            f"GitHub CLI could not be started: {e}",
            help_text="The gh CLI must be installed on the runner to post PR comments.",
        )


def post_pr_comment(repo: str, pr_number: int, body: str, token: str = "") -> None:
    """Post a comment on a pull request

    Args:
        repo: GitHub repository (owner/name)
        pr_number: Pull request number
        body: Markdown comment body
        token: GitHub token; passed to gh as GH_TOKEN when set

    Raises:
        GitHubAPIError: If the comment could not be posted
    """
    env = None
    if token:
        env = dict(os.environ)
        env["GH_TOKEN"] = token

    with tempfile.NamedTemporaryFile(mode="w", suffix=".md", delete=False) as f:
        f.write(body)
        temp_file = f.name

    try:
        args = ["pr", "comment", str(pr_number), "--body-file", temp_file]
        if repo:
            args.extend(["--repo", repo])
        run_gh_command(args, env=env)
        logger.info("Posted comment on PR #%s", pr_number)
    finally:
        os.unlink(temp_file)
