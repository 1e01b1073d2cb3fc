"""Git command operations"""

import logging
import subprocess
from typing import Dict, List, Optional

from promptfoo_action.domain.exceptions import ErrorCodes, GitError

logger = logging.getLogger(__name__)


def run_command(
    cmd: List[str],
    check: bool = True,
    capture_output: bool = True,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Run a command and return the result

    Args:
        cmd: Command and arguments as list
        check: Whether to raise exception on non-zero exit
        capture_output: Whether to capture stdout/stderr
        cwd: Directory to run the command in
        env: Environment for the child process (inherits when None)

    Returns:
        CompletedProcess instance

    Raises:
        subprocess.CalledProcessError: If command fails and check=True
    """
    return subprocess.run(
        cmd,
        check=check,
        capture_output=capture_output,
        text=True,
        cwd=cwd,
        env=env,
    )


def run_git_command(args: List[str], cwd: Optional[str] = None) -> str:
    """Run a git command and return stdout

    Args:
        args: Git command arguments (without 'git' prefix)
        cwd: Repository directory

    Returns:
        Command stdout as string

    Raises:
        GitError: If git command fails
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = run_command(["git"] + args, cwd=cwd)
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: {' '.join(args)}\n{e.stderr}")


def validate_git_ref(ref: Optional[str]) -> str:
    """Reject refs that git could read as a command-line option

    Whitespace and other unusual characters are left for git itself to
    reject, since real branch names can be unusual.

    Args:
        ref: Branch name, SHA or revision expression

    Returns:
        The ref unchanged

    Raises:
        GitError: If the ref is empty or starts with "-"

    Examples:
        >>> validate_git_ref("feature/login")
        'feature/login'
        >>> validate_git_ref("--upload-pack=evil")
        Traceback (most recent call last):
        ...
        promptfoo_action.domain.exceptions.GitError: Invalid git ref: --upload-pack=evil
    """
    if not ref:
        raise GitError(
            "Invalid git ref: ref is empty",
            code=ErrorCodes.INVALID_GIT_REF,
            help_text="The event payload did not include a branch name to compare.",
        )
    if ref.startswith("-"):
        raise GitError(
            f"Invalid git ref: {ref}",
            code=ErrorCodes.INVALID_GIT_REF,
            help_text="Git refs must not start with '-'.",
        )
    return ref


class GitClient:
    """Narrow git interface used by change detection.

    Callers validate refs with validate_git_ref before passing them here.
    """

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd

    def fetch(self, remote: str, ref: str) -> None:
        run_git_command(["fetch", "--", remote, ref], cwd=self.cwd)

    def rev_parse(self, ref: str) -> str:
        return run_git_command(["rev-parse", ref], cwd=self.cwd)

    def diff_name_only(self, ref_a: str, ref_b: str) -> str:
        """Return the files changed between two refs

        Paths are relative to cwd, like the config path and prompt globs.
        Files outside cwd are left out.
        """
        return run_git_command(["diff", "--name-only", "--relative", ref_a, ref_b], cwd=self.cwd)
