"""Custom exceptions for promptfoo-action operations"""

from typing import Optional

from promptfoo_action.domain.outcomes import Fatal


class ErrorCodes:
    """Stable error codes surfaced to workflow logs"""

    NO_PULL_REQUEST = "NO_PULL_REQUEST"
    INVALID_GIT_REF = "INVALID_GIT_REF"
    GIT_OPERATION_FAILED = "GIT_OPERATION_FAILED"
    INVALID_THRESHOLD = "INVALID_THRESHOLD"
    THRESHOLD_NOT_MET = "THRESHOLD_NOT_MET"
    PROMPTFOO_EXECUTION_FAILED = "PROMPTFOO_EXECUTION_FAILED"
    INVALID_OUTPUT_FILE = "INVALID_OUTPUT_FILE"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    PROMPT_FILE_NOT_FOUND = "PROMPT_FILE_NOT_FOUND"
    GITHUB_API_FAILED = "GITHUB_API_FAILED"


class PromptfooActionError(Exception):
    """Base exception for all fatal action failures

    Attributes:
        code: One of the ErrorCodes constants
        help_text: Optional remediation hint shown to the user
    """

    default_code = ErrorCodes.INVALID_CONFIGURATION

    def __init__(self, message: str, code: Optional[str] = None, help_text: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.help_text = help_text

    def to_fatal(self) -> Fatal:
        """Convert the raised error into a Fatal outcome value"""
        return Fatal(code=self.code, message=self.message, hint=self.help_text)


class ConfigurationError(PromptfooActionError):
    """Invalid action inputs or configuration files"""
    default_code = ErrorCodes.INVALID_CONFIGURATION


class GitError(PromptfooActionError):
    """Git operation failures"""
    default_code = ErrorCodes.GIT_OPERATION_FAILED


class GitHubAPIError(PromptfooActionError):
    """GitHub CLI or API call failures"""
    default_code = ErrorCodes.GITHUB_API_FAILED


class EvaluationError(PromptfooActionError):
    """promptfoo execution or output failures"""
    default_code = ErrorCodes.PROMPTFOO_EXECUTION_FAILED


def format_error_message(error: BaseException) -> str:
    """Render an exception for the workflow log

    Args:
        error: Any exception

    Returns:
        "Error: <message>" followed by a help paragraph when one is available

    Examples:
        >>> format_error_message(GitError("bad ref", help_text="Check the branch"))
        'Error: bad ref\\n\\nHelp: Check the branch'
    """
    if isinstance(error, PromptfooActionError):
        message = f"Error: {error.message}"
        if error.help_text:
            message += f"\n\nHelp: {error.help_text}"
        return message
    return f"Error: {error}"
