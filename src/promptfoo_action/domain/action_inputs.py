"""Action inputs parsed once from the step environment.

action.yml maps every input to an environment variable. This module reads
them in one place so the rest of the code receives plain values instead of
reaching into os.environ.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from promptfoo_action.domain.constants import DEFAULT_CONFIG_PATH, DEFAULT_PROMPTFOO_VERSION
from promptfoo_action.domain.exceptions import ConfigurationError, ErrorCodes

# Input env var -> provider env var passed to promptfoo
API_KEY_INPUTS = {
    "OPENAI_API_KEY_INPUT": "OPENAI_API_KEY",
    "AZURE_OPENAI_API_KEY_INPUT": "AZURE_OPENAI_API_KEY",
    "ANTHROPIC_API_KEY_INPUT": "ANTHROPIC_API_KEY",
    "HF_API_TOKEN_INPUT": "HF_API_TOKEN",
    "AWS_ACCESS_KEY_ID_INPUT": "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY_INPUT": "AWS_SECRET_ACCESS_KEY",
    "REPLICATE_API_KEY_INPUT": "REPLICATE_API_KEY",
    "PALM_API_KEY_INPUT": "PALM_API_KEY",
    "VERTEX_API_KEY_INPUT": "VERTEX_API_KEY",
    "PROMPTFOO_API_KEY_INPUT": "PROMPTFOO_API_KEY",
}


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a GitHub Actions boolean input

    Examples:
        >>> parse_bool("True")
        True
        >>> parse_bool("", default=True)
        True
    """
    if value is None or not value.strip():
        return default
    return value.strip().lower() == "true"


def parse_prompt_globs(value: str) -> List[str]:
    """Split the multi-line `prompts` input into glob patterns

    Examples:
        >>> parse_prompt_globs("prompts/*.txt\\n\\n  more/*.json  ")
        ['prompts/*.txt', 'more/*.json']
    """
    return [line.strip() for line in value.split("\n") if line.strip()]


def parse_threshold(value: Optional[str]) -> Optional[float]:
    """Parse the fail-on-threshold input

    Returns:
        Threshold percentage, or None when the input is empty

    Raises:
        ConfigurationError: If the value is not a number between 0 and 100
    """
    if value is None or not value.strip():
        return None
    try:
        threshold = float(value)
    except ValueError:
        threshold = -1.0
    if not 0 <= threshold <= 100:
        raise ConfigurationError(
            f"Invalid fail-on-threshold value: {value}",
            code=ErrorCodes.INVALID_THRESHOLD,
            help_text="Set fail-on-threshold to a number between 0 and 100.",
        )
    return threshold


@dataclass
class ActionInputs:
    """All inputs the action accepts.

    Attributes:
        github_token: Token for posting PR comments
        config_path: promptfoo config file
        prompt_globs: Glob patterns for prompt files to watch
        working_directory: Directory to run in
        cache_path: promptfoo cache directory
        promptfoo_version: npm version spec for promptfoo
        no_share: Pass --no-share instead of --share
        use_config_prompts: Let promptfoo use the config's prompts
        no_cache: Disable promptfoo's cache
        force_run: Run even when nothing changed
        fail_on_threshold: Minimum pass rate (percent)
        max_concurrency: Optional --max-concurrency value
        repo: GitHub repository (owner/name)
        api_keys: Provider env var name -> key
        prompt_file: manual-run prompt file name
        input_file: manual-run test input file
        provider: manual-run provider filter
    """

    github_token: str = ""
    config_path: str = DEFAULT_CONFIG_PATH
    prompt_globs: List[str] = field(default_factory=list)
    working_directory: str = ""
    cache_path: str = ""
    promptfoo_version: str = DEFAULT_PROMPTFOO_VERSION
    no_share: bool = False
    use_config_prompts: bool = False
    no_cache: bool = False
    force_run: bool = False
    fail_on_threshold: Optional[float] = None
    max_concurrency: Optional[int] = None
    repo: str = ""
    api_keys: Dict[str, str] = field(default_factory=dict)
    prompt_file: str = ""
    input_file: str = ""
    provider: str = ""

    @classmethod
    def from_environment(cls, environ: Mapping[str, str]) -> "ActionInputs":
        """Read inputs from the env vars action.yml sets.

        Args:
            environ: Environment mapping (usually os.environ)

        Raises:
            ConfigurationError: If a numeric input is malformed
        """
        max_concurrency = (environ.get("MAX_CONCURRENCY") or "").strip()
        if max_concurrency and not (max_concurrency.isdigit() and int(max_concurrency) > 0):
            raise ConfigurationError(
                f"Invalid max-concurrency value: {max_concurrency}",
                help_text="Set max-concurrency to a positive integer.",
            )

        return cls(
            github_token=environ.get("GITHUB_TOKEN", ""),
            config_path=(environ.get("CONFIG_PATH") or "").strip() or DEFAULT_CONFIG_PATH,
            prompt_globs=parse_prompt_globs(environ.get("PROMPTS", "")),
            working_directory=(environ.get("WORKING_DIRECTORY") or "").strip(),
            cache_path=(environ.get("CACHE_PATH") or "").strip(),
            promptfoo_version=(environ.get("PROMPTFOO_VERSION") or "").strip() or DEFAULT_PROMPTFOO_VERSION,
            no_share=parse_bool(environ.get("NO_SHARE")),
            use_config_prompts=parse_bool(environ.get("USE_CONFIG_PROMPTS")),
            no_cache=parse_bool(environ.get("NO_CACHE")),
            force_run=parse_bool(environ.get("FORCE_RUN")),
            fail_on_threshold=parse_threshold(environ.get("FAIL_ON_THRESHOLD")),
            max_concurrency=int(max_concurrency) if max_concurrency else None,
            repo=environ.get("GITHUB_REPOSITORY", ""),
            api_keys={
                env_name: environ[input_name]
                for input_name, env_name in API_KEY_INPUTS.items()
                if environ.get(input_name)
            },
            prompt_file=(environ.get("PROMPT_FILE") or "").strip(),
            input_file=(environ.get("INPUT_FILE") or "").strip(),
            provider=(environ.get("PROVIDER") or "").strip(),
        )
