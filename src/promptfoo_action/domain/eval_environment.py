"""Explicit configuration handed to the promptfoo subprocess.

Provider keys and cache settings are collected into an EvalEnvironment and
rendered to an env mapping only at the subprocess boundary. The action's own
os.environ is never modified.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from promptfoo_action.domain.action_inputs import ActionInputs
from promptfoo_action.domain.constants import (
    DEFAULT_CACHE_MAX_FILE_COUNT,
    DEFAULT_CACHE_MAX_SIZE_BYTES,
    DEFAULT_CACHE_TTL_SECONDS,
)

PLACEHOLDER_MARKERS = (
    "your-api-key",
    "YOUR_API_KEY",
    "<your-key>",
    "${",
    "{{",
)


def validate_api_key(name: str, key: str) -> Optional[str]:
    """Check an API key for common copy/paste mistakes

    Args:
        name: Env var name, used in the error message
        key: Key value

    Returns:
        An error message, or None when the key looks usable

    Examples:
        >>> validate_api_key("OPENAI_API_KEY", "sk-abc def")
        'OPENAI_API_KEY contains whitespace characters'
        >>> validate_api_key("OPENAI_API_KEY", "sk-abcdef") is None
        True
    """
    if any(char in key for char in (" ", "\n", "\t")):
        return f"{name} contains whitespace characters"
    for marker in PLACEHOLDER_MARKERS:
        if marker in key:
            return f"{name} appears to contain a placeholder value"
    return None


@dataclass(frozen=True)
class CacheSettings:
    """Disk cache configuration for promptfoo"""

    path: str
    ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    max_size_bytes: int = DEFAULT_CACHE_MAX_SIZE_BYTES
    max_file_count: int = DEFAULT_CACHE_MAX_FILE_COUNT

    @classmethod
    def resolve(cls, cache_path: str, base_env: Mapping[str, str], cwd: str) -> "CacheSettings":
        """Pick the cache directory: input, then PROMPTFOO_CACHE_PATH, then ~/.promptfoo/cache"""
        if cache_path:
            path = cache_path if os.path.isabs(cache_path) else os.path.join(cwd, cache_path)
        elif base_env.get("PROMPTFOO_CACHE_PATH"):
            path = base_env["PROMPTFOO_CACHE_PATH"]
        else:
            path = os.path.join(base_env.get("HOME") or "/tmp", ".promptfoo", "cache")
        return cls(path=path)

    def to_env(self) -> Dict[str, str]:
        return {
            "PROMPTFOO_CACHE_ENABLED": "true",
            "PROMPTFOO_CACHE_TYPE": "disk",
            "PROMPTFOO_CACHE_PATH": self.path,
            "PROMPTFOO_CACHE_TTL": str(self.ttl_seconds),
            "PROMPTFOO_CACHE_MAX_SIZE": str(self.max_size_bytes),
            "PROMPTFOO_CACHE_MAX_FILE_COUNT": str(self.max_file_count),
        }


@dataclass(frozen=True)
class EvalEnvironment:
    """Everything the promptfoo child process receives through its environment

    Attributes:
        base_env: Environment inherited from the runner
        api_keys: Validated provider keys (env var name -> key)
        cache: Cache settings, or None when caching is disabled
        rejected_keys: Messages for keys that failed validation
    """

    base_env: Mapping[str, str]
    api_keys: Dict[str, str] = field(default_factory=dict)
    cache: Optional[CacheSettings] = None
    rejected_keys: List[str] = field(default_factory=list)

    @classmethod
    def from_inputs(cls, inputs: ActionInputs, base_env: Mapping[str, str], cwd: str) -> "EvalEnvironment":
        api_keys: Dict[str, str] = {}
        rejected: List[str] = []
        for name, key in inputs.api_keys.items():
            error = validate_api_key(name, key)
            if error:
                rejected.append(error)
            else:
                api_keys[name] = key

        cache = None if inputs.no_cache else CacheSettings.resolve(inputs.cache_path, base_env, cwd)

        return cls(
            base_env=dict(base_env),
            api_keys=api_keys,
            cache=cache,
            rejected_keys=rejected,
        )

    @property
    def secrets(self) -> List[str]:
        """Values that must be masked in workflow logs"""
        return list(self.api_keys.values())

    def to_env(self) -> Dict[str, str]:
        """Render the child-process environment"""
        env = dict(self.base_env)
        env.update(self.api_keys)
        if self.cache:
            env.update(self.cache.to_env())
        else:
            env["PROMPTFOO_CACHE_ENABLED"] = "false"
        return env
