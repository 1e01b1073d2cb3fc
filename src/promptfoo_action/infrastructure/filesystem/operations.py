"""Filesystem lookups used by the manual-run command"""

import glob
import os
from typing import Optional

from promptfoo_action.domain.constants import PROMPTS_OUTPUT_DIR


def find_prompt_output_file(prompt_name: str, root: str = ".") -> Optional[str]:
    """Find a generated prompt JSON file by name

    Searches `prompts-output/**/*.json` under root for a file whose basename
    contains prompt_name.

    Args:
        prompt_name: Prompt file name (or part of it)
        root: Directory containing prompts-output/

    Returns:
        Path to the first match, or None if nothing matches
    """
    pattern = os.path.join(root, PROMPTS_OUTPUT_DIR, "**", "*.json")
    for path in sorted(glob.glob(pattern, recursive=True)):
        if prompt_name in os.path.basename(path):
            return os.path.normpath(path)
    return None


def find_config_referencing(prompt_file: str, root: str = ".") -> Optional[str]:
    """Find the first top-level *.yaml file whose text mentions prompt_file

    Args:
        prompt_file: Prompt path to look for
        root: Directory to search (not recursive)

    Returns:
        Path to the config, or None if no config mentions the prompt
    """
    for path in sorted(glob.glob(os.path.join(root, "*.yaml"))):
        with open(path, "r") as f:
            if prompt_file in f.read():
                return os.path.normpath(path)
    return None
