"""Domain constants for promptfoo-action.

Defines default values and markers shared across layers.
"""

# SHA GitHub sends as "before" when a branch is pushed for the first time
NULL_SHA = "0" * 40

# Scheme prefix marking a file reference inside a promptfoo config
FILE_SCHEME = "file://"

# Default base for manual runs when no base input is given
DEFAULT_MANUAL_BASE_REF = "HEAD~1"

DEFAULT_PROMPTFOO_VERSION = "latest"

DEFAULT_CONFIG_PATH = "promptfooconfig.yaml"

# promptfoo JSON output, written to the working directory
OUTPUT_FILE_NAME = "output.json"

# Directory the manual-run command searches for prompt JSON files
PROMPTS_OUTPUT_DIR = "prompts-output"

# Cache defaults tuned for CI runners
DEFAULT_CACHE_TTL_SECONDS = 86400
DEFAULT_CACHE_MAX_SIZE_BYTES = 52428800
DEFAULT_CACHE_MAX_FILE_COUNT = 5000
