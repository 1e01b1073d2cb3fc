"""promptfoo-action - evaluate changed LLM prompts from GitHub Actions."""

__version__ = "1.0.0"
