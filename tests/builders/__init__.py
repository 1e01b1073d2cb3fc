"""Test data builders for promptfoo-action tests

This module provides builder pattern helpers for creating complex test data.
Builders simplify test setup and improve readability by providing fluent interfaces
with sensible defaults.

Example usage:
    event_json = EventBuilder.pull_request().with_base("main").to_json()
"""

from tests.builders.event_builder import EventBuilder
from tests.builders.promptfoo_config_builder import PromptfooConfigBuilder
from tests.builders.eval_output_builder import EvalOutputBuilder
from tests.builders.fake_glob_expander import FakeGlobExpander

__all__ = [
    "EventBuilder",
    "PromptfooConfigBuilder",
    "EvalOutputBuilder",
    "FakeGlobExpander",
]
