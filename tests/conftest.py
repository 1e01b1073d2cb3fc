"""Common pytest fixtures for promptfoo-action tests

This module provides shared fixtures used across the test suite.
Fixtures are organized by category: file system, git, GitHub, and inputs.
"""

from unittest.mock import MagicMock, Mock

import pytest

from promptfoo_action.domain.action_inputs import ActionInputs
from promptfoo_action.domain.eval_environment import EvalEnvironment
from promptfoo_action.infrastructure.git.operations import GitClient
from promptfoo_action.infrastructure.github.actions import GitHubActionsHelper
from tests.builders import FakeGlobExpander


# ==============================================================================
# File System Fixtures
# ==============================================================================


@pytest.fixture
def fake_glob_expander():
    """Fixture providing an empty FakeGlobExpander"""
    return FakeGlobExpander()


@pytest.fixture
def prompt_repo(tmp_path, monkeypatch):
    """Fixture providing a small repository layout and chdir into it

    Creates:
        - prompts/main.txt, prompts/other.json
        - data/input.txt
        - providers/custom.py

    Returns:
        Path to the repository root
    """
    for relative, content in {
        "prompts/main.txt": "Summarize: {{input}}",
        "prompts/other.json": "[]",
        "data/input.txt": "hello",
        "providers/custom.py": "def call_api(prompt, options, context): pass\n",
    }.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ==============================================================================
# Git Fixtures
# ==============================================================================


@pytest.fixture
def mock_git():
    """Fixture providing a mocked GitClient with an empty diff"""
    mock = Mock(spec=GitClient)
    mock.rev_parse.side_effect = lambda ref: f"sha-of-{ref}"
    mock.diff_name_only.return_value = ""
    return mock


# ==============================================================================
# GitHub Fixtures
# ==============================================================================


@pytest.fixture
def mock_github_actions_helper():
    """Fixture providing mocked GitHubActionsHelper

    Returns:
        MagicMock with GitHub Actions helper methods
    """
    mock = MagicMock(spec=GitHubActionsHelper)
    mock.write_output = MagicMock()
    mock.write_step_summary = MagicMock()
    mock.set_error = MagicMock()
    mock.set_notice = MagicMock()
    mock.set_warning = MagicMock()
    mock.add_mask = MagicMock()
    return mock


@pytest.fixture
def github_env_vars(tmp_path, monkeypatch):
    """Fixture pointing GITHUB_OUTPUT and GITHUB_STEP_SUMMARY at temp files

    Returns:
        Dict with the output and summary file paths
    """
    output_file = tmp_path / "github_output.txt"
    summary_file = tmp_path / "github_step_summary.md"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary_file))
    return {"output": output_file, "summary": summary_file}


# ==============================================================================
# Input Fixtures
# ==============================================================================


@pytest.fixture
def action_inputs():
    """Fixture providing ActionInputs watching prompts/*"""
    return ActionInputs(
        github_token="ghs_token",
        config_path="promptfooconfig.yaml",
        prompt_globs=["prompts/*.{txt,json}"],
        repo="owner/repo",
    )


@pytest.fixture
def eval_environment(tmp_path):
    """Fixture providing an EvalEnvironment with one API key and no cache"""
    return EvalEnvironment(
        base_env={"PATH": "/usr/bin", "HOME": str(tmp_path)},
        api_keys={"OPENAI_API_KEY": "sk-test"},
    )

