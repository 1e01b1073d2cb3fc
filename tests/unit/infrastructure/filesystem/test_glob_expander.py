"""Tests for glob expansion"""

import pytest

from promptfoo_action.infrastructure.filesystem.glob_expander import (
    FilesystemGlobExpander,
    expand_braces,
)


class TestExpandBraces:
    """Test suite for expand_braces"""

    def test_single_group(self):
        assert expand_braces("prompts/*.{json,txt}") == ["prompts/*.json", "prompts/*.txt"]

    def test_multiple_groups(self):
        assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]

    def test_no_group(self):
        assert expand_braces("prompts/*.txt") == ["prompts/*.txt"]

    def test_braces_without_comma_are_literal(self):
        assert expand_braces("prompts/{name}.txt") == ["prompts/{name}.txt"]


class TestFilesystemGlobExpander:
    """Test suite for FilesystemGlobExpander"""

    @pytest.fixture
    def expander(self):
        return FilesystemGlobExpander()

    def test_expand_relative_pattern(self, prompt_repo, expander):
        """Should return sorted, relative file matches for each alternative"""
        result = expander.expand("prompts/*.{txt,json}")

        assert result == ["prompts/main.txt", "prompts/other.json"]

    def test_expand_recursive(self, prompt_repo, expander):
        (prompt_repo / "prompts" / "nested").mkdir()
        (prompt_repo / "prompts" / "nested" / "deep.txt").write_text("x")

        result = expander.expand("prompts/**/*.txt")

        assert result == ["prompts/main.txt", "prompts/nested/deep.txt"]

    def test_expand_skips_directories(self, prompt_repo, expander):
        assert expander.expand("*") == []

    def test_expand_deduplicates_overlapping_alternatives(self, prompt_repo, expander):
        assert expander.expand("prompts/{main,*}.txt") == ["prompts/main.txt"]

    def test_expand_absolute_pattern(self, prompt_repo, expander):
        result = expander.expand(str(prompt_repo / "data" / "*.txt"))

        assert result == [str(prompt_repo / "data" / "input.txt")]

    @pytest.mark.parametrize("pattern,expected", [
        ("prompts/*.txt", True),
        ("prompts/a?.txt", True),
        ("prompts/[ab].txt", True),
        ("prompts/*.{a,b}", True),
        ("prompts/{a,b}.txt", True),
        ("prompts/main.txt", False),
        ("prompts/{name}.txt", False),
    ])
    def test_has_magic(self, expander, pattern, expected):
        assert expander.has_magic(pattern) is expected
