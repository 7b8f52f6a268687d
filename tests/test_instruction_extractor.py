"""
Tests for splitting instruction lines into tokens.
"""

import pytest

from pipekit.parser.instruction_extractor import extract_instruction


class TestExtractInstruction:
    """Tests for extract_instruction."""

    def test_simple_split(self):
        """Split on whitespace."""
        assert extract_instruction("copy src dist") == ["copy", "src", "dist"]

    def test_extra_whitespace(self):
        """Runs of spaces and tabs separate once."""
        assert extract_instruction("copy   src\tdist ") == ["copy", "src", "dist"]

    def test_double_quoted_token(self):
        """Double quotes group words."""
        assert extract_instruction('copy "my file.txt" out') == ["copy", "my file.txt", "out"]

    def test_single_quoted_token(self):
        """Single quotes group words."""
        assert extract_instruction("echo 'hello world'") == ["echo", "hello world"]

    def test_quotes_inside_token(self):
        """Quotes inside a word join with it."""
        assert extract_instruction('set name="a b"') == ["set", "name=a b"]

    def test_escaped_quote(self):
        """A backslash escapes the active quote."""
        assert extract_instruction(r'echo "say \"hi\""') == ["echo", 'say "hi"']

    def test_empty_quoted_token_kept(self):
        """An empty quoted token is kept."""
        assert extract_instruction('open f -a ""') == ["open", "f", "-a", ""]

    @pytest.mark.parametrize(
        "line, expected",
        [
            ('echo "unterminated rest', ["echo", "unterminated rest"]),
            ("echo it's", ["echo", "its"]),
            ("", []),
        ],
    )
    def test_never_raises_on_malformed_input(self, line, expected):
        """An open quote swallows the rest of the line."""
        assert extract_instruction(line) == expected
