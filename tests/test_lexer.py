# =============================================================================
# test_lexer.py - Tokenizer Unit Tests
# =============================================================================
# Tests for the linker input tokenizer.
#
# Test coverage includes:
#   - Word and digit runs as tokens
#   - Separators (whitespace, punctuation, newlines)
#   - Line and column tracking
#   - Laziness of the token stream
# =============================================================================

import types

import pytest
from twopass.linker.lexer import Token, Tokenizer, tokenize
from twopass.errors import SourceLocation


def values(source: str) -> list[str]:
    """Helper returning just the token texts."""
    return [t.value for t in tokenize(source, "<test>")]


# =============================================================================
# Token Recognition Tests
# =============================================================================

class TestTokenRecognition:
    """Test which character runs become tokens."""

    def test_empty_input(self):
        """Empty input produces no tokens."""
        assert values("") == []

    def test_whitespace_only(self):
        """Whitespace only produces no tokens."""
        assert values("  \t \n\n  ") == []

    def test_numbers_and_names(self):
        """Digit runs and names are both tokens."""
        assert values("1 xy 2") == ["1", "xy", "2"]

    def test_instruction_pairs(self):
        """Classification codes and words are separate tokens."""
        assert values("R 1004 I 5678") == ["R", "1004", "I", "5678"]

    def test_mixed_alphanumeric(self):
        """Letters and digits together form one token."""
        assert values("X21 a1b2") == ["X21", "a1b2"]

    def test_underscore_is_part_of_token(self):
        """Underscores belong to tokens, as in a \\w pattern."""
        assert values("my_sym 1") == ["my_sym", "1"]

    def test_punctuation_separates(self):
        """Any non-word character is a separator."""
        assert values("1,xy;2 (z)+xy") == ["1", "xy", "2", "z", "xy"]

    def test_non_ascii_separates(self):
        """Non-ASCII letters are not word characters."""
        assert values("abcédef") == ["abc", "def"]

    def test_line_breaks_are_irrelevant(self):
        """The same tokens come out whatever the line layout."""
        assert values("1 xy 2\n2 z xy") == values("1\nxy\n2 2\nz xy")


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_first_line_columns(self):
        tokens = list(tokenize("1 xy 2"))
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 3), (1, 6)]

    def test_following_lines(self):
        tokens = list(tokenize("1 xy 2\n  2 z xy"))
        assert [(t.line, t.column) for t in tokens[3:]] == [(2, 3), (2, 5), (2, 7)]

    def test_blank_lines_counted(self):
        tokens = list(tokenize("1\n\n\n   R"))
        assert tokens[1].line == 4
        assert tokens[1].column == 4

    def test_location_property(self):
        """Tokens convert to a SourceLocation for error messages."""
        token = list(tokenize("\n  xy", "input-1.txt"))[0]
        assert token.location == SourceLocation("input-1.txt", 2, 3)
        assert str(token.location) == "input-1.txt:2:3"

    def test_default_filename(self):
        token = list(tokenize("1"))[0]
        assert token.filename == "<input>"


# =============================================================================
# Stream Behaviour Tests
# =============================================================================

class TestStream:
    """Test the token stream itself."""

    def test_tokenize_is_lazy(self):
        """tokenize() returns a generator, not a list."""
        stream = Tokenizer("1 2 3").tokenize()
        assert isinstance(stream, types.GeneratorType)
        assert next(stream).value == "1"

    def test_token_is_immutable(self):
        token = Token("xy", 1, 1)
        with pytest.raises(AttributeError):
            token.value = "z"

    def test_token_repr(self):
        assert repr(Token("xy", 2, 5)) == "Token('xy', 2:5)"
