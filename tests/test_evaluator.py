"""
Tests for the sandboxed expression evaluator.

Operations tested: arithmetic, comparison, logical operators,
variables and built-in functions.
"""

import pytest

from pipekit.errors import EvaluationError
from pipekit.evaluator import SafeEvaluator
from pipekit.lexer import ExpressionLexer, TokenType


def evaluate(expression, **variables):
    return SafeEvaluator().evaluate(expression, {f"${k}": v for k, v in variables.items()})


class TestArithmetic:
    """Tests for arithmetic operators."""

    def test_add(self):
        """Add two numbers."""
        assert evaluate("1+1") == 2

    def test_precedence_and_parentheses(self):
        """Multiplication binds tighter; parentheses override."""
        assert evaluate("2 + 3 * 4") == 14
        assert evaluate("(2 + 3) * 4") == 20

    def test_division_keeps_integers_when_exact(self):
        """Exact division gives an integer."""
        assert evaluate("6 / 3") == 2
        assert evaluate("7 / 2") == 3.5

    def test_unary_minus_and_modulo(self):
        """Unary minus and modulo."""
        assert evaluate("-3 + 10 % 4") == -1

    def test_string_concatenation(self):
        """+ with a string concatenates."""
        assert evaluate('"file-" + 3') == "file-3"

    def test_division_by_zero(self):
        """Division by zero is an evaluation error."""
        with pytest.raises(EvaluationError):
            evaluate("1 / 0")


class TestComparison:
    """Tests for comparison operators."""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2 > 1", True),
            ("2 < 1", False),
            ("2 >= 2", True),
            ("1 <= 0", False),
            ('"a" == "a"', True),
            ('"a" === "b"', False),
            ('"a" != "b"', True),
            ('"a" !== "a"', False),
            ('"abc" < "abd"', True),
        ],
    )
    def test_operators(self, expression, expected):
        """Comparison operators."""
        assert evaluate(expression) is expected


class TestLogical:
    """Tests for logical operators in both spellings."""

    def test_word_operators(self):
        """and, or and not."""
        assert evaluate("1 < 2 and not 2 < 1") is True
        assert evaluate("false or 0") == 0

    def test_symbol_operators(self):
        """&&, || and !."""
        assert evaluate("1 < 2 && !(2 < 1)") is True
        assert evaluate("false || true") is True

    def test_short_circuit_skips_unknown_variable(self):
        """The right side is not evaluated when not needed."""
        assert evaluate("false && missing") is False


class TestVariables:
    """Tests for variable references."""

    def test_identifier_lookup(self):
        """Bare names look up variables."""
        assert evaluate("index + 1", index=2) == 3

    def test_sigil_identifier_lookup(self):
        """$names look up variables."""
        assert evaluate("$index * 2", index=4) == 8

    def test_numeric_strings_are_converted(self):
        """Numeric strings take part in arithmetic."""
        assert evaluate("count - 1", count="5") == 4

    def test_unknown_variable(self):
        """An unknown name is an evaluation error."""
        with pytest.raises(EvaluationError, match="Unknown variable"):
            evaluate("$nope > 1")


class TestFunctions:
    """Tests for built-in functions."""

    def test_string_functions(self):
        """String helper functions."""
        assert evaluate('upper("abc")') == "ABC"
        assert evaluate('len("abcd")') == 4
        assert evaluate('startswith(name, "rep")', name="report") is True
        assert evaluate('replace("a-b-c", "-", "_")') == "a_b_c"

    def test_path_functions(self):
        """Path helper functions."""
        assert evaluate('extname("dir/file.tar.gz")') == ".gz"
        assert evaluate('basename("dir/file.txt")') == "file.txt"

    def test_math_functions(self):
        """Math helper functions."""
        assert evaluate("max(1, 7, 3)") == 7
        assert evaluate("round(2.567, 1)") == 2.6

    def test_unknown_function(self):
        """Only whitelisted functions can be called."""
        with pytest.raises(EvaluationError, match="Unknown function"):
            evaluate("system(1)")


class TestMalformed:
    """Tests for expressions that do not parse."""

    @pytest.mark.parametrize("expression", ["1 +", "(1", '"open', "1 = 1", "1 2"])
    def test_parse_errors(self, expression):
        """Malformed expressions are evaluation errors."""
        with pytest.raises(EvaluationError):
            evaluate(expression)

    def test_lexer_keywords(self):
        """Keywords are case-insensitive."""
        tokens = ExpressionLexer("TRUE and null").tokenize()

        assert [t.type for t in tokens] == [
            TokenType.TRUE, TokenType.AND, TokenType.NULL, TokenType.EOF
        ]
