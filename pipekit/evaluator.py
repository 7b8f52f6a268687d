"""
Sandboxed expression evaluation for :eval and :if.

Expressions are tokenized and parsed into an AST which is walked
directly; nothing is ever handed to Python's eval. Supports:
- Arithmetic: +, -, *, /, %  (+ concatenates when either side is a string)
- Comparison: ==, !=, >, <, >=, <=
- Logical: and/&&, or/||, not/!
- Functions: abs, ceil, floor, round, min, max, len, lower, upper, trim,
  startswith, endswith, contains, replace, basename, dirname, extname,
  tonumber, tostring
"""

import math
import os
from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping

from pipekit.environment import format_value
from pipekit.errors import EvaluationError
from pipekit.lexer import ExpressionLexer, LexerError
from pipekit.parser.expression_parser import ExpressionParser, ParserError
from pipekit.syntax_tree.nodes import (
    ASTNode,
    BinaryOpNode,
    FunctionCallNode,
    IdentifierNode,
    LiteralNode,
    UnaryOpNode,
)


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


_to_string = format_value


class Evaluator(ABC):
    """Interface for evaluating a directive expression against variables."""

    @abstractmethod
    def evaluate(self, expression: str, variables: Mapping[str, Any]) -> Any:
        """
        Evaluate an expression.

        Args:
            expression: The expression text (variables already substituted)
            variables: Current bindings, keyed with their $ sigil

        Returns:
            The value of the expression

        Raises:
            EvaluationError: If the expression is malformed or fails
        """


class SafeEvaluator(Evaluator):
    """
    Default evaluator walking the expression AST.

    Usage:
        SafeEvaluator().evaluate("1 + 1", {})                 # 2
        SafeEvaluator().evaluate("i > 2", {"$i": 3})          # True
        SafeEvaluator().evaluate('lower("ABC") == "abc"', {})  # True
    """

    FUNCTIONS: dict[str, Callable[..., Any]] = {
        # Math functions
        "abs": lambda x: abs(_to_number(x)),
        "ceil": lambda x: math.ceil(_to_number(x)),
        "floor": lambda x: math.floor(_to_number(x)),
        "round": lambda x, n=0: round(_to_number(x), int(_to_number(n))),
        "min": lambda *args: min(_to_number(a) for a in args),
        "max": lambda *args: max(_to_number(a) for a in args),
        # String functions
        "len": lambda x: len(_to_string(x)),
        "lower": lambda x: _to_string(x).lower(),
        "upper": lambda x: _to_string(x).upper(),
        "trim": lambda x: _to_string(x).strip(),
        "startswith": lambda x, prefix: _to_string(x).startswith(_to_string(prefix)),
        "endswith": lambda x, suffix: _to_string(x).endswith(_to_string(suffix)),
        "contains": lambda x, part: _to_string(part) in _to_string(x),
        "replace": lambda x, old, new: _to_string(x).replace(_to_string(old), _to_string(new)),
        # Path functions
        "basename": lambda x: os.path.basename(_to_string(x)),
        "dirname": lambda x: os.path.dirname(_to_string(x)),
        "extname": lambda x: os.path.splitext(_to_string(x))[1],
        # Type conversion
        "tonumber": _to_number,
        "tostring": _to_string,
    }

    def evaluate(self, expression: str, variables: Mapping[str, Any]) -> Any:
        try:
            tokens = ExpressionLexer(expression).tokenize()
            tree = ExpressionParser(tokens).parse()
        except (LexerError, ParserError) as e:
            raise EvaluationError(f"Failed to parse expression '{expression}': {e}") from e

        try:
            return self._evaluate_node(tree, variables)
        except EvaluationError:
            raise
        except (ArithmeticError, TypeError, ValueError) as e:
            raise EvaluationError(f"Failed to evaluate expression '{expression}': {e}") from e

    def _evaluate_node(self, node: ASTNode, variables: Mapping[str, Any]) -> Any:
        if isinstance(node, LiteralNode):
            return node.value

        if isinstance(node, IdentifierNode):
            key = node.name if node.name.startswith("$") else f"${node.name}"
            if key not in variables:
                raise EvaluationError(f"Unknown variable: {node.name}")
            return variables[key]

        if isinstance(node, UnaryOpNode):
            operand = self._evaluate_node(node.operand, variables)
            if node.operator == "not":
                return not operand
            return -_to_number(operand)

        if isinstance(node, BinaryOpNode):
            return self._evaluate_binary(node, variables)

        if isinstance(node, FunctionCallNode):
            func = self.FUNCTIONS.get(node.name.lower())
            if func is None:
                raise EvaluationError(f"Unknown function: {node.name}")
            args = [self._evaluate_node(arg, variables) for arg in node.arguments]
            return func(*args)

        raise EvaluationError(f"Unsupported expression node: {node!r}")

    def _evaluate_binary(self, node: BinaryOpNode, variables: Mapping[str, Any]) -> Any:
        # Short-circuit; the deciding operand is the result
        if node.operator == "and":
            left = self._evaluate_node(node.left, variables)
            return self._evaluate_node(node.right, variables) if left else left
        if node.operator == "or":
            left = self._evaluate_node(node.left, variables)
            return left if left else self._evaluate_node(node.right, variables)

        left = self._evaluate_node(node.left, variables)
        right = self._evaluate_node(node.right, variables)
        op = node.operator

        if op == "==":
            return left == right
        if op == "!=":
            return left != right

        if op == "+" and (isinstance(left, str) or isinstance(right, str)):
            return _to_string(left) + _to_string(right)

        if op in ("<", ">", "<=", ">=") and isinstance(left, str) and isinstance(right, str):
            a, b = left, right
        else:
            a, b = _to_number(left), _to_number(right)

        if op == "+":
            return a + b
        if op == "-":
            return a - b
        if op == "*":
            return a * b
        if op == "/":
            result = a / b
            return int(result) if result.is_integer() else result
        if op == "%":
            return a % b
        if op == ">":
            return a > b
        if op == "<":
            return a < b
        if op == ">=":
            return a >= b
        if op == "<=":
            return a <= b

        raise EvaluationError(f"Unsupported operator: {op}")
