"""
AST node definitions for :eval and :if expressions.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(kw_only=True)
class ASTNode:
    """Base class for all AST nodes."""

    position: int = 0  # offset of the node's first token


@dataclass
class LiteralNode(ASTNode):
    """A string, number, boolean or null literal."""

    value: Any
    literal_type: str = "string"

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"


@dataclass
class IdentifierNode(ASTNode):
    """A variable reference, with or without its leading $."""

    name: str

    def __repr__(self) -> str:
        return f"Identifier({self.name})"


@dataclass
class BinaryOpNode(ASTNode):
    left: ASTNode
    operator: str
    right: ASTNode

    def __repr__(self) -> str:
        return f"BinaryOp({self.left} {self.operator} {self.right})"


@dataclass
class UnaryOpNode(ASTNode):
    operator: str
    operand: ASTNode

    def __repr__(self) -> str:
        return f"UnaryOp({self.operator} {self.operand})"


@dataclass
class FunctionCallNode(ASTNode):
    """A call to one of the evaluator's whitelisted functions."""

    name: str
    arguments: list[ASTNode] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Call({self.name}({', '.join(map(repr, self.arguments))}))"
