"""Expression AST nodes (the package is not called `ast` so it never shadows the stdlib)."""

from pipekit.syntax_tree.nodes import (
    ASTNode,
    BinaryOpNode,
    FunctionCallNode,
    IdentifierNode,
    LiteralNode,
    UnaryOpNode,
)

__all__ = [
    "ASTNode",
    "BinaryOpNode",
    "FunctionCallNode",
    "IdentifierNode",
    "LiteralNode",
    "UnaryOpNode",
]
