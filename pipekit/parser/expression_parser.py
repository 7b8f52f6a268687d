"""
Expression Parser for :eval and :if directives.

Turns the token stream of an expression into an AST that the sandboxed
evaluator walks. Binary operators are parsed by precedence climbing over
BINARY_LEVELS, loosest first:

    or  <  and  <  comparison  <  + -  <  * / %  <  unary (- not)
"""

from pipekit.lexer import Token, TokenType
from pipekit.syntax_tree.nodes import (
    ASTNode,
    BinaryOpNode,
    FunctionCallNode,
    IdentifierNode,
    LiteralNode,
    UnaryOpNode,
)


class ParserError(ValueError):
    """Exception raised for malformed expressions."""


# Token type -> operator name stored in BinaryOpNode, one dict per level
BINARY_LEVELS: list[dict[TokenType, str]] = [
    {TokenType.OR: "or"},
    {TokenType.AND: "and"},
    {
        TokenType.EQ: "==",
        TokenType.NEQ: "!=",
        TokenType.GT: ">",
        TokenType.LT: "<",
        TokenType.GTE: ">=",
        TokenType.LTE: "<=",
    },
    {TokenType.PLUS: "+", TokenType.MINUS: "-"},
    {TokenType.STAR: "*", TokenType.SLASH: "/", TokenType.PERCENT: "%"},
]

# Comparisons do not chain: "1 < 2 < 3" is a syntax error
NON_ASSOCIATIVE = {2}

UNARY_OPERATORS = {TokenType.MINUS: "-", TokenType.NOT: "not"}


class ExpressionParser:
    """
    Parser for arithmetic, comparison and logical expressions.

    Usage:
        tokens = ExpressionLexer("max($a, 3) * 2 > 10").tokenize()
        tree = ExpressionParser(tokens).parse()
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(TokenType.EOF, "", len(self.tokens))

    def _take(self) -> Token:
        token = self.current
        self.pos += 1
        return token

    def _expect(self, token_type: TokenType, context: str) -> Token:
        if self.current.type != token_type:
            raise ParserError(
                f"Expected {token_type.name} {context}, got {self.current.type.name}"
            )
        return self._take()

    def parse(self) -> ASTNode:
        """Parse the complete expression; trailing tokens are an error."""
        tree = self._parse_level(0)
        if self.current.type != TokenType.EOF:
            raise ParserError(f"Unexpected token: {self.current}")
        return tree

    def _parse_level(self, level: int) -> ASTNode:
        if level == len(BINARY_LEVELS):
            return self._parse_unary()

        operators = BINARY_LEVELS[level]
        left = self._parse_level(level + 1)

        while self.current.type in operators:
            token = self._take()
            right = self._parse_level(level + 1)
            left = BinaryOpNode(
                left=left, operator=operators[token.type], right=right, position=token.position
            )
            if level in NON_ASSOCIATIVE:
                break

        return left

    def _parse_unary(self) -> ASTNode:
        operator = UNARY_OPERATORS.get(self.current.type)
        if operator is None:
            return self._parse_primary()

        position = self._take().position
        return UnaryOpNode(operator=operator, operand=self._parse_unary(), position=position)

    def _parse_primary(self) -> ASTNode:
        token = self._take()
        kind = token.type

        if kind == TokenType.LPAREN:
            inner = self._parse_level(0)
            self._expect(TokenType.RPAREN, "to close parenthesis")
            return inner

        if kind == TokenType.STRING:
            return LiteralNode(value=token.value, literal_type="string", position=token.position)

        if kind == TokenType.NUMBER:
            number: int | float = float(token.value) if "." in token.value else int(token.value)
            return LiteralNode(value=number, literal_type="number", position=token.position)

        if kind in (TokenType.TRUE, TokenType.FALSE):
            return LiteralNode(
                value=kind == TokenType.TRUE, literal_type="boolean", position=token.position
            )

        if kind == TokenType.NULL:
            return LiteralNode(value=None, literal_type="null", position=token.position)

        if kind == TokenType.IDENTIFIER:
            if self.current.type == TokenType.LPAREN:
                self._take()
                return FunctionCallNode(
                    name=token.value, arguments=self._parse_arguments(token.value),
                    position=token.position,
                )
            return IdentifierNode(name=token.value, position=token.position)

        raise ParserError(f"Unexpected token: {token}")

    def _parse_arguments(self, name: str) -> list[ASTNode]:
        """Parse call arguments after the opening parenthesis."""
        arguments: list[ASTNode] = []

        if self.current.type == TokenType.RPAREN:
            self._take()
            return arguments

        while True:
            if self.current.type == TokenType.EOF:
                raise ParserError(f"Unclosed call to {name}()")
            arguments.append(self._parse_level(0))

            if self.current.type == TokenType.COMMA:
                self._take()
                continue

            self._expect(TokenType.RPAREN, f"after arguments of {name}()")
            return arguments
