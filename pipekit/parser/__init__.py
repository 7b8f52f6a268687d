"""
Parsing of pipe instructions and directive expressions.
"""

from pipekit.parser.expression_parser import ExpressionParser, ParserError
from pipekit.parser.instruction_extractor import extract_instruction

__all__ = [
    "ExpressionParser",
    "ParserError",
    "extract_instruction",
]
