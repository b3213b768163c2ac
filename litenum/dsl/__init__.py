"""litenum DSL: tokenizer, parser, and model builder for .lenum files.

Usage:
    from litenum.dsl import Lexer, Parser, build_model

    tokens = Lexer(source).tokenize()
    tree = Parser(tokens).parse()
    model = build_model(tree)
"""

from litenum.dsl.lexer import Lexer, LexerError
from litenum.dsl.parser import ParseError, Parser
from litenum.dsl.validator import build_model

__all__ = [
    "Lexer",
    "LexerError",
    "ParseError",
    "Parser",
    "build_model",
]
