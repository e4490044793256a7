"""Lexical scanner for Lox.

The terminals of the language are described as a Lark grammar and run
through Lark's basic lexer, so the scanner itself only has to turn Lark
tokens into `Token` records and report the text Lark cannot match.

Lexical errors never stop the scan. The offending character is reported
through the `ErrorReporter`, skipped, and lexing resumes right after it,
so one run can surface every bad character in the source.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lark import Lark, Token as LarkToken
from lark.exceptions import UnexpectedCharacters

from .errors import ErrorReporter
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


LOX_GRAMMAR = r"""
    start: _token*

    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG_EQUAL | BANG | EQUAL_EQUAL | EQUAL
          | GREATER_EQUAL | GREATER | LESS_EQUAL | LESS
          | NUMBER | STRING | UNTERMINATED_STRING | IDENTIFIER
          | AND | CLASS | ELSE | FALSE | FOR | FUN | IF | NIL | OR
          | PRINT | RETURN | SUPER | THIS | TRUE | VAR | WHILE

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG_EQUAL: "!="
    BANG: "!"
    EQUAL_EQUAL: "=="
    EQUAL: "="
    GREATER_EQUAL: ">="
    GREATER: ">"
    LESS_EQUAL: "<="
    LESS: "<"

    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    UNTERMINATED_STRING: /"[^"]*\Z/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    AND: "and"
    CLASS: "class"
    ELSE: "else"
    FALSE: "false"
    FOR: "for"
    FUN: "fun"
    IF: "if"
    NIL: "nil"
    OR: "or"
    PRINT: "print"
    RETURN: "return"
    SUPER: "super"
    THIS: "this"
    TRUE: "true"
    VAR: "var"
    WHILE: "while"

    COMMENT: /\/\/[^\n]*/
    WHITESPACE: /[ \t\r\n]+/
    %ignore COMMENT
    %ignore WHITESPACE
"""


LOX_LEXER = Lark(
    LOX_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


class Scanner:
    def __init__(self, source: str, reporter: ErrorReporter):
        self.source = source
        self.reporter = reporter

    def scan_tokens(self) -> List[Token]:
        tokens: List[Token] = []
        offset = 0
        # Lark numbers lines from 1 within the text it is given; after a
        # restart the slice begins on the line of the skipped character.
        line_base = 0
        while True:
            try:
                for lark_token in LOX_LEXER.lex(self.source[offset:]):
                    token = self._make_token(lark_token, line_base)
                    if token is not None:
                        tokens.append(token)
                break
            except UnexpectedCharacters as e:
                line = line_base + e.line
                self.reporter.error_at_line(line, 'Unexpected character.')
                offset += e.pos_in_stream + 1
                line_base = line - 1
        tokens.append(Token(TokenType.EOF, '', None, self.source.count('\n') + 1))
        logger.debug("scanned %d tokens", len(tokens))
        return tokens

    def _make_token(self, lark_token: LarkToken, line_base: int) -> Optional[Token]:
        line = line_base + lark_token.line
        text = str(lark_token)
        if lark_token.type == 'UNTERMINATED_STRING':
            self.reporter.error_at_line(line_base + lark_token.end_line, 'Unterminated string.')
            return None
        token_type = TokenType[lark_token.type]
        literal = None
        if token_type == TokenType.NUMBER:
            literal = float(text)
        elif token_type == TokenType.STRING:
            literal = text[1:-1]
        return Token(token_type, text, literal, line)


def scan(source: str, reporter: ErrorReporter) -> List[Token]:
    """Convenience wrapper returning the token list for `source`."""
    return Scanner(source, reporter).scan_tokens()
