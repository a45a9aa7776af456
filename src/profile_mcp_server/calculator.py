#!/usr/bin/env python3
# src/profile_mcp_server/calculator.py
"""
Safe arithmetic evaluation for the ``calculate`` tool.

Grammar (whitespace ignored between tokens)::

    expression := term (("+" | "-") term)*
    term       := factor (("*" | "/") factor)*
    factor     := ("+" | "-") factor | NUMBER | "(" expression ")"
    NUMBER     := DIGITS ["." [DIGITS]] | "." DIGITS

Input is checked against the allowed character set before any parsing, so
names such as ``__proto__`` never reach the parser.
"""

import math
import re

from .constants import MAX_EXPRESSION_DEPTH, MAX_EXPRESSION_LENGTH
from .errors import InvalidInputError

ALLOWED_CHARACTERS = re.compile(r"^[0-9+\-*/().\s]*$")
_TOKEN_RE = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|(\S))")


def _tokenize(expression: str) -> list[str]:
    tokens: list[str] = []
    position = 0
    length = len(expression)
    while position < length:
        match = _TOKEN_RE.match(expression, position)
        if match is None:
            break
        number, symbol = match.groups()
        if number is not None:
            tokens.append(number)
        elif symbol is not None:
            tokens.append(symbol)
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def peek(self) -> str | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def advance(self) -> str:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse(self) -> float:
        if not self.tokens:
            raise InvalidInputError("Expression is empty")
        value = self.expression()
        if self.peek() is not None:
            raise InvalidInputError(f"Unexpected token '{self.peek()}'")
        return value

    def expression(self) -> float:
        value = self.term()
        while self.peek() in ("+", "-"):
            if self.advance() == "+":
                value += self.term()
            else:
                value -= self.term()
        return value

    def term(self) -> float:
        value = self.factor()
        while self.peek() in ("*", "/"):
            operator = self.advance()
            right = self.factor()
            if operator == "*":
                value *= right
            elif right == 0:
                raise InvalidInputError("Division by zero")
            else:
                value /= right
        return value

    def factor(self) -> float:
        token = self.peek()
        if token is None:
            raise InvalidInputError("Unexpected end of expression")

        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise InvalidInputError("Expression is nested too deeply")
        try:
            if token in ("+", "-"):
                self.advance()
                operand = self.factor()
                return operand if token == "+" else -operand
            if token == "(":
                self.advance()
                value = self.expression()
                if self.peek() != ")":
                    raise InvalidInputError("Missing closing parenthesis")
                self.advance()
                return value
            if token[0].isdigit() or (token[0] == "." and len(token) > 1):
                self.advance()
                return float(token)
            raise InvalidInputError(f"Unexpected token '{token}'")
        finally:
            self.depth -= 1


def evaluate(expression: str) -> float:
    """
    Evaluate an arithmetic expression.

    Raises:
        InvalidInputError: For disallowed characters, malformed syntax,
            division by zero or a non-finite result.
    """
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise InvalidInputError(f"Expression is longer than {MAX_EXPRESSION_LENGTH} characters")
    if not ALLOWED_CHARACTERS.match(expression):
        raise InvalidInputError(
            "Invalid characters in expression. Only numbers, +, -, *, /, (, ), and spaces allowed."
        )

    value = _Parser(_tokenize(expression)).parse()
    if not math.isfinite(value):
        raise InvalidInputError("Result is not a finite number")
    return value


def format_number(value: float) -> str:
    """Render integral results without a fractional part (``14`` not ``14.0``)."""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
