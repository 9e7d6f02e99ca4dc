"""Arithmetic for the calculator screen.

Expressions are parsed by a small recursive-descent parser that only knows
numbers, `+ - * /` and parentheses:

    expr   := term (('+' | '-') term)*
    term   := factor (('*' | '/') factor)*
    factor := ('+' | '-') factor | NUMBER | '(' expr ')'

Anything outside that grammar is rejected with `CalculatorError`.
"""

import math
import re
from dataclasses import dataclass

OPERATORS = frozenset("+-*/")
ALLOWED_KEYS = frozenset("0123456789.()") | OPERATORS
ERROR_TEXT = "Erro"

_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")


class CalculatorError(ValueError):
    """Expression could not be evaluated."""


@dataclass(frozen=True)
class Token:
    kind: str  # "num" or the operator/parenthesis character
    text: str
    position: int


def tokenize(expression: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(expression):
        char = expression[pos]
        if char.isspace():
            pos += 1
            continue
        if char in OPERATORS or char in "()":
            tokens.append(Token(char, char, pos))
            pos += 1
            continue
        match = _NUMBER.match(expression, pos)
        if match is None:
            raise CalculatorError(f"Unexpected character {char!r} at position {pos}")
        tokens.append(Token("num", match.group(), pos))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def peek(self) -> Token | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise CalculatorError("Unexpected end of expression")
        self.index += 1
        return token

    def parse(self) -> float:
        if not self.tokens:
            raise CalculatorError("Empty expression")
        value = self.expr()
        trailing = self.peek()
        if trailing is not None:
            raise CalculatorError(f"Unexpected {trailing.text!r} at position {trailing.position}")
        return value

    def expr(self) -> float:
        value = self.term()
        while (token := self.peek()) is not None and token.kind in ("+", "-"):
            self.advance()
            rhs = self.term()
            value = value + rhs if token.kind == "+" else value - rhs
        return value

    def term(self) -> float:
        value = self.factor()
        while (token := self.peek()) is not None and token.kind in ("*", "/"):
            self.advance()
            rhs = self.factor()
            if token.kind == "*":
                value *= rhs
            elif rhs == 0:
                raise CalculatorError("Division by zero")
            else:
                value /= rhs
        return value

    def factor(self) -> float:
        token = self.advance()
        if token.kind == "+":
            return self.factor()
        if token.kind == "-":
            return -self.factor()
        if token.kind == "num":
            return float(token.text)
        if token.kind == "(":
            value = self.expr()
            closing = self.advance()
            if closing.kind != ")":
                raise CalculatorError(f"Expected ')' at position {closing.position}")
            return value
        raise CalculatorError(f"Unexpected {token.text!r} at position {token.position}")


def evaluate(expression: str) -> float:
    """Evaluate an arithmetic expression.

    Raises:
        CalculatorError: On invalid syntax, excessive nesting, division by zero or a
            non-finite result
    """
    try:
        value = _Parser(tokenize(expression)).parse()
    except OverflowError:
        raise CalculatorError("Result out of range") from None
    except RecursionError:
        raise CalculatorError("Expression is nested too deeply") from None
    if not math.isfinite(value):
        raise CalculatorError("Result is not a finite number")
    return value


def format_result(value: float) -> str:
    """Round half-up to two decimals and drop a trailing `.0`."""
    scaled = value * 100
    if not math.isfinite(scaled):
        return repr(value)
    rounded = math.floor(scaled + 0.5) / 100
    if rounded == 0:
        return "0"
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


@dataclass
class CalculatorState:
    """Keypad state of the calculator screen."""

    input: str = ""
    result: str = ""

    def press(self, key: str) -> None:
        if key not in ALLOWED_KEYS:
            raise ValueError(f"Unsupported key: {key!r}")
        if self.result and self.result != ERROR_TEXT and key in OPERATORS:
            # continue with the previous result as left operand
            self.input = self.result + key
            self.result = ""
        elif self.result:
            self.input = key
            self.result = ""
        else:
            self.input += key

    def clear(self) -> None:
        self.input = ""
        self.result = ""

    def backspace(self) -> None:
        self.input = self.input[:-1]

    def calculate(self) -> str:
        try:
            self.result = format_result(evaluate(self.input))
        except CalculatorError:
            self.result = ERROR_TEXT
        return self.result

    @property
    def display_input(self) -> str:
        return self.input or "0"

    @property
    def display_result(self) -> str:
        if self.result:
            return self.result
        return "" if self.input else "0"
