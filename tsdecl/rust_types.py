"""A parser for the type syntax of annotated declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


class RustTypeError(ValueError):
    """Type text that cannot be parsed."""


@dataclass(frozen=True)
class PathSegment:
    """One segment of a path, with its type arguments.

    ``parenthesized`` marks ``Fn(A, B) -> C`` style arguments, whose return
    type is ``output``. Lifetime and const arguments are dropped.
    """

    ident: str
    args: tuple = ()
    output: object = None
    parenthesized: bool = False


@dataclass(frozen=True)
class PathType:
    segments: tuple

    @property
    def last(self) -> PathSegment:
        return self.segments[-1]


@dataclass(frozen=True)
class TupleType:
    elems: tuple = ()


@dataclass(frozen=True)
class ArrayType:
    """``[elem; len]``; ``length`` is set only for an integer literal."""

    elem: object
    length: int | None
    length_text: str


@dataclass(frozen=True)
class SliceType:
    elem: object


@dataclass(frozen=True)
class ReferenceType:
    elem: object
    mutable: bool = False


@dataclass(frozen=True)
class ParenType:
    elem: object


@dataclass(frozen=True)
class BareFnType:
    inputs: tuple = ()
    output: object = None


@dataclass(frozen=True)
class TraitObjectType:
    bounds: tuple = ()


@dataclass(frozen=True)
class ImplTraitType:
    bounds: tuple = ()


@dataclass(frozen=True)
class OtherType:
    """Pointers, macros, ``!``, ``_`` and other types with no TypeScript form."""

    text: str


RustType = Union[
    PathType, TupleType, ArrayType, SliceType, ReferenceType, ParenType,
    BareFnType, TraitObjectType, ImplTraitType, OtherType,
]

_LEXEME = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<lifetime>'[A-Za-z_]\w*)
    |(?P<string>"(?:[^"\\]|\\.)*")
    |(?P<word>[A-Za-z_]\w*|\d\w*)
    |(?P<punct>::|->|[<>()\[\]{},;:=+?!*&\-.#/|^%@~$])
    """,
    re.VERBOSE,
)
_INT_LITERAL = re.compile(
    r"(\d[\d_]*)(?:u8|u16|u32|u64|u128|usize|i8|i16|i32|i64|i128|isize)?"
)
_CLOSERS = {"(": ")", "[": "]", "{": "}"}


def _tokenize(text: str) -> list[str]:
    lexemes = []
    pos = 0
    while pos < len(text):
        match = _LEXEME.match(text, pos)
        if match is None:
            raise RustTypeError(f"unexpected character {text[pos]!r} at offset {pos}")
        if match.lastgroup != "ws":
            lexemes.append(match.group())
        pos = match.end()
    return lexemes


def _is_word(tok: str) -> bool:
    return tok[0].isalnum() or tok[0] in "_'\""


def _render(lexemes: list[str]) -> str:
    out = ""
    previous = None
    for tok in lexemes:
        if previous is not None and _is_word(previous) and _is_word(tok):
            out += " "
        out += tok
        previous = tok
    return out


def _parse_len(lexemes: list[str]) -> int | None:
    if len(lexemes) == 1:
        match = _INT_LITERAL.fullmatch(lexemes[0])
        if match:
            return int(match.group(1).replace("_", ""))
    return None


class _Parser:
    def __init__(self, lexemes: list[str]) -> None:
        self.lexemes = lexemes
        self.pos = 0

    def peek(self, offset: int = 0) -> str | None:
        index = self.pos + offset
        return self.lexemes[index] if index < len(self.lexemes) else None

    def next(self) -> str:
        tok = self.peek()
        if tok is None:
            raise RustTypeError("unexpected end of input")
        self.pos += 1
        return tok

    def accept(self, tok: str) -> bool:
        if self.peek() == tok:
            self.pos += 1
            return True
        return False

    def expect(self, tok: str) -> None:
        if not self.accept(tok):
            raise RustTypeError(f"expected {tok!r}, found {self.peek()!r}")

    def until_close(self, close: str) -> list[str]:
        stack = [close]
        collected = []
        while True:
            tok = self.next()
            if tok in _CLOSERS:
                stack.append(_CLOSERS[tok])
            elif tok in _CLOSERS.values():
                if tok != stack.pop():
                    raise RustTypeError(f"mismatched {tok!r}")
                if not stack:
                    return collected
            collected.append(tok)

    def skip_angle(self) -> None:
        self.expect("<")
        depth = 1
        while depth:
            tok = self.next()
            if tok == "<":
                depth += 1
            elif tok == ">":
                depth -= 1

    def type(self) -> RustType:
        start = self.pos
        tok = self.peek()
        if tok is None:
            raise RustTypeError("unexpected end of input")
        if tok == "(":
            return self.paren_or_tuple()
        if tok == "[":
            self.next()
            elem = self.type()
            if self.accept(";"):
                length_lexemes = self.until_close("]")
                return ArrayType(elem, _parse_len(length_lexemes), _render(length_lexemes))
            self.expect("]")
            return SliceType(elem)
        if tok == "&":
            self.next()
            if (self.peek() or "").startswith("'"):
                self.next()
            mutable = self.accept("mut")
            return ReferenceType(self.type(), mutable)
        if tok == "*":
            self.next()
            if self.next() not in ("const", "mut"):
                raise RustTypeError("expected `const` or `mut` after `*`")
            self.type()
            return OtherType(_render(self.lexemes[start:self.pos]))
        if tok in ("!", "_"):
            self.next()
            return OtherType(tok)
        if tok == "dyn":
            self.next()
            return TraitObjectType(self.bounds())
        if tok == "impl":
            self.next()
            return ImplTraitType(self.bounds())
        if tok in ("fn", "unsafe", "extern", "for"):
            return self.bare_fn()
        if tok in ("<", "::") or tok[0].isalpha() or tok[0] == "_":
            path = self.path()
            if self.peek() == "!" and len(path.segments) == 1 and not path.last.args:
                self.next()
                opener = self.next()
                if opener not in _CLOSERS:
                    raise RustTypeError("expected a delimiter after `!`")
                self.until_close(_CLOSERS[opener])
                return OtherType(_render(self.lexemes[start:self.pos]))
            return path
        raise RustTypeError(f"unexpected token {tok!r}")

    def paren_or_tuple(self) -> RustType:
        self.expect("(")
        elems = []
        trailing = False
        while not self.accept(")"):
            elems.append(self.type())
            trailing = self.accept(",")
            if not trailing:
                self.expect(")")
                break
        if len(elems) == 1 and not trailing:
            return ParenType(elems[0])
        return TupleType(tuple(elems))

    def bare_fn(self) -> BareFnType:
        if self.peek() == "for":
            self.next()
            self.skip_angle()
        self.accept("unsafe")
        if self.accept("extern") and (self.peek() or "").startswith('"'):
            self.next()
        self.expect("fn")
        self.expect("(")
        inputs = []
        while not self.accept(")"):
            if self.peek() == ".":
                while self.accept("."):
                    pass
            else:
                name = self.peek()
                if name is not None and _is_word(name) and self.peek(1) == ":":
                    self.pos += 2
                inputs.append(self.type())
            if not self.accept(","):
                self.expect(")")
                break
        output = self.type() if self.accept("->") else None
        return BareFnType(tuple(inputs), output)

    def path(self) -> PathType:
        segments = []
        if self.accept("<"):
            self.type()
            if self.accept("as"):
                segments.extend(self.path().segments)
            self.expect(">")
            self.expect("::")
        else:
            self.accept("::")
        while True:
            segments.append(self.segment())
            if self.peek() == "::" and self.peek(1) != "<":
                self.next()
                continue
            return PathType(tuple(segments))

    def segment(self) -> PathSegment:
        ident = self.next()
        if not (ident[0].isalpha() or ident[0] == "_"):
            raise RustTypeError(f"expected an identifier, found {ident!r}")
        if self.peek() == "::" and self.peek(1) == "<":
            self.next()
        if self.accept("<"):
            return PathSegment(ident, self.generic_args())
        if self.peek() == "(":
            self.next()
            inputs = []
            while not self.accept(")"):
                inputs.append(self.type())
                if not self.accept(","):
                    self.expect(")")
                    break
            output = self.type() if self.accept("->") else None
            return PathSegment(ident, tuple(inputs), output, parenthesized=True)
        return PathSegment(ident)

    def generic_args(self) -> tuple:
        args = []
        while not self.accept(">"):
            tok = self.peek()
            if tok is None:
                raise RustTypeError("unexpected end of input")
            if tok.startswith("'"):
                self.next()
            elif _is_word(tok) and self.peek(1) == "=":
                self.pos += 2
                args.append(self.type())
            elif _is_word(tok) and self.peek(1) == ":":
                self.pos += 2
                self.bounds()
            elif tok == "{":
                self.next()
                self.until_close("}")
            elif tok == "-":
                self.pos += 2
            elif tok[0].isdigit() or tok[0] == '"' or tok in ("true", "false"):
                self.next()
            else:
                args.append(self.type())
            if not self.accept(","):
                self.expect(">")
                break
        return tuple(args)

    def bounds(self) -> tuple:
        bounds = []
        while True:
            if (self.peek() or "").startswith("'"):
                self.next()
            else:
                paren = self.accept("(")
                self.accept("?")
                if self.peek() == "for":
                    self.next()
                    self.skip_angle()
                bounds.append(self.path())
                if paren:
                    self.expect(")")
            if not self.accept("+"):
                return tuple(bounds)


def parse_type(text: str) -> RustType:
    """Parse the text of a type into its syntax tree."""
    parser = _Parser(_tokenize(text))
    ty = parser.type()
    if parser.peek() is not None:
        raise RustTypeError(f"unexpected token {parser.peek()!r}")
    return ty