"""TypeScript declarations: type aliases, interfaces and enums."""

from __future__ import annotations

import itertools
import string
from dataclasses import dataclass
from typing import Union

from .comments import format_doc_comments
from .typescript import (
    TsArray,
    TsFn,
    TsIntersection,
    TsOption,
    TsRef,
    TsTuple,
    TsType,
    TsTypeElement,
    TsTypeLit,
    TsUnion,
)

_ALPHABET = string.ascii_uppercase


def type_param_name(index: int) -> str:
    """Name a generated type parameter: ``A`` to ``Z``, then longer names."""
    name = ""
    while True:
        name += _ALPHABET[index % len(_ALPHABET)]
        if index < len(_ALPHABET):
            return name
        index //= len(_ALPHABET)


def _indent(text: str, indent: int) -> str:
    pad = " " * indent
    return "\n".join(pad + line for line in text.split("\n"))


def _with_params(name: str, type_params: tuple) -> str:
    if not type_params:
        return name
    return f"{name}<{', '.join(type_params)}>"


@dataclass
class TsTypeAliasDecl:
    """A declaration such as ``export type Foo = string;``."""

    id: str
    type_ann: TsType
    export: bool = True
    type_params: tuple = ()
    comments: tuple = ()

    def __post_init__(self) -> None:
        self.type_params = tuple(self.type_params)
        self.comments = tuple(self.comments)

    def to_string_with_indent(self, indent: int) -> str:
        return _indent(str(self), indent)

    def __str__(self) -> str:
        export = "export " if self.export else ""
        right = _with_params(self.id, self.type_params)
        return f"{format_doc_comments(self.comments)}{export}type {right} = {self.type_ann};"


@dataclass
class TsInterfaceDecl:
    """A declaration such as ``export interface Bar { baz: number; }``."""

    id: str
    type_params: tuple = ()
    extends: tuple = ()
    body: tuple = ()
    comments: tuple = ()

    def __post_init__(self) -> None:
        self.type_params = tuple(self.type_params)
        self.extends = tuple(self.extends)
        self.body = tuple(self.body)
        self.comments = tuple(self.comments)

    def __str__(self) -> str:
        out = format_doc_comments(self.comments)
        out += f"export interface {_with_params(self.id, self.type_params)}"
        if self.extends:
            out += " extends " + ", ".join(str(ty) for ty in self.extends)
        if not self.body:
            return out + " {}"
        members = "".join(f"\n{elem.to_string_with_indent(4)};" for elem in self.body)
        return f"{out} {{{members}\n}}"


def _replace_type_params(ts_type: TsType, names: list[str]) -> TsType:
    """Replace the arguments of references with fresh parameters, recorded in ``names``."""

    def recurse(ty: TsType) -> TsType:
        return _replace_type_params(ty, names)

    match ts_type:
        case TsRef(name=name, type_params=params):
            fresh = []
            for _ in params:
                param = type_param_name(len(names))
                names.append(param)
                fresh.append(TsRef(param))
            return TsRef(name, tuple(fresh))
        case TsArray(elem=elem):
            return TsArray(recurse(elem))
        case TsTuple(elems=elems):
            return TsTuple(tuple(recurse(t) for t in elems))
        case TsOption(elem=elem, null=null):
            return TsOption(recurse(elem), null)
        case TsFn(params=params, type_ann=type_ann):
            return TsFn(tuple(recurse(t) for t in params), recurse(type_ann))
        case TsTypeLit(members=members):
            return TsTypeLit(
                tuple(
                    TsTypeElement(m.key, recurse(m.type_ann), m.optional)
                    for m in members
                )
            )
        case TsIntersection(types=types):
            return TsIntersection(tuple(recurse(t) for t in types))
        case TsUnion(types=types):
            return TsUnion(tuple(recurse(t) for t in types))
        case _:
            return ts_type


@dataclass
class TsEnumDecl:
    """The declaration produced for an enum: a union, optionally with a namespace."""

    id: str
    type_params: tuple = ()
    members: tuple = ()
    namespace: bool = False
    comments: tuple = ()

    def __post_init__(self) -> None:
        self.type_params = tuple(self.type_params)
        self.members = tuple(self.members)
        self.comments = tuple(self.comments)

    def _reference_aliases(self) -> list[TsTypeAliasDecl]:
        aliases = []
        for member in self.members:
            for name, args in member.type_ann.type_refs():
                if name in self.type_params:
                    continue
                names: list[str] = []
                ts_type = _replace_type_params(TsRef(name, args), names)
                aliases.append(
                    TsTypeAliasDecl(
                        f"__{self.id}{name}", ts_type, export=False, type_params=tuple(names)
                    )
                )
        aliases.sort(key=lambda alias: alias.id)
        return [next(group) for _, group in itertools.groupby(aliases, key=lambda a: a.id)]

    def _namespace_text(self) -> str:
        out = "".join(f"{alias}\n" for alias in self._reference_aliases())
        out += format_doc_comments(self.comments)
        out += f"declare namespace {self.id}"
        if not self.members:
            out += " {}"
        else:
            prefix = f"__{self.id}"
            members = "".join(
                "\n"
                + TsTypeAliasDecl(
                    elem.id,
                    elem.type_ann.prefix_type_refs(prefix, self.type_params),
                    export=True,
                    type_params=elem.type_params,
                    comments=elem.comments,
                ).to_string_with_indent(4)
                for elem in self.members
            )
            out += f" {{{members}\n}}"
        return out + "\n\n"

    def __str__(self) -> str:
        head = self._namespace_text() if self.namespace else ""
        union = TsTypeAliasDecl(
            self.id,
            TsUnion(tuple(member.type_ann.without_comments() for member in self.members)),
            export=True,
            type_params=self.type_params,
            comments=self.comments,
        )
        return f"{head}{union}"


Decl = Union[TsTypeAliasDecl, TsInterfaceDecl, TsEnumDecl]