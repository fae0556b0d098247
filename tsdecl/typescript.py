"""The TypeScript type model and its rendering."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace

from .comments import format_doc_comments
from .config import Style, TagType, TypeGenerationConfig


class KeywordKind(enum.Enum):
    """Built-in TypeScript types."""

    NUMBER = "number"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    STRING = "string"
    VOID = "void"
    UNDEFINED = "undefined"
    NULL = "null"
    NEVER = "never"


class NullType(enum.Enum):
    """How a missing value is represented."""

    NULL = "null"
    UNDEFINED = "undefined"

    @classmethod
    def for_config(cls, config: TypeGenerationConfig) -> NullType:
        if config.js and not config.missing_as_null:
            return cls.UNDEFINED
        return cls.NULL

    def to_type(self) -> TsKeyword:
        if self is NullType.NULL:
            return NULL
        return UNDEFINED


def is_js_ident(text: str) -> bool:
    """Whether ``text`` can be written as a property key without quotes."""
    return (
        bool(text)
        and not ("0" <= text[0] <= "9")
        and all(
            (ch.isascii() and ch.isalnum()) or ch in "_$" for ch in text
        )
    )


def _freeze(obj: object, *names: str) -> None:
    for name in names:
        object.__setattr__(obj, name, tuple(getattr(obj, name)))


class TsType:
    """Base of every TypeScript type."""

    def is_ref(self) -> bool:
        return isinstance(self, TsRef)

    def and_(self, other: TsType) -> TsType:
        """Intersect with ``other``, merging type literals where possible."""
        if isinstance(self, TsTypeLit) and isinstance(other, TsTypeLit):
            return self.merge(other)
        if isinstance(self, TsIntersection) and isinstance(other, TsIntersection):
            return TsIntersection(self.types + other.types)
        if isinstance(self, TsIntersection):
            return TsIntersection(self.types + (other,))
        if isinstance(other, TsIntersection):
            return TsIntersection((self,) + other.types)
        return TsIntersection((self, other))

    def children(self) -> Iterator[TsType]:
        return iter(())

    def walk(self) -> Iterator[TsType]:
        """Yield this type and every nested type, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def type_ref_names(self) -> set[str]:
        """Names of referenced types, including override type parameters."""
        names: set[str] = set()
        for ty in self.walk():
            if isinstance(ty, TsRef):
                names.add(ty.name)
            elif isinstance(ty, TsOverride):
                names.update(ty.type_params)
        return names

    def type_refs(self) -> list[tuple[str, tuple[TsType, ...]]]:
        """Every reference as ``(name, type_params)``, in visiting order."""
        return [(ty.name, ty.type_params) for ty in self.walk() if isinstance(ty, TsRef)]

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        """Prefix every referenced name not listed in ``exceptions``."""
        return self

    def with_tag_type(
        self,
        config: TypeGenerationConfig,
        name: str,
        style: Style,
        tag_type: TagType,
    ) -> TsType:
        """Wrap a variant's type according to the enum's tagging."""
        kind = tag_type.kind
        if kind == "external":
            if style is Style.UNIT:
                return TsLit(name)
            return TsTypeLit((TsTypeElement(name, self),))
        if kind == "internal":
            tag_field = TsTypeLit((TsTypeElement(tag_type.tag, TsLit(name)),))
            if self == nullish(config):
                return tag_field
            return tag_field.and_(self)
        if kind == "adjacent":
            tag_field = TsTypeElement(tag_type.tag, TsLit(name))
            if style is Style.UNIT:
                return TsTypeLit((tag_field,))
            return TsTypeLit((tag_field, TsTypeElement(tag_type.content, self)))
        return self

    def without_comments(self) -> TsType:
        """Return a copy with the comments of type literal members removed."""
        return self


@dataclass(frozen=True)
class TsKeyword(TsType):
    kind: KeywordKind

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class TsLit(TsType):
    """A string literal type."""

    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class TsArray(TsType):
    elem: TsType

    def children(self) -> Iterator[TsType]:
        yield self.elem

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        return TsArray(self.elem.prefix_type_refs(prefix, exceptions))

    def __str__(self) -> str:
        if isinstance(self.elem, (TsUnion, TsIntersection, TsOption)):
            return f"({self.elem})[]"
        return f"{self.elem}[]"


@dataclass(frozen=True)
class TsTuple(TsType):
    elems: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "elems")

    def children(self) -> Iterator[TsType]:
        return iter(self.elems)

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        exceptions = tuple(exceptions)
        return TsTuple(tuple(t.prefix_type_refs(prefix, exceptions) for t in self.elems))

    def __str__(self) -> str:
        return "[" + ", ".join(str(elem) for elem in self.elems) + "]"


@dataclass(frozen=True)
class TsOption(TsType):
    """An optional type together with how a missing value is written."""

    elem: TsType
    null: NullType = NullType.NULL

    def children(self) -> Iterator[TsType]:
        yield self.elem

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        return TsOption(self.elem.prefix_type_refs(prefix, exceptions), self.null)

    def __str__(self) -> str:
        return f"{self.elem} | {self.null.to_type()}"


@dataclass(frozen=True)
class TsRef(TsType):
    name: str
    type_params: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "type_params")

    def children(self) -> Iterator[TsType]:
        return iter(self.type_params)

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        exceptions = tuple(exceptions)
        name = self.name if self.name in exceptions else f"{prefix}{self.name}"
        return TsRef(
            name, tuple(t.prefix_type_refs(prefix, exceptions) for t in self.type_params)
        )

    def __str__(self) -> str:
        if not self.type_params:
            return self.name
        params = ", ".join(str(param) for param in self.type_params)
        return f"{self.name}<{params}>"


@dataclass(frozen=True)
class TsFn(TsType):
    params: tuple = ()
    type_ann: TsType = field(default_factory=lambda: VOID)

    def __post_init__(self) -> None:
        _freeze(self, "params")

    def children(self) -> Iterator[TsType]:
        yield from self.params
        yield self.type_ann

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        exceptions = tuple(exceptions)
        return TsFn(
            tuple(t.prefix_type_refs(prefix, exceptions) for t in self.params),
            self.type_ann.prefix_type_refs(prefix, exceptions),
        )

    def __str__(self) -> str:
        params = ", ".join(f"arg{i}: {param}" for i, param in enumerate(self.params))
        return f"({params}) => {self.type_ann}"


@dataclass(frozen=True)
class TsTypeElement:
    """A member of a type literal or interface."""

    key: str
    type_ann: TsType
    optional: bool = False
    comments: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "comments")

    def to_string_with_indent(self, indent: int) -> str:
        pad = " " * indent
        return "\n".join(pad + line for line in str(self).split("\n"))

    def __str__(self) -> str:
        key = self.key if is_js_ident(self.key) else f'"{self.key}"'
        mark = "?" if self.optional else ""
        return f"{format_doc_comments(self.comments)}{key}{mark}: {self.type_ann}"


@dataclass(frozen=True)
class TsTypeLit(TsType):
    """An object type literal such as ``{ foo: number }``."""

    members: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "members")

    def merge(self, other: TsTypeLit) -> TsTypeLit:
        """Combine members; members sharing a key have their types intersected."""
        merged: list[TsTypeElement] = []
        index: dict[str, int] = {}
        for member in self.members + other.members:
            if member.key in index:
                position = index[member.key]
                existing = merged[position]
                merged[position] = replace(
                    existing, type_ann=existing.type_ann.and_(member.type_ann)
                )
            else:
                index[member.key] = len(merged)
                merged.append(member)
        return TsTypeLit(tuple(merged))

    def children(self) -> Iterator[TsType]:
        return (member.type_ann for member in self.members)

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        exceptions = tuple(exceptions)
        return TsTypeLit(
            tuple(
                replace(m, type_ann=m.type_ann.prefix_type_refs(prefix, exceptions))
                for m in self.members
            )
        )

    def without_comments(self) -> TsType:
        return TsTypeLit(
            tuple(
                replace(m, comments=(), type_ann=m.type_ann.without_comments())
                for m in self.members
            )
        )

    def __str__(self) -> str:
        if not self.members:
            return "{}"
        return "{ " + "; ".join(str(member) for member in self.members) + " }"


@dataclass(frozen=True)
class TsIntersection(TsType):
    types: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "types")

    def children(self) -> Iterator[TsType]:
        return iter(self.types)

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        exceptions = tuple(exceptions)
        return TsIntersection(
            tuple(t.prefix_type_refs(prefix, exceptions) for t in self.types)
        )

    def __str__(self) -> str:
        if len(self.types) == 1:
            return str(self.types[0])
        parts = []
        for ty in self.types:
            if isinstance(ty, TsUnion):
                parts.append(f"({ty})")
            elif isinstance(ty, TsTypeLit):
                # Rendered on one line, so multi-line comments are dropped.
                stripped = TsTypeLit(tuple(replace(m, comments=()) for m in ty.members))
                parts.append(str(stripped))
            else:
                parts.append(str(ty))
        return " & ".join(parts)


@dataclass(frozen=True)
class TsUnion(TsType):
    types: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "types")

    def children(self) -> Iterator[TsType]:
        return iter(self.types)

    def prefix_type_refs(self, prefix: str, exceptions: Iterable[str]) -> TsType:
        exceptions = tuple(exceptions)
        return TsUnion(tuple(t.prefix_type_refs(prefix, exceptions) for t in self.types))

    def __str__(self) -> str:
        if not self.types:
            return "void"
        if len(self.types) == 1:
            return str(self.types[0])
        return " | ".join(
            f"({ty})" if isinstance(ty, TsIntersection) else str(ty) for ty in self.types
        )


@dataclass(frozen=True)
class TsOverride(TsType):
    """A type written out explicitly by the user."""

    type_override: str
    type_params: tuple = ()

    def __post_init__(self) -> None:
        _freeze(self, "type_params")

    def __str__(self) -> str:
        return self.type_override


NUMBER = TsKeyword(KeywordKind.NUMBER)
BIGINT = TsKeyword(KeywordKind.BIGINT)
BOOLEAN = TsKeyword(KeywordKind.BOOLEAN)
STRING = TsKeyword(KeywordKind.STRING)
VOID = TsKeyword(KeywordKind.VOID)
UNDEFINED = TsKeyword(KeywordKind.UNDEFINED)
NULL = TsKeyword(KeywordKind.NULL)
NEVER = TsKeyword(KeywordKind.NEVER)


def nullish(config: TypeGenerationConfig) -> TsKeyword:
    """The type standing for a missing value under ``config``."""
    return NullType.for_config(config).to_type()


def empty_type_lit() -> TsTypeLit:
    return TsTypeLit(())


def type_lit(pairs: Sequence[tuple[str, TsType]]) -> TsTypeLit:
    """Build a type literal of required members from ``(key, type)`` pairs."""
    return TsTypeLit(tuple(TsTypeElement(key, ty) for key, ty in pairs))