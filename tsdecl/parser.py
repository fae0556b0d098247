"""Building TypeScript declarations from annotated containers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Union

from .config import Style, TsifyError, TsifyFieldAttrs
from .convert import ts_type_from_rust
from .decl import Decl, TsEnumDecl, TsInterfaceDecl, TsTypeAliasDecl
from .model import Container, Field, RenameRule, Variant
from .rust_types import PathType
from .typescript import (
    NEVER,
    TsIntersection,
    TsLit,
    TsOption,
    TsOverride,
    TsTuple,
    TsType,
    TsTypeElement,
    TsTypeLit,
    TsUnion,
    empty_type_lit,
    nullish,
)


@dataclass
class _Named:
    members: list = field(default_factory=list)
    extends: list = field(default_factory=list)


@dataclass
class _Unnamed:
    elems: list = field(default_factory=list)


@dataclass
class _Transparent:
    ty: TsType


_ParsedFields = Union[_Named, _Unnamed, _Transparent]


def _to_type(parsed: _ParsedFields) -> TsType:
    match parsed:
        case _Named(members=members, extends=extends):
            lit = TsTypeLit(tuple(members))
            return lit.and_(TsIntersection(tuple(extends))) if extends else lit
        case _Unnamed(elems=elems):
            return TsTuple(tuple(elems))
        case _Transparent(ty=ty):
            return ty
    raise AssertionError(parsed)


def _is_phantom(ty: object) -> bool:
    return isinstance(ty, PathType) and bool(ty.segments) and ty.last.ident == "PhantomData"


class Parser:
    """Turns a :class:`Container` into its TypeScript declaration."""

    def __init__(self, container: Container) -> None:
        self.container = container

    @property
    def _config(self):
        return self.container.config

    def parse(self) -> Decl:
        container = self.container
        if container.is_enum:
            return self._parse_enum(container.variants)
        return self._parse_struct(container.style, container.fields)

    def _relevant_type_params(self, names: Iterable[str]) -> tuple[str, ...]:
        names = set(names)
        return tuple(param for param in self.container.generics if param in names)

    def _type_alias_decl(self, type_ann: TsType) -> TsTypeAliasDecl:
        return TsTypeAliasDecl(
            self.container.ident_str,
            type_ann,
            export=True,
            type_params=self._relevant_type_params(type_ann.type_ref_names()),
            comments=self.container.comments,
        )

    def _create_decl(self, members: list, extends: list) -> Decl:
        # An interface can only extend names with optional type arguments.
        if all(ty.is_ref() for ty in extends):
            names: set[str] = set()
            for member in members:
                names |= member.type_ann.type_ref_names()
            for ty in extends:
                names |= ty.type_ref_names()
            return TsInterfaceDecl(
                self.container.ident_str,
                type_params=self._relevant_type_params(names),
                extends=tuple(extends),
                body=tuple(members),
                comments=self.container.comments,
            )
        extra = TsIntersection(
            tuple(
                TsUnion((ty.elem, empty_type_lit())) if isinstance(ty, TsOption) else ty
                for ty in extends
            )
        )
        return self._type_alias_decl(TsTypeLit(tuple(members)).and_(extra))

    def _parse_struct(self, style: Style, fields: Sequence[Field]) -> Decl:
        container = self.container
        parsed = self._parse_fields(style, fields, container.rename_all)
        if isinstance(parsed, _Named):
            members = parsed.members
            if container.tag.kind == "internal":
                tag_field = TsTypeElement(container.tag.tag, TsLit(container.name))
                members = [tag_field, *members]
            return self._create_decl(members, parsed.extends)
        return self._type_alias_decl(_to_type(parsed))

    def _parse_fields(
        self, style: Style, fields: Sequence[Field], rule: RenameRule
    ) -> _ParsedFields:
        if style is Style.NEWTYPE:
            return _Transparent(self._parse_field(fields[0])[0])
        if style is Style.UNIT:
            return _Transparent(nullish(self._config))

        kept = [
            f
            for f in fields
            if not f.skip_serializing and not f.skip_deserializing and not _is_phantom(f.ty)
        ]

        if len(kept) == 1 and self.container.transparent:
            return _Transparent(self._parse_field(kept[0])[0])

        if style is Style.STRUCT:
            return self._parse_named_fields(kept, rule)
        return _Unnamed([self._parse_field(f)[0] for f in kept])

    def _parse_field(self, field_: Field) -> tuple[TsType, TsifyFieldAttrs | None]:
        try:
            attrs = TsifyFieldAttrs.from_attributes(
                field_.attributes, field_.skip_serializing_if
            )
        except TsifyError as err:
            self.container.errors.add(err)
            return NEVER, None

        type_ann = ts_type_from_rust(self._config, field_.ty)
        if attrs.type_override is not None:
            params = self._relevant_type_params(type_ann.type_ref_names())
            return TsOverride(attrs.type_override, params), attrs
        return type_ann, attrs

    def _parse_named_fields(self, fields: list, rule: RenameRule) -> _Named:
        container = self.container
        parsed = _Named()
        for field_ in fields:
            if field_.flatten:
                continue
            type_ann, attrs = self._parse_field(field_)
            optional = attrs is not None and attrs.optional
            has_default = bool(container.default) or bool(field_.default)
            if optional and isinstance(type_ann, TsOption):
                type_ann = type_ann.elem
            parsed.members.append(
                TsTypeElement(
                    field_.serialize_name(rule),
                    type_ann,
                    optional or has_default,
                    tuple(field_.comments),
                )
            )
        parsed.extends = [self._parse_field(f)[0] for f in fields if f.flatten]
        return parsed

    def _parse_enum(self, variants: Sequence[Variant]) -> TsEnumDecl:
        container = self.container
        members = []
        for variant in variants:
            if variant.skip_serializing or variant.skip_deserializing:
                continue
            type_ann = self._parse_variant(variant)
            members.append(
                TsTypeAliasDecl(
                    variant.serialize_name(container.rename_all),
                    type_ann,
                    export=True,
                    type_params=self._relevant_type_params(type_ann.type_ref_names()),
                    comments=variant.comments,
                )
            )
        names: set[str] = set()
        for member in members:
            names |= member.type_ann.type_ref_names()
        return TsEnumDecl(
            container.ident_str,
            type_params=self._relevant_type_params(names),
            members=tuple(members),
            namespace=container.attrs.namespace,
            comments=container.comments,
        )

    def _parse_variant(self, variant: Variant) -> TsType:
        container = self.container
        name = variant.serialize_name(container.rename_all)
        parsed = self._parse_fields(
            variant.style, variant.fields, container.variant_field_rule(variant)
        )
        return _to_type(parsed).with_tag_type(self._config, name, variant.style, container.tag)