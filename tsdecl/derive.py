"""Producing finished declarations from annotated types and type aliases."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .comments import extract_doc_comments
from .config import TypeGenerationConfig
from .convert import ts_type_from_rust
from .decl import TsTypeAliasDecl
from .model import Container
from .parser import Parser
from .rust_types import RustType


@dataclass(frozen=True)
class SerializationConfig:
    """Options used when a value is converted to and from JavaScript."""

    missing_as_null: bool = False
    hashmap_as_object: bool = False
    large_number_types_as_bigints: bool = False

    @classmethod
    def from_type_config(cls, config: TypeGenerationConfig) -> SerializationConfig:
        return cls(
            missing_as_null=config.missing_as_null,
            hashmap_as_object=config.hashmap_as_object,
            large_number_types_as_bigints=config.large_number_types_as_bigints,
        )


@dataclass(frozen=True)
class Declaration:
    """The generated TypeScript for one type, with its conversion settings.

    ``ident`` is the type's own name, ``typescript_type`` the name of the
    declared TypeScript type and ``decl`` the declaration text.
    """

    ident: str
    typescript_type: str
    decl: str
    serialization_config: SerializationConfig = field(default_factory=SerializationConfig)
    into_wasm_abi: bool = False
    from_wasm_abi: bool = False

    def __str__(self) -> str:
        return self.decl


def expand(container: Container) -> Declaration:
    """Generate the declaration of an annotated struct or enum.

    Raises :class:`~tsdecl.config.TsifyError` if any errors were collected.
    """
    decl = Parser(container).parse()
    decl_str = str(decl)
    container.check()
    attrs = container.attrs
    return Declaration(
        ident=container.ident,
        typescript_type=decl.id,
        decl=decl_str,
        serialization_config=SerializationConfig.from_type_config(attrs.ty_config),
        into_wasm_abi=attrs.into_wasm_abi,
        from_wasm_abi=attrs.from_wasm_abi,
    )


def expand_type_alias(
    name: str,
    type_params: Iterable[str],
    ty: RustType | str,
    attributes: Iterable = (),
) -> Declaration:
    """Generate the declaration of a type alias ``name<type_params> = ty``."""
    decl = TsTypeAliasDecl(
        name,
        ts_type_from_rust(TypeGenerationConfig(), ty),
        export=True,
        type_params=tuple(p for p in type_params if not p.startswith("'")),
        comments=tuple(extract_doc_comments(attributes)),
    )
    return Declaration(ident=name, typescript_type=name, decl=str(decl))