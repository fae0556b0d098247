"""Attributes of annotated types and the options that steer generation."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field

from .comments import extract_doc_comments


class TsifyError(Exception):
    """An attribute or declaration that cannot be processed."""


@dataclass(frozen=True)
class Attribute:
    """An attribute attached to a type, field or variant.

    ``path`` names the attribute (``doc``, ``tsify``, ``serde``...). Doc
    comments carry their text in ``value``; ``tsify`` attributes carry
    ``args`` as ``(key, value)`` pairs, where a bare string means a flag.
    """

    path: str
    value: str | None = None
    args: tuple = ()

    def __post_init__(self) -> None:
        normalized = tuple(
            (item, None) if isinstance(item, str) else (item[0], item[1])
            for item in self.args
        )
        object.__setattr__(self, "args", normalized)


class Style(enum.Enum):
    """The shape of a struct or enum variant."""

    STRUCT = "struct"
    TUPLE = "tuple"
    NEWTYPE = "newtype"
    UNIT = "unit"


@dataclass(frozen=True)
class TagType:
    """How an enum is tagged when serialized.

    No tag means external tagging; a tag alone means internal tagging; a tag
    and content mean adjacent tagging; ``untagged`` means no tag at all.
    """

    tag: str | None = None
    content: str | None = None
    untagged: bool = False

    def __post_init__(self) -> None:
        if self.content is not None and self.tag is None:
            raise TsifyError("content requires a tag")
        if self.untagged and self.tag is not None:
            raise TsifyError("an untagged enum cannot have a tag")

    @property
    def kind(self) -> str:
        if self.untagged:
            return "none"
        if self.tag is None:
            return "external"
        if self.content is not None:
            return "adjacent"
        return "internal"


@dataclass
class TypeGenerationConfig:
    """Options affecting how TypeScript types are generated."""

    type_prefix: str | None = None
    type_suffix: str | None = None
    missing_as_null: bool = False
    hashmap_as_object: bool = False
    large_number_types_as_bigints: bool = False
    js: bool = False

    def format_name(self, name: str) -> str:
        """Return ``name`` with the configured prefix and suffix."""
        return f"{self.type_prefix or ''}{name}{self.type_suffix or ''}"


_CONTAINER_EXPECTED = (
    "unsupported tsify attribute, expected one of `into_wasm_abi`, `from_wasm_abi`, "
    "`namespace`, `type_prefix`, `type_suffix`, `missing_as_null`, "
    "`hashmap_as_object`, `large_number_types_as_bigints`"
)
_FIELD_EXPECTED = "unsupported tsify attribute, expected one of `type` or `optional`"
_JS_FLAGS = ("missing_as_null", "hashmap_as_object", "large_number_types_as_bigints")


def _check_flag(key: str, value: str | None, already_set: bool) -> None:
    if value is not None:
        raise TsifyError(f"unexpected value for `{key}`")
    if already_set:
        raise TsifyError("duplicate attribute")


def _check_string(key: str, value: str | None, already_set: bool) -> str:
    if already_set:
        raise TsifyError("duplicate attribute")
    if value is None:
        raise TsifyError(f"expected a string value for `{key}`")
    return value


@dataclass
class TsifyContainerAttrs:
    """Attributes given to a type through ``tsify(...)``."""

    into_wasm_abi: bool = False
    from_wasm_abi: bool = False
    namespace: bool = False
    ty_config: TypeGenerationConfig = field(default_factory=TypeGenerationConfig)
    comments: list[str] = field(default_factory=list)

    @classmethod
    def from_attributes(
        cls, attributes: Iterable[Attribute], is_enum: bool = False, js: bool = False
    ) -> TsifyContainerAttrs:
        attributes = list(attributes)
        attrs = cls(
            ty_config=TypeGenerationConfig(js=js),
            comments=extract_doc_comments(attributes),
        )
        config = attrs.ty_config
        for attribute in attributes:
            if attribute.path != "tsify":
                continue
            for key, value in attribute.args:
                if key in ("into_wasm_abi", "from_wasm_abi"):
                    _check_flag(key, value, getattr(attrs, key))
                    setattr(attrs, key, True)
                elif key == "namespace":
                    if not is_enum:
                        raise TsifyError("#[tsify(namespace)] can only be used on enums")
                    _check_flag(key, value, attrs.namespace)
                    attrs.namespace = True
                elif key in ("type_prefix", "type_suffix"):
                    text = _check_string(key, value, getattr(config, key) is not None)
                    setattr(config, key, text)
                elif key in _JS_FLAGS:
                    _check_flag(key, value, getattr(config, key))
                    if not js:
                        raise TsifyError(f"#[tsify({key})] requires the `js` feature")
                    setattr(config, key, True)
                else:
                    raise TsifyError(_CONTAINER_EXPECTED)
        return attrs


@dataclass
class TsifyFieldAttrs:
    """Attributes given to a field through ``tsify(...)``."""

    type_override: str | None = None
    optional: bool = False
    comments: list[str] = field(default_factory=list)

    @classmethod
    def from_attributes(
        cls, attributes: Iterable[Attribute], skip_serializing_if: str | None = None
    ) -> TsifyFieldAttrs:
        attributes = list(attributes)
        attrs = cls(comments=extract_doc_comments(attributes))
        for attribute in attributes:
            if attribute.path != "tsify":
                continue
            for key, value in attribute.args:
                if key == "type":
                    attrs.type_override = _check_string(
                        key, value, attrs.type_override is not None
                    )
                elif key == "optional":
                    _check_flag(key, value, attrs.optional)
                    attrs.optional = True
                else:
                    raise TsifyError(_FIELD_EXPECTED)
        if skip_serializing_if == "Option::is_none":
            attrs.optional = True
        return attrs