"""The annotated types that declarations are generated from."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .comments import extract_doc_comments
from .config import Style, TagType, TsifyContainerAttrs, TsifyError, TypeGenerationConfig
from .rust_types import RustType, parse_type


class RenameRule(enum.Enum):
    """A rule renaming fields or variants, as given to ``rename_all``."""

    NONE = "none"
    LOWERCASE = "lowercase"
    UPPERCASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"

    @classmethod
    def from_str(cls, text: str) -> RenameRule:
        for rule in cls:
            if rule is not cls.NONE and rule.value == text:
                return rule
        choices = ", ".join(f'"{rule.value}"' for rule in cls if rule is not cls.NONE)
        raise TsifyError(f"unknown rename rule `rename_all = {text!r}`, expected one of {choices}")

    def apply_to_field(self, name: str) -> str:
        """Rename a field written in snake_case."""
        match self:
            case RenameRule.NONE | RenameRule.LOWERCASE | RenameRule.SNAKE_CASE:
                return name
            case RenameRule.UPPERCASE | RenameRule.SCREAMING_SNAKE_CASE:
                return name.upper()
            case RenameRule.PASCAL_CASE:
                return _field_to_pascal(name)
            case RenameRule.CAMEL_CASE:
                pascal = _field_to_pascal(name)
                return pascal[:1].lower() + pascal[1:]
            case RenameRule.KEBAB_CASE:
                return name.replace("_", "-")
            case RenameRule.SCREAMING_KEBAB_CASE:
                return name.upper().replace("_", "-")
        raise AssertionError(self)

    def apply_to_variant(self, name: str) -> str:
        """Rename a variant written in PascalCase."""
        match self:
            case RenameRule.NONE | RenameRule.PASCAL_CASE:
                return name
            case RenameRule.LOWERCASE:
                return name.lower()
            case RenameRule.UPPERCASE:
                return name.upper()
            case RenameRule.CAMEL_CASE:
                return name[:1].lower() + name[1:]
            case RenameRule.SNAKE_CASE:
                return _variant_to_snake(name)
            case RenameRule.SCREAMING_SNAKE_CASE:
                return _variant_to_snake(name).upper()
            case RenameRule.KEBAB_CASE:
                return _variant_to_snake(name).replace("_", "-")
            case RenameRule.SCREAMING_KEBAB_CASE:
                return _variant_to_snake(name).upper().replace("_", "-")
        raise AssertionError(self)


def _field_to_pascal(name: str) -> str:
    out = []
    capitalize = True
    for ch in name:
        if ch == "_":
            capitalize = True
        elif capitalize:
            out.append(ch.upper())
            capitalize = False
        else:
            out.append(ch)
    return "".join(out)


def _variant_to_snake(name: str) -> str:
    return "".join(
        ("_" if index and ch.isupper() else "") + ch.lower() for index, ch in enumerate(name)
    )


def _to_rule(value: RenameRule | str | None) -> RenameRule | None:
    if value is None or isinstance(value, RenameRule):
        return value
    return RenameRule.from_str(value)


class ErrorTracker:
    """Collects errors so that they can be reported together.

    Used as a context manager, the collected errors are raised on exit.
    """

    def __init__(self) -> None:
        self._errors: list[Exception] = []

    @property
    def errors(self) -> tuple[Exception, ...]:
        return tuple(self._errors)

    def add(self, error: Exception | str) -> None:
        """Record an error."""
        self._errors.append(TsifyError(error) if isinstance(error, str) else error)

    def check(self) -> None:
        """Raise the accumulated errors, if any, and clear them."""
        errors, self._errors = self._errors, []
        if not errors:
            return
        if len(errors) == 1:
            raise errors[0]
        raise TsifyError("\n".join(str(error) for error in errors))

    def __enter__(self) -> ErrorTracker:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.check()
        return False


def _normalize_style(style: Style, fields: tuple) -> Style:
    if style is Style.TUPLE and len(fields) == 1:
        return Style.NEWTYPE
    if style is Style.UNIT and fields:
        raise TsifyError("a unit struct or variant has no fields")
    if style is Style.NEWTYPE and len(fields) != 1:
        raise TsifyError("a newtype struct or variant has exactly one field")
    if style is Style.STRUCT and any(not isinstance(f.name, str) for f in fields):
        raise TsifyError("fields of a struct with named fields need names")
    return style


@dataclass(frozen=True)
class Field:
    """A field of a struct or variant with its serialization attributes.

    ``name`` is the member name, or the position for tuple fields.
    ``skip`` stands for both ``skip_serializing`` and ``skip_deserializing``.
    """

    name: str | int
    ty: RustType | str
    attributes: tuple = ()
    rename: str | None = None
    skip: bool = False
    skip_serializing: bool = False
    skip_deserializing: bool = False
    skip_serializing_if: str | None = None
    flatten: bool = False
    default: bool | str = False

    def __post_init__(self) -> None:
        if isinstance(self.ty, str):
            object.__setattr__(self, "ty", parse_type(self.ty))
        object.__setattr__(self, "attributes", tuple(self.attributes))
        if self.skip:
            object.__setattr__(self, "skip_serializing", True)
            object.__setattr__(self, "skip_deserializing", True)

    @property
    def comments(self) -> list[str]:
        return extract_doc_comments(self.attributes)

    def serialize_name(self, rule: RenameRule | None = None) -> str:
        if self.rename is not None:
            return self.rename
        return (rule or RenameRule.NONE).apply_to_field(str(self.name))


@dataclass(frozen=True)
class Variant:
    """A variant of an enum."""

    name: str
    style: Style = Style.UNIT
    fields: tuple = ()
    attributes: tuple = ()
    rename: str | None = None
    rename_all: RenameRule | str | None = None
    skip: bool = False
    skip_serializing: bool = False
    skip_deserializing: bool = False

    def __post_init__(self) -> None:
        fields = tuple(self.fields)
        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "style", _normalize_style(self.style, fields))
        object.__setattr__(self, "rename_all", _to_rule(self.rename_all))
        if self.skip:
            object.__setattr__(self, "skip_serializing", True)
            object.__setattr__(self, "skip_deserializing", True)

    @property
    def comments(self) -> list[str]:
        return extract_doc_comments(self.attributes)

    def serialize_name(self, rule: RenameRule | None = None) -> str:
        if self.rename is not None:
            return self.rename
        return (rule or RenameRule.NONE).apply_to_variant(self.name)


class Container:
    """A struct or enum annotated for declaration generation.

    Passing ``variants`` makes it an enum; otherwise it is a struct of the
    given ``style`` and ``fields``. Serialization attributes that are invalid
    raise :class:`TsifyError` at once; errors in ``tsify`` attributes are
    collected and raised by :meth:`check`.
    """

    def __init__(
        self,
        ident: str,
        *,
        style: Style = Style.STRUCT,
        fields=(),
        variants=None,
        generics=(),
        attributes=(),
        rename: str | None = None,
        rename_all: RenameRule | str | None = None,
        rename_all_fields: RenameRule | str | None = None,
        tag: TagType | None = None,
        transparent: bool = False,
        default: bool | str = False,
        js: bool = False,
    ) -> None:
        self.ident = ident
        self.attributes = tuple(attributes)
        self.comments = extract_doc_comments(self.attributes)
        self.generics = tuple(param for param in generics if not param.startswith("'"))
        self.tag = tag or TagType()
        self.transparent = transparent
        self.default = default
        self.rename_all = _to_rule(rename_all) or RenameRule.NONE
        self.rename_all_fields = _to_rule(rename_all_fields)
        self.variants = None if variants is None else tuple(variants)
        self.fields = tuple(fields)
        self.style = style if self.is_enum else _normalize_style(style, self.fields)
        self._validate()

        self.errors = ErrorTracker()
        try:
            self.attrs = TsifyContainerAttrs.from_attributes(self.attributes, self.is_enum, js)
        except TsifyError as err:
            self.errors.add(err)
            self.attrs = TsifyContainerAttrs(ty_config=TypeGenerationConfig(js=js))

        self.serde_name = rename if rename is not None else ident
        self.name = self.config.format_name(self.serde_name)
        self.ident_str = self.config.format_name(ident)

    @property
    def is_enum(self) -> bool:
        return self.variants is not None

    @property
    def config(self) -> TypeGenerationConfig:
        return self.attrs.ty_config

    def _validate(self) -> None:
        if self.is_enum:
            if self.fields:
                raise TsifyError("an enum has variants, not fields")
            if self.transparent:
                raise TsifyError("#[serde(transparent)] is not allowed on an enum")
            return
        if self.rename_all_fields is not None:
            raise TsifyError("#[serde(rename_all_fields)] can only be used on enums")
        kind = self.tag.kind
        if kind == "none":
            raise TsifyError("#[serde(untagged)] can only be used on enums")
        if kind == "adjacent":
            raise TsifyError("#[serde(tag = ..., content = ...)] can only be used on enums")
        if kind == "internal" and self.style is not Style.STRUCT:
            raise TsifyError(
                "#[serde(tag = ...)] can only be used on enums and structs with named fields"
            )
        if self.transparent:
            if self.style is Style.UNIT:
                raise TsifyError("#[serde(transparent)] is not allowed on a unit struct")
            kept = [f for f in self.fields if not (f.skip_serializing and f.skip_deserializing)]
            if len(kept) != 1:
                raise TsifyError(
                    "#[serde(transparent)] requires exactly one field that is not skipped"
                )

    def variant_field_rule(self, variant: Variant) -> RenameRule:
        """The rule renaming the fields of ``variant``."""
        return variant.rename_all or self.rename_all_fields or RenameRule.NONE

    def check(self) -> None:
        """Raise the errors collected while processing, if any."""
        self.errors.check()