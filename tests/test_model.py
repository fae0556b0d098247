import pytest

from tsdecl.config import Attribute, Style, TagType, TsifyError
from tsdecl.model import Container, ErrorTracker, Field, RenameRule, Variant


def tsify(*args):
    return Attribute("tsify", args=args)


@pytest.mark.parametrize(
    "rule, name, expected",
    [
        ("snake_case", "SnakeCase", "snake_case"),
        ("snake_case", "CamelCase", "camel_case"),
        ("snake_case", "KebabCase", "kebab_case"),
        ("snake_case", "ScreamingSnakeCase", "screaming_snake_case"),
    ],
)
def test_rename_variant(rule, name, expected):
    assert RenameRule.from_str(rule).apply_to_variant(name) == expected


@pytest.mark.parametrize(
    "rule, name, expected",
    [
        ("camelCase", "foo_bar", "fooBar"),
        ("camelCase", "baz_quoox", "bazQuoox"),
        ("camelCase", "foo", "foo"),
        ("kebab-case", "foo_bar", "foo-bar"),
        ("SCREAMING_SNAKE_CASE", "foo_bar", "FOO_BAR"),
        ("SCREAMING_SNAKE_CASE", "foo", "FOO"),
        ("PascalCase", "foo_bar", "FooBar"),
        ("PascalCase", "foo", "Foo"),
        ("SCREAMING-KEBAB-CASE", "foo_bar", "FOO-BAR"),
        ("snake_case", "foo_bar", "foo_bar"),
    ],
)
def test_rename_field(rule, name, expected):
    assert RenameRule.from_str(rule).apply_to_field(name) == expected


def test_rename_rule_round_trip():
    for rule in RenameRule:
        if rule is RenameRule.NONE:
            continue
        assert RenameRule.from_str(rule.value) is rule


def test_rename_none_keeps_names():
    assert RenameRule.NONE.apply_to_field("foo_bar") == "foo_bar"
    assert RenameRule.NONE.apply_to_variant("SnakeCase") == "SnakeCase"


def test_unknown_rename_rule():
    with pytest.raises(TsifyError, match="unknown rename rule"):
        RenameRule.from_str("Title Case")


def test_error_tracker_combines_and_clears():
    tracker = ErrorTracker()
    tracker.add("first problem")
    tracker.add(TsifyError("second problem"))
    assert len(tracker.errors) == 2
    with pytest.raises(TsifyError) as info:
        tracker.check()
    assert "first problem" in str(info.value)
    assert "second problem" in str(info.value)
    assert tracker.errors == ()
    assert tracker.check() is None


def test_error_tracker_single_error_is_raised_as_is():
    tracker = ErrorTracker()
    error = TsifyError("duplicate attribute")
    tracker.add(error)
    with pytest.raises(TsifyError) as info:
        tracker.check()
    assert info.value is error


def test_error_tracker_context_manager_checks_on_exit():
    with pytest.raises(TsifyError, match="duplicate attribute"):
        with ErrorTracker() as tracker:
            tracker.add("duplicate attribute")


def test_field_skip_sets_both_directions():
    field = Field("b", "i32", skip=True)
    assert field.skip_serializing and field.skip_deserializing


def test_field_rename_wins_over_rule():
    field = Field("x", "i32", rename="X")
    assert field.serialize_name(RenameRule.SCREAMING_KEBAB_CASE) == "X"
    assert Field("foo_bar", "bool").serialize_name(RenameRule.PASCAL_CASE) == "FooBar"


def test_field_comments_from_doc_attributes():
    field = Field("a", "i32", (Attribute("doc", " Comment for a"),))
    assert field.comments == [" Comment for a"]


def test_container_names_with_prefix_and_rename():
    container = Container(
        "PrefixedStruct",
        fields=[Field("x", "u32")],
        attributes=(tsify(("type_prefix", "Special")),),
    )
    assert container.ident_str == "SpecialPrefixedStruct"
    renamed = Container("Foo", fields=[Field("x", "i32")], rename="foo")
    assert renamed.name == "foo"
    assert renamed.ident_str == "Foo"


def test_container_drops_lifetimes_from_generics():
    container = Container("GenericStruct", fields=[], generics=("'a", "A", "B", "C", "D"))
    assert container.generics == ("A", "B", "C", "D")


def test_single_field_tuple_is_newtype():
    container = Container("Newtype", style=Style.TUPLE, fields=[Field(0, "i32")])
    assert container.style is Style.NEWTYPE
    variant = Variant("Newtype", Style.TUPLE, fields=(Field(0, "Foo"),))
    assert variant.style is Style.NEWTYPE


def test_namespace_on_struct_is_reported_by_check():
    container = Container("S", fields=[], attributes=(tsify("namespace"),))
    with pytest.raises(TsifyError, match="can only be used on enums"):
        container.check()


def test_js_only_flag_is_reported_by_check():
    container = Container("S", fields=[], attributes=(tsify("missing_as_null"),))
    with pytest.raises(TsifyError, match="requires the `js` feature"):
        container.check()
    assert container.attrs.ty_config.missing_as_null is False


def test_namespace_on_enum_is_accepted():
    container = Container("E", variants=[Variant("A")], attributes=(tsify("namespace"),))
    assert container.attrs.namespace is True
    assert container.check() is None


def test_transparent_enum_rejected():
    with pytest.raises(TsifyError, match="not allowed on an enum"):
        Container("E", variants=[Variant("A")], transparent=True)


def test_transparent_needs_exactly_one_field():
    with pytest.raises(TsifyError, match="exactly one field"):
        Container(
            "B", fields=[Field("x", "String"), Field("y", "f64")], transparent=True
        )


def test_tag_on_tuple_struct_rejected():
    with pytest.raises(TsifyError, match="structs with named fields"):
        Container(
            "T",
            style=Style.TUPLE,
            fields=[Field(0, "i32"), Field(1, "i32")],
            tag=TagType(tag="t"),
        )


def test_untagged_struct_rejected():
    with pytest.raises(TsifyError, match="untagged"):
        Container("S", fields=[], tag=TagType(untagged=True))


def test_variant_field_rule_precedence():
    container = Container(
        "Renamed",
        variants=[Variant("First"), Variant("Second", rename_all="kebab-case")],
        rename_all_fields="camelCase",
    )
    first, second = container.variants
    assert container.variant_field_rule(first) is RenameRule.CAMEL_CASE
    assert container.variant_field_rule(second) is RenameRule.KEBAB_CASE