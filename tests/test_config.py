import pytest

from tsdecl.config import (
    Attribute,
    TagType,
    TsifyContainerAttrs,
    TsifyError,
    TsifyFieldAttrs,
    TypeGenerationConfig,
)


def tsify(*args):
    return Attribute("tsify", args=args)


def test_format_name_prefix_and_suffix():
    config = TypeGenerationConfig(type_prefix="Pre", type_suffix="Suf")
    assert config.format_name("MyType") == "PreMyTypeSuf"
    assert TypeGenerationConfig().format_name("MyType") == "MyType"


def test_container_flags_and_affixes():
    attrs = TsifyContainerAttrs.from_attributes(
        [tsify("into_wasm_abi", "from_wasm_abi", ("type_prefix", "Special"))]
    )
    assert attrs.into_wasm_abi and attrs.from_wasm_abi
    assert attrs.ty_config.format_name("Foo") == "SpecialFoo"


def test_container_collects_comments():
    attrs = TsifyContainerAttrs.from_attributes(
        [Attribute("doc", " Comment for External"), tsify("namespace")], is_enum=True
    )
    assert attrs.comments == [" Comment for External"]
    assert attrs.namespace


def test_duplicate_flag_rejected():
    with pytest.raises(TsifyError, match="duplicate attribute"):
        TsifyContainerAttrs.from_attributes([tsify("into_wasm_abi"), tsify("into_wasm_abi")])


def test_duplicate_prefix_rejected():
    with pytest.raises(TsifyError, match="duplicate attribute"):
        TsifyContainerAttrs.from_attributes(
            [tsify(("type_prefix", "A"), ("type_prefix", "B"))]
        )


def test_namespace_only_on_enums():
    with pytest.raises(TsifyError, match="can only be used on enums"):
        TsifyContainerAttrs.from_attributes([tsify("namespace")], is_enum=False)


@pytest.mark.parametrize(
    "flag", ["missing_as_null", "hashmap_as_object", "large_number_types_as_bigints"]
)
def test_js_flags(flag):
    with pytest.raises(TsifyError, match="requires the `js` feature"):
        TsifyContainerAttrs.from_attributes([tsify(flag)])
    attrs = TsifyContainerAttrs.from_attributes([tsify(flag)], js=True)
    assert getattr(attrs.ty_config, flag) is True
    assert attrs.ty_config.js is True


def test_unknown_container_attribute():
    with pytest.raises(TsifyError, match="unsupported tsify attribute"):
        TsifyContainerAttrs.from_attributes([tsify("bogus")])


def test_field_type_override_and_optional():
    attrs = TsifyFieldAttrs.from_attributes([tsify(("type", "0 | 1 | 2"), "optional")])
    assert attrs.type_override == "0 | 1 | 2"
    assert attrs.optional


def test_field_skip_serializing_if_option_is_none():
    assert TsifyFieldAttrs.from_attributes([], "Option::is_none").optional
    assert not TsifyFieldAttrs.from_attributes([], "Vec::is_empty").optional


def test_field_unknown_and_duplicate():
    with pytest.raises(TsifyError, match="expected one of `type` or `optional`"):
        TsifyFieldAttrs.from_attributes([tsify("namespace")])
    with pytest.raises(TsifyError, match="duplicate attribute"):
        TsifyFieldAttrs.from_attributes([tsify("optional", "optional")])


def test_tag_type_kinds():
    assert TagType().kind == "external"
    assert TagType(tag="t").kind == "internal"
    assert TagType(tag="t", content="c").kind == "adjacent"
    assert TagType(untagged=True).kind == "none"
    with pytest.raises(TsifyError):
        TagType(content="c")