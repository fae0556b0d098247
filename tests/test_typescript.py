import pytest

from tsdecl.config import Style, TagType, TypeGenerationConfig
from tsdecl.typescript import (
    BIGINT,
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    UNDEFINED,
    NullType,
    TsArray,
    TsFn,
    TsIntersection,
    TsLit,
    TsOption,
    TsOverride,
    TsRef,
    TsTuple,
    TsTypeElement,
    TsTypeLit,
    TsUnion,
    empty_type_lit,
    is_js_ident,
    nullish,
    type_lit,
)

FOO = TsRef("Foo")
T = TsRef("T")


def test_keywords_render():
    ty = TsTuple((NUMBER, BIGINT, BOOLEAN))
    assert str(ty) == "[number, bigint, boolean]"


def test_null_type_follows_config():
    assert NullType.for_config(TypeGenerationConfig()) is NullType.NULL
    assert NullType.for_config(TypeGenerationConfig(js=True)) is NullType.UNDEFINED
    js_null = TypeGenerationConfig(js=True, missing_as_null=True)
    assert nullish(js_null) == NULL
    assert nullish(TypeGenerationConfig(js=True)) == UNDEFINED


def test_option_render():
    assert str(TsOption(NUMBER, NullType.NULL)) == "number | null"
    assert str(TsOption(NUMBER, NullType.UNDEFINED)) == "number | undefined"


def test_array_of_option_is_parenthesized():
    assert str(TsArray(TsOption(T, NullType.NULL))) == "(T | null)[]"
    assert str(TsArray(NUMBER)) == "number[]"


def test_result_union():
    ty = TsUnion((type_lit([("Ok", NUMBER)]), type_lit([("Err", STRING)])))
    assert str(ty) == "{ Ok: number } | { Err: string }"


def test_fn_render():
    assert str(TsFn((STRING, NUMBER))) == "(arg0: string, arg1: number) => void"
    assert str(TsFn((STRING,), NUMBER)) == "(arg0: string) => number"


def test_tuple_render():
    assert str(TsTuple((NUMBER, STRING, BOOLEAN))) == "[number, string, boolean]"
    assert str(TsTuple(())) == "[]"


def test_ref_and_map():
    assert str(TsRef("Map", (STRING, BIGINT))) == "Map<string, bigint>"
    assert str(FOO) == "Foo"


def test_empty_union_and_empty_lit():
    assert str(TsUnion(())) == "void"
    assert str(empty_type_lit()) == "{}"
    assert str(TsUnion((FOO,))) == "Foo"


def test_union_parenthesizes_intersection():
    newtype = TsIntersection((type_lit([("t", TsLit("Newtype"))]), FOO))
    unit = type_lit([("t", TsLit("Unit"))])
    assert str(TsUnion((newtype, unit))) == '({ t: "Newtype" } & Foo) | { t: "Unit" }'


def test_override_render():
    assert str(TsOverride("0 | 1 | 2")) == "0 | 1 | 2"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1", False),
        ("1x", False),
        ("-", False),
        (" ", False),
        ("#", False),
        ("", False),
        ("should_not_quote", True),
        ("should$not$quote", True),
    ],
)
def test_is_js_ident(text, expected):
    assert is_js_ident(text) is expected


def test_element_quotes_non_identifier():
    assert str(TsTypeElement("FOO-BAR", BOOLEAN)) == '"FOO-BAR": boolean'
    assert str(TsTypeElement("a", NUMBER, optional=True)) == "a?: number"


def test_element_with_comment_indented():
    elem = TsTypeElement("c", NUMBER, comments=[" Comment for c"])
    expected = "    /**\n     * Comment for c\n     */\n    c: number"
    assert elem.to_string_with_indent(4) == expected


def test_merge_intersects_duplicate_keys():
    merged = type_lit([("a", NUMBER)]).merge(type_lit([("a", STRING), ("b", BOOLEAN)]))
    assert [m.key for m in merged.members] == ["a", "b"]
    assert merged.members[0].type_ann == TsIntersection((NUMBER, STRING))


def test_and_combinations():
    lit_a = type_lit([("a", NUMBER)])
    lit_b = type_lit([("b", STRING)])
    assert lit_a.and_(lit_b) == type_lit([("a", NUMBER), ("b", STRING)])
    inter = TsIntersection((FOO,))
    assert inter.and_(T) == TsIntersection((FOO, T))
    assert T.and_(inter) == TsIntersection((T, FOO))
    assert inter.and_(TsIntersection((T,))) == TsIntersection((FOO, T))
    assert FOO.and_(T) == TsIntersection((FOO, T))


def test_is_ref():
    assert FOO.is_ref()
    assert not NUMBER.is_ref()


def test_walk_and_type_ref_names():
    ty = type_lit([("x", TsRef("Test", (FOO,))), ("y", TsOverride("T[]", ("T",)))])
    assert ty.type_ref_names() == {"Test", "Foo", "T"}
    assert list(ty.walk())[0] == ty


def test_type_refs_order():
    ty = TsUnion((TsRef("Test", (FOO,)), TsArray(T)))
    assert ty.type_refs() == [("Test", (FOO,)), ("Foo", ()), ("T", ())]


def test_prefix_type_refs():
    ty = type_lit([("Newtype", TsRef("Test", (FOO,)))])
    assert str(ty.prefix_type_refs("__Internal", [])) == (
        "{ Newtype: __InternalTest<__InternalFoo> }"
    )
    generic = type_lit([("Newtype", TsRef("Test", (T,)))])
    assert str(generic.prefix_type_refs("__Internal", ["T"])) == (
        "{ Newtype: __InternalTest<T> }"
    )


def test_without_comments():
    ty = TsTypeLit((TsTypeElement("x", NUMBER, comments=[" note"]),))
    cleaned = ty.without_comments()
    assert all(not m.comments for m in cleaned.members)
    assert NUMBER.without_comments() == NUMBER


def test_intersection_drops_member_comments():
    lit = TsTypeLit((TsTypeElement("c", NUMBER, comments=[" note"]),))
    ty = TsIntersection((lit, TsUnion((FOO, empty_type_lit()))))
    assert str(ty) == "{ c: number } & (Foo | {})"


CONFIG = TypeGenerationConfig()
STRUCT = type_lit([("x", STRING), ("y", NUMBER)])


def test_external_tagging():
    assert TsTuple(()).with_tag_type(CONFIG, "Unit", Style.UNIT, TagType()) == TsLit("Unit")
    tagged = STRUCT.with_tag_type(CONFIG, "Struct", Style.STRUCT, TagType())
    assert str(tagged) == "{ Struct: { x: string; y: number } }"


def test_internal_tagging():
    tag = TagType(tag="t")
    assert str(STRUCT.with_tag_type(CONFIG, "Struct", Style.STRUCT, tag)) == (
        '{ t: "Struct"; x: string; y: number }'
    )
    assert str(nullish(CONFIG).with_tag_type(CONFIG, "Unit", Style.UNIT, tag)) == (
        '{ t: "Unit" }'
    )
    assert str(FOO.with_tag_type(CONFIG, "Newtype", Style.NEWTYPE, tag)) == (
        '{ t: "Newtype" } & Foo'
    )


def test_adjacent_tagging():
    tag = TagType(tag="t", content="c")
    tuple_ty = TsTuple((NUMBER, STRING))
    assert str(tuple_ty.with_tag_type(CONFIG, "Tuple", Style.TUPLE, tag)) == (
        '{ t: "Tuple"; c: [number, string] }'
    )
    assert str(NULL.with_tag_type(CONFIG, "Unit", Style.UNIT, tag)) == '{ t: "Unit" }'


def test_untagged_returns_type_unchanged():
    tag = TagType(untagged=True)
    assert STRUCT.with_tag_type(CONFIG, "Struct", Style.STRUCT, tag) == STRUCT
    assert str(NULL.with_tag_type(CONFIG, "Unit", Style.UNIT, tag)) == "null"