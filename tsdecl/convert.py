"""Conversion of parsed type syntax into TypeScript types."""

from __future__ import annotations

from collections.abc import Sequence

from .config import TsifyError, TypeGenerationConfig
from .rust_types import (
    ArrayType,
    BareFnType,
    ImplTraitType,
    ParenType,
    PathSegment,
    PathType,
    ReferenceType,
    RustType,
    SliceType,
    TraitObjectType,
    TupleType,
    parse_type,
)
from .typescript import (
    BIGINT,
    BOOLEAN,
    NEVER,
    NUMBER,
    STRING,
    VOID,
    NullType,
    TsArray,
    TsFn,
    TsIntersection,
    TsOption,
    TsRef,
    TsTuple,
    TsType,
    TsUnion,
    nullish,
    type_lit,
)

_MAX_TUPLE_LENGTH = 16

_SMALL_NUMBERS = frozenset({"u8", "u16", "u32", "i8", "i16", "i32", "f64", "f32"})
_LARGE_NUMBERS = frozenset({"usize", "isize", "u64", "i64"})
_HUGE_NUMBERS = frozenset({"u128", "i128"})
_STRINGS = frozenset({"String", "str", "char", "Path", "PathBuf"})
_WRAPPERS = frozenset({"Box", "Cow", "Rc", "Arc", "Cell", "RefCell"})
_SEQUENCES = frozenset({"Vec", "VecDeque", "LinkedList"})
_MAPS = frozenset({"HashMap", "BTreeMap"})
_SETS = frozenset({"HashSet", "BTreeSet"})
_FUNCTIONS = frozenset({"Fn", "FnOnce", "FnMut"})


def ts_type_from_rust(config: TypeGenerationConfig, ty: RustType | str) -> TsType:
    """Convert a type (or its text) to the TypeScript type it serializes as."""
    if isinstance(ty, str):
        ty = parse_type(ty)

    match ty:
        case ArrayType(elem=elem, length=length):
            converted = ts_type_from_rust(config, elem)
            if length is not None and length <= _MAX_TUPLE_LENGTH:
                return TsTuple((converted,) * length)
            return TsArray(converted)
        case SliceType(elem=elem):
            return TsArray(ts_type_from_rust(config, elem))
        case ReferenceType(elem=elem) | ParenType(elem=elem):
            return ts_type_from_rust(config, elem)
        case BareFnType(inputs=inputs, output=output):
            params = tuple(ts_type_from_rust(config, arg) for arg in inputs)
            type_ann = VOID if output is None else ts_type_from_rust(config, output)
            return TsFn(params, type_ann)
        case TupleType(elems=elems):
            if not elems:
                return nullish(config)
            return TsTuple(tuple(ts_type_from_rust(config, elem) for elem in elems))
        case PathType():
            converted = _from_path(config, ty)
            return NEVER if converted is None else converted
        case TraitObjectType(bounds=bounds) | ImplTraitType(bounds=bounds):
            elems = (_from_path(config, bound) for bound in bounds)
            return TsIntersection(tuple(elem for elem in elems if elem is not None))
        case _:
            return NEVER


def _from_path(config: TypeGenerationConfig, path: PathType) -> TsType | None:
    if not path.segments:
        return None
    return _from_segment(config, path.last)


def _from_segment(config: TypeGenerationConfig, segment: PathSegment) -> TsType:
    output = segment.output if segment.parenthesized else None
    return ts_type_from_name(config, segment.ident, list(segment.args), output)


def ts_type_from_name(
    config: TypeGenerationConfig,
    ident: str,
    args: Sequence[RustType],
    fn_output: RustType | None = None,
) -> TsType:
    """Convert a named type with its type arguments to a TypeScript type."""

    def convert(ty: RustType) -> TsType:
        return ts_type_from_rust(config, ty)

    count = len(args)

    if ident in _SMALL_NUMBERS:
        return NUMBER
    if ident in _LARGE_NUMBERS:
        return BIGINT if config.js and config.large_number_types_as_bigints else NUMBER
    if ident in _HUGE_NUMBERS:
        return BIGINT if config.js else NUMBER
    if ident in _STRINGS:
        return STRING
    if ident == "bool":
        return BOOLEAN
    if ident in _WRAPPERS and count == 1:
        return convert(args[0])
    if ident in _SEQUENCES and count == 1:
        return TsArray(convert(args[0]))
    if ident in _MAPS and count == 2:
        name = "Map" if config.js and not config.hashmap_as_object else "Record"
        return TsRef(name, tuple(convert(arg) for arg in args))
    if ident in _SETS and count == 1:
        return TsArray(convert(args[0]))
    if ident == "Option" and count == 1:
        return TsOption(convert(args[0]), NullType.for_config(config))
    if ident == "ByteBuf":
        if config.js:
            return TsRef("Uint8Array")
        return TsArray(NUMBER)
    if ident == "Result" and count == 2:
        ok = type_lit([("Ok", convert(args[0]))])
        err = type_lit([("Err", convert(args[1]))])
        return TsUnion((ok, err))
    if ident == "Duration":
        return type_lit([("secs", NUMBER), ("nanos", NUMBER)])
    if ident == "SystemTime":
        return type_lit([("secs_since_epoch", NUMBER), ("nanos_since_epoch", NUMBER)])
    if ident in ("Range", "RangeInclusive"):
        if not args:
            raise TsifyError(f"`{ident}` requires a type argument")
        bound = convert(args[0])
        return type_lit([("start", bound), ("end", bound)])
    if ident in _FUNCTIONS:
        params = tuple(convert(arg) for arg in args)
        type_ann = VOID if fn_output is None else convert(fn_output)
        return TsFn(params, type_ann)
    return TsRef(config.format_name(ident), tuple(convert(arg) for arg in args))