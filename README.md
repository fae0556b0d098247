# tsdecl

`tsdecl` produces TypeScript declarations from descriptions of Rust types. It
follows serde's data model, so it can work out how a struct or enum looks once
it has been serialized. It writes the matching `export interface` or
`export type` text and carries doc comments over as `/** ... */` blocks.

The package has no runtime dependencies and needs Python 3.10 or later.

## Type expressions

`tsdecl.rust_types.parse_type` reads the text of a Rust type, such as
`Vec<Option<T>>`, `HashMap<String, i32>`, `[i32; 4]`, `&'a str` or
`dyn Fn(String) -> i32`, and returns its syntax tree. Text it cannot read
raises `RustTypeError`.

`tsdecl.convert.ts_type_from_rust` maps a syntax tree, or the text itself, to
a TypeScript type:

```python
from tsdecl.config import TypeGenerationConfig
from tsdecl.convert import ts_type_from_rust

config = TypeGenerationConfig()
str(ts_type_from_rust(config, "Vec<i32>"))             # 'number[]'
str(ts_type_from_rust(config, "Result<i32, String>"))  # '{ Ok: number } | { Err: string }'
str(ts_type_from_rust(config, "Option<i32>"))          # 'number | null'
```

The mapping works as follows:

- Integers and floats become `number`.
- `String`, `str`, `char`, `Path` and `PathBuf` become `string`.
- `Vec`, `VecDeque`, `LinkedList`, `HashSet`, `BTreeSet` and slices become arrays.
- Maps become `Record<K, V>`.
- Fixed arrays of up to 16 elements become tuples.
- `()` becomes `null`.
- `Duration`, `SystemTime`, `Range` and `RangeInclusive` become object literals.
- Any other name becomes a reference to a type of that name.

A `TypeGenerationConfig` with `js=True` changes some of these. `()` and
missing values become `undefined` and `u128`/`i128` become `bigint`. Maps
become `Map<K, V>` and `ByteBuf` becomes `Uint8Array`. Its `missing_as_null`,
`hashmap_as_object` and `large_number_types_as_bigints` options take effect
only together with `js=True`. `type_prefix` and `type_suffix` are added to the
names of referenced types.

## Structs and enums

Describe the type as a `tsdecl.model.Container` and pass it to
`tsdecl.derive.expand`:

```python
from tsdecl.config import Attribute, Style, TagType
from tsdecl.derive import expand
from tsdecl.model import Container, Field, Variant

point = Container(
    "Point",
    fields=[Field("x", "i32"), Field("y", "i32")],
    attributes=[Attribute("doc", " A point on the plane")],
)
print(expand(point).decl)
# /**
#  * A point on the plane
#  */
# export interface Point {
#     x: number;
#     y: number;
# }

shape = Container(
    "Shape",
    variants=[
        Variant("Circle", Style.STRUCT, fields=[Field("radius", "f64")]),
        Variant("Empty"),
    ],
    tag=TagType(tag="kind"),
)
print(expand(shape).decl)
# export type Shape = { kind: "Circle"; radius: number } | { kind: "Empty" };
```

A container with `variants` is an enum. Otherwise it is a struct whose `style`
is one of `Style.STRUCT`, `Style.TUPLE`, `Style.NEWTYPE` or `Style.UNIT`.

Serde attributes are given as arguments:

- **Container:** `rename`, `rename_all`, `rename_all_fields`, `tag`,
  `transparent`, `default`, `generics` and `js`. `rename_all` takes a
  `RenameRule` or its name, such as `"camelCase"`.
- **Field:** `rename`, `skip`, `skip_serializing`, `skip_deserializing`,
  `skip_serializing_if`, `flatten` and `default`.
- **Variant:** `rename`, `rename_all`, `skip`, `skip_serializing` and
  `skip_deserializing`.

`TagType` selects the tagging: no arguments for external tagging, `tag` for
internal tagging, `tag` and `content` for adjacent tagging, and
`untagged=True` for none.

Doc comments and tsify options are given as `Attribute` objects. Doc comments
use `Attribute("doc", text)`. Tsify options use
`Attribute("tsify", args=(...))`, where a bare string is a flag and a pair is
a key and value.

- **Containers** accept `into_wasm_abi`, `from_wasm_abi`, `namespace` (enums
  only), `type_prefix`, `type_suffix`, `missing_as_null`, `hashmap_as_object`
  and `large_number_types_as_bigints`.
- **Fields** accept `type` (an override written out verbatim) and `optional`.

With `namespace`, the variants of an enum are also written as separate aliases
inside a `declare namespace` block.

`expand` returns a `Declaration` with these fields:

- `decl`: the declaration text.
- `typescript_type`: the declared name.
- `ident`: the type's own name.
- `serialization_config`: a `SerializationConfig` holding the chosen
  `missing_as_null`, `hashmap_as_object` and `large_number_types_as_bigints`.
- `into_wasm_abi` and `from_wasm_abi`: the flags.

A plain type alias is handled by `tsdecl.derive.expand_type_alias`:

```python
from tsdecl.derive import expand_type_alias

expand_type_alias("Pair", ["T"], "(T, T)").decl
# 'export type Pair<T> = [T, T];'
```

## Errors

Invalid serde arguments raise `tsdecl.config.TsifyError` when the `Container`
or `Variant` is built. Problems in tsify attributes are collected by the
container's `ErrorTracker`. `expand` raises them together as a `TsifyError`;
`Container.check` raises them on its own.

## Modules

| Module | Contents |
| --- | --- |
| `tsdecl.rust_types` | parsing Rust type expressions |
| `tsdecl.config` | attributes, tagging, generation options |
| `tsdecl.typescript` | the TypeScript type model and its rendering |
| `tsdecl.convert` | Rust type to TypeScript type mapping |
| `tsdecl.decl` | type alias, interface and enum declarations |
| `tsdecl.model` | containers, fields, variants, rename rules, error tracking |
| `tsdecl.parser` | turning a container into a declaration |
| `tsdecl.derive` | `expand` and `expand_type_alias` |
| `tsdecl.comments` | doc comment extraction and formatting |

## What it does not do

- It does not read Rust source files. Structs and enums are described in
  Python with `Container`, `Field` and `Variant`; only type expressions are
  parsed from text.
- It does not convert values to or from JavaScript. `SerializationConfig` and
  the `into_wasm_abi`/`from_wasm_abi` flags are reported, not acted on.
- There is no command-line tool.