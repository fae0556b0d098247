"""Generate TypeScript declarations from descriptions of Rust types."""

__version__ = "0.1.0"

__all__ = [
    "comments",
    "config",
    "convert",
    "decl",
    "derive",
    "model",
    "parser",
    "rust_types",
    "typescript",
]