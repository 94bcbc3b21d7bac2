"""oapi-rust: resolve OpenAPI schemas to Rust types and identifiers."""

__version__ = "0.1.0"
