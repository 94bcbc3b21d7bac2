"""
Rust-specific naming utilities and sanitization.

Handles Rust reserved words and naming conventions: snake_case fields,
modules and functions, CamelCase types and enum variants.
"""

from typing import Optional

from ....logging_config import get_logger
from ...core.config import GeneratorContext
from ...core.naming import (
    Identifier,
    IdentifierRole,
    camelize,
    is_all_upper_snake,
    sanitize_name,
    starts_with_digit,
    underscore,
)

logger = get_logger(__name__)


# Rust keywords, including the ones reserved for future use
RUST_RESERVED_WORDS = frozenset(
    {
        "abstract",
        "alignof",
        "as",
        "async",
        "await",
        "become",
        "box",
        "break",
        "const",
        "continue",
        "crate",
        "do",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "final",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "macro",
        "match",
        "mod",
        "move",
        "mut",
        "offsetof",
        "override",
        "priv",
        "proc",
        "pub",
        "pure",
        "ref",
        "return",
        "Self",
        "self",
        "sizeof",
        "static",
        "struct",
        "super",
        "trait",
        "true",
        "try",
        "type",
        "typeof",
        "unsafe",
        "unsized",
        "use",
        "virtual",
        "where",
        "while",
        "yield",
    }
)

# Enum values consisting of a single symbol
SYMBOL_NAMES = {
    "$": "Dollar",
    "^": "Caret",
    "|": "Pipe",
    "=": "Equal",
    "*": "Star",
    "-": "Minus",
    "&": "Ampersand",
    "%": "Percent",
    "#": "Hash",
    "@": "At",
    "!": "Exclamation",
    "+": "Plus",
    ":": "Colon",
    ";": "Semicolon",
    ">": "GreaterThan",
    "<": "LessThan",
    ".": "Period",
    "_": "Underscore",
    "?": "QuestionMark",
    ",": "Comma",
    "'": "Quote",
    '"': "DoubleQuote",
    "/": "Slash",
    "\\": "BackSlash",
    "(": "LeftParenthesis",
    ")": "RightParenthesis",
    "{": "LeftCurlyBracket",
    "}": "RightCurlyBracket",
    "[": "LeftSquareBracket",
    "]": "RightSquareBracket",
    "~": "Tilde",
    "`": "Backtick",
    "<=": "LessThanOrEqualTo",
    ">=": "GreaterThanOrEqualTo",
    "!=": "NotEqual",
}

# Schema kinds whose enum values are numbers
NUMERIC_ENUM_KINDS = frozenset({"integer", "long", "number", "int", "float", "double"})

_NUMERIC_PUNCTUATION = (("-", "Minus"), ("+", "Plus"), (".", "Dot"))

MODEL_PREFIX = "model_"
OPERATION_PREFIX = "call_"
FIELD_DIGIT_PREFIX = "var_"


class IdentifierSanitizer:
    """
    Turns names from an OpenAPI document into legal Rust identifiers.

    Every method is a pure function of its argument and the generator
    context. Re-sanitizing a result gives the same result, except when
    model affixes are configured (they are added again) or a reserved
    word mapping is not itself a plain identifier.
    """

    def __init__(self, context: Optional[GeneratorContext] = None):
        self.context = context or GeneratorContext()
        self.reserved_words = RUST_RESERVED_WORDS | self.context.reserved_words

    def is_reserved_word(self, name: str) -> bool:
        """Exact, case-sensitive keyword check."""
        return name in self.reserved_words

    def escape_reserved_word(self, name: str) -> str:
        """Apply the configured mapping, or prefix with an underscore."""
        mapping = self.context.reserved_word_mappings.get(name)
        if mapping is not None:
            return mapping
        return f"_{name}"

    def to_field_name(self, raw: str) -> Identifier:
        """
        Name of a struct field: ``created-at`` -> ``created_at``.

        SCREAMING_SNAKE names are kept as they are.
        """
        name = sanitize_name(raw.replace("-", "_"))

        if not name.strip("_"):
            name = "field"

        if not is_all_upper_snake(name):
            name = underscore(name)

        if self.is_reserved_word(name):
            escaped = self.escape_reserved_word(name)
            logger.debug("Field '%s' is a reserved word, renamed to '%s'", raw, escaped)
            name = escaped

        if starts_with_digit(name):
            logger.debug("Field '%s' starts with a number, prefixed with '%s'", raw, FIELD_DIGIT_PREFIX)
            name = FIELD_DIGIT_PREFIX + name

        return Identifier(name, IdentifierRole.VARIABLE)

    def to_param_name(self, raw: str) -> Identifier:
        """Name of an operation parameter; same rules as fields."""
        return self.to_field_name(raw)

    def _affixed_model_name(self, raw: str) -> str:
        name = raw
        if self.context.model_name_prefix:
            name = f"{self.context.model_name_prefix}_{name}"
        if self.context.model_name_suffix:
            name = f"{name}_{self.context.model_name_suffix}"
        return sanitize_name(name)

    def check_model_name(self, raw: str) -> Optional[str]:
        """
        Explain why a model would be renamed, if it would be.

        Returns:
            Warning message, or None when the name is used as is
        """
        name = self._affixed_model_name(raw)

        # Round-tripped forms catch names like "_type" that camelize to "Type"
        forms = (
            name,
            underscore(name),
            camelize(name),
            underscore(camelize(name)),
            camelize(underscore(name)),
        )
        if any(self.is_reserved_word(form) for form in forms):
            return (
                f"{name} (reserved word) cannot be used as model name. "
                f"Renamed to {underscore(MODEL_PREFIX + name)}"
            )

        if starts_with_digit(name):
            return (
                f"{name} (model name starts with number) cannot be used as model name. "
                f"Renamed to {underscore(MODEL_PREFIX + name)}"
            )

        return None

    def to_module_name(self, raw: str) -> Identifier:
        """
        Snake-case name of the module (file) holding a model.

        Never logs; callers report renames through ``check_model_name``.
        """
        name = self._affixed_model_name(raw)

        if not name.strip("_"):
            return Identifier("model", IdentifierRole.MODULE)

        if self.check_model_name(raw):
            name = MODEL_PREFIX + name

        return Identifier(underscore(name), IdentifierRole.MODULE)

    def to_type_name(self, raw: str) -> Identifier:
        """
        CamelCase name of a struct or enum.

        ``200response`` -> ``Model200response``, ``self`` -> ``ModelSelf``.
        """
        name = camelize(self.to_module_name(raw).value)
        return Identifier(name or "Model", IdentifierRole.TYPE)

    def to_enum_type_name(self, property_name: str) -> Identifier:
        """Type name of an inline enum declared by a property."""
        name = property_name
        if self.context.enum_name_suffix:
            name = f"{name}_{self.context.enum_name_suffix}"
        return self.to_type_name(name)

    def to_enum_member_name(self, raw, kind: Optional[str] = None) -> Identifier:
        """
        Name of an enum variant.

        Args:
            raw: Enum value as written in the document
            kind: Schema type name of the enum (``integer``, ``string``, ...)

        Returns:
            CamelCase variant name
        """
        value = str(raw) if raw is not None else ""

        if not value:
            return Identifier("Empty", IdentifierRole.ENUM_MEMBER)

        if kind in NUMERIC_ENUM_KINDS:
            for symbol, word in _NUMERIC_PUNCTUATION:
                value = value.replace(symbol, word)
            name = sanitize_name(value)
        elif value in SYMBOL_NAMES:
            return Identifier(SYMBOL_NAMES[value], IdentifierRole.ENUM_MEMBER)
        else:
            name = camelize(sanitize_name(value)).strip("_")

        if not name:
            return Identifier("Empty", IdentifierRole.ENUM_MEMBER)

        if self.is_reserved_word(name) or starts_with_digit(name):
            name = self.escape_reserved_word(name)

        return Identifier(name, IdentifierRole.ENUM_MEMBER)

    def check_operation_name(self, operation_id: str) -> Optional[str]:
        """Explain why an operation function would be renamed, if it would be."""
        name = underscore(sanitize_name(operation_id))

        if self.is_reserved_word(name):
            return (
                f"{operation_id} (reserved word) cannot be used as method name. "
                f"Renamed to {OPERATION_PREFIX}{name}"
            )

        if starts_with_digit(name):
            return (
                f"{operation_id} (starting with a number) cannot be used as method name. "
                f"Renamed to {OPERATION_PREFIX}{name}"
            )

        return None

    def to_operation_name(self, operation_id: str) -> Identifier:
        """Snake-case name of the API function for an operation."""
        name = underscore(sanitize_name(operation_id))

        if not name.strip("_"):
            name = "operation"

        rename_warning = self.check_operation_name(operation_id)
        if rename_warning:
            logger.warning(rename_warning)
            name = OPERATION_PREFIX + name

        return Identifier(name, IdentifierRole.OPERATION)

    def to_api_module_name(self, tag: str) -> Identifier:
        """Module holding the operations of a tag: ``Pet Store`` -> ``pet_store_api``."""
        name = underscore(sanitize_name(tag.replace("-", "_")))
        if not name.strip("_"):
            name = "default"
        return Identifier(f"{name}_api", IdentifierRole.MODULE)


def create_rust_sanitizer(context: Optional[GeneratorContext] = None) -> IdentifierSanitizer:
    """Create a name sanitizer configured for Rust."""
    return IdentifierSanitizer(context)
