"""
Naming primitives for safe code generation.

Language-agnostic building blocks used by the target-specific sanitizers:
stripping characters that cannot appear in identifiers, and converting
between snake_case and CamelCase the same way for every target.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...logging_config import get_logger

logger = get_logger(__name__)


class IdentifierRole(Enum):
    """Syntactic role an identifier plays in generated code."""

    VARIABLE = "variable"  # struct fields, function parameters
    TYPE = "type"  # structs, enums
    ENUM_MEMBER = "enum_member"
    MODULE = "module"  # model and api file names
    OPERATION = "operation"  # api functions


@dataclass(frozen=True)
class Identifier:
    """A resolved, legal identifier tagged with its role."""

    value: str
    role: IdentifierRole

    def __str__(self) -> str:
        return self.value


# Characters replaced by an underscore before anything else is stripped
_SEPARATORS = (".", "-", "|", " ", "/", "\\")

_NON_WORD = re.compile(r"\W", re.ASCII)
_LEADING_DIGIT = re.compile(r"^\d", re.ASCII)

_UNDERSCORE_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z][a-z]+)")
_UNDERSCORE_WORD = re.compile(r"([a-z\d])([A-Z])", re.ASCII)

_CAMELIZE_UNDERSCORE = re.compile(r"_(.)", re.DOTALL)
_CAMELIZE_HYPHEN = re.compile(r"-(.)", re.DOTALL)


def sanitize_name(name: Optional[str]) -> str:
    """
    Strip everything that cannot appear in an identifier.

    Brackets and separators become underscores so that word boundaries
    survive (``input[a][b]`` -> ``input_a_b``, ``created-at`` ->
    ``created_at``); any other non-word ASCII character is dropped.

    Args:
        name: Raw name from the source document

    Returns:
        Sanitized name, possibly empty
    """
    if name is None:
        logger.error("Name to be sanitized is None, defaulting to ERROR_UNKNOWN")
        return "ERROR_UNKNOWN"

    # A bare '$' is commonly used for "the value itself"
    if name == "$":
        return "value"

    name = name.replace("[]", "")
    name = name.replace("[", "_").replace("]", "")
    name = name.replace("(", "_").replace(")", "")
    for separator in _SEPARATORS:
        name = name.replace(separator, "_")

    return _NON_WORD.sub("", name)


def underscore(word: str) -> str:
    """
    Convert to snake_case.

    ``PetId`` -> ``pet_id``, ``HTTPServer`` -> ``http_server``.
    """
    result = word.replace(".", "/")
    result = result.replace("$", "__")
    result = _UNDERSCORE_ACRONYM.sub(r"\1_\2", result)
    result = _UNDERSCORE_WORD.sub(r"\1_\2", result)
    result = result.replace("-", "_").replace(" ", "_")
    return result.lower()


def _replace_repeatedly(pattern: re.Pattern, word: str) -> str:
    """Replace ``<sep><char>`` with the upper-cased char until none remain."""
    match = pattern.search(word)
    while match:
        word = word[: match.start()] + match.group(1).upper() + word[match.end() :]
        match = pattern.search(word)
    return word


def camelize(word: str) -> str:
    """
    Convert to CamelCase with an upper-case first letter.

    ``phone_number`` -> ``PhoneNumber``, ``model_200_response`` ->
    ``Model200Response``. Separators followed by a character without a
    case (digits, another underscore) are simply dropped.
    """
    if not word:
        return word

    word = "".join(part[:1].upper() + part[1:] for part in word.split("/"))
    word = word[:1].upper() + word[1:]
    word = _replace_repeatedly(_CAMELIZE_UNDERSCORE, word)
    word = _replace_repeatedly(_CAMELIZE_HYPHEN, word)

    return word.replace("_", "")


def starts_with_digit(name: str) -> bool:
    """Check whether a name begins with an ASCII digit."""
    return bool(_LEADING_DIGIT.match(name))


def is_all_upper_snake(name: str) -> bool:
    """Check for SCREAMING_SNAKE names (upper-case letters and underscores only)."""
    return all(char == "_" or "A" <= char <= "Z" for char in name)
