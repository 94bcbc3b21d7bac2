"""
Rust integer width resolution.

Picks the narrowest native integer that holds every value a schema allows,
from its bounds and format.
"""

from typing import Optional, Union

from ....logging_config import get_logger
from ...core.config import IntegerWidthPolicy
from ...core.generator import GeneratorError

logger = get_logger(__name__)

Bound = Optional[Union[int, float]]


class IntegerConstraintError(GeneratorError):
    """Bounds contradict the requested signedness (e.g. unsigned with a negative minimum)."""

    pass


# Formats mapped straight to a width, bypassing the bounds
STANDARD_FORMATS = {"int32": 32, "int64": 64}

# Widths of non-standard formats, used by IntegerWidthPolicy.EXPLICIT only.
# Signed formats lose one bit to the sign.
FORMAT_BITS = {
    "uint8": 8,
    "int8": 7,
    "uint16": 16,
    "int16": 15,
    "uint32": 32,
    "int32": 31,
    "uint64": 64,
    "int64": 63,
}

# Largest bit count of a minimum still allowed to fall back to usize/isize
ARCH_WIDTH_MAX_BITS = 16


def required_bits(value: Optional[int], unsigned: bool) -> int:
    """
    Number of bits needed to represent ``value``.

    Zero and one both need a single bit. For signed values a negative ``v``
    costs as much as ``-v - 1``, so ``-128`` fits the same 8 bits as ``127``.
    Absent bounds need no bits at all.
    """
    if value is None:
        return 0

    if unsigned:
        return (value >> 1).bit_length() + 1

    magnitude = value if value >= 0 else -value - 1
    return magnitude.bit_length() + 1


def _normalize(value: Bound, exclusive: bool, step: int) -> Optional[int]:
    """Truncate a bound to an integer and move exclusive bounds inward by ``step``."""
    if value is None:
        return None

    value = int(value)
    return value + step if exclusive else value


def _ladder(bits: int) -> int:
    if bits <= 8:
        return 8
    if bits <= 16:
        return 16
    if bits <= 32:
        return 32
    return 64


class IntegerWidthResolver:
    """Resolves integer schemas to ``u8``..``u64``, ``i8``..``i64``, ``usize`` or ``isize``."""

    def __init__(self, policy: IntegerWidthPolicy = IntegerWidthPolicy.COMPATIBLE):
        self.policy = IntegerWidthPolicy(policy)

    def resolve(
        self,
        minimum: Bound = None,
        exclusive_minimum: bool = False,
        maximum: Bound = None,
        exclusive_maximum: bool = False,
        format: Optional[str] = None,
        unsigned: Optional[bool] = None,
    ) -> str:
        """
        Resolve the native integer type for the given constraints.

        Args:
            minimum: Lower bound, or None if unbounded
            exclusive_minimum: Whether ``minimum`` itself is excluded
            maximum: Upper bound, or None if unbounded
            exclusive_maximum: Whether ``maximum`` itself is excluded
            format: Schema format (``int32``, ``int64``, ``uint8``, ...)
            unsigned: Force signedness; derived from the minimum when None
                (and from ``uint*`` formats under the explicit policy)

        Returns:
            Rust integer type name

        Raises:
            IntegerConstraintError: If an unsigned type has a negative bound
        """
        lower = _normalize(minimum, exclusive_minimum, 1)
        upper = _normalize(maximum, exclusive_maximum, -1)

        if unsigned is None:
            unsigned = lower is not None and lower >= 0
            if self.policy is IntegerWidthPolicy.EXPLICIT and format:
                unsigned = unsigned or format.startswith("uint")

        if unsigned:
            for label, bound in (("minimum", lower), ("maximum", upper)):
                if bound is not None and bound < 0:
                    raise IntegerConstraintError(
                        f"Unsigned integer cannot have a negative {label} ({bound})"
                    )

        prefix = "u" if unsigned else "i"

        if format in STANDARD_FORMATS:
            return f"{prefix}{STANDARD_FORMATS[format]}"

        min_bits = required_bits(lower, unsigned)
        max_bits = required_bits(upper, unsigned)
        bits = max(min_bits, max_bits)

        if (
            self.policy is IntegerWidthPolicy.EXPLICIT
            and max_bits == 0
            and format in FORMAT_BITS
        ):
            max_bits = FORMAT_BITS[format]
            bits = max(bits, max_bits)

        if max_bits == 0 and min_bits <= ARCH_WIDTH_MAX_BITS:
            return f"{prefix}size"

        resolved = f"{prefix}{_ladder(bits)}"
        logger.debug(
            "Integer [%s, %s] format=%s resolved to %s", lower, upper, format, resolved
        )
        return resolved


def resolve_integer_type(
    minimum: Bound = None,
    exclusive_minimum: bool = False,
    maximum: Bound = None,
    exclusive_maximum: bool = False,
    format: Optional[str] = None,
    unsigned: Optional[bool] = None,
    policy: IntegerWidthPolicy = IntegerWidthPolicy.COMPATIBLE,
) -> str:
    """Convenience wrapper around ``IntegerWidthResolver(policy).resolve``."""
    return IntegerWidthResolver(policy).resolve(
        minimum=minimum,
        exclusive_minimum=exclusive_minimum,
        maximum=maximum,
        exclusive_maximum=exclusive_maximum,
        format=format,
        unsigned=unsigned,
    )
