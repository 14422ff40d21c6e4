"""Transaction input sequence numbers: replace-by-fee and relative time locks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "SEQ_NO_MAX_VALUE",
    "SEQ_NO_SUBMAX_VALUE",
    "SEQ_NO_CSV_DISABLE_MASK",
    "SEQ_NO_CSV_TYPE_MASK",
    "SeqNoClass",
    "SeqNo",
    "RbfParseError",
    "InvalidNumber",
    "InvalidDescriptor",
    "NoRand",
    "Rbf",
]

SEQ_NO_MAX_VALUE = 0xFFFFFFFF
SEQ_NO_SUBMAX_VALUE = 0xFFFFFFFE
SEQ_NO_CSV_DISABLE_MASK = 0x80000000
SEQ_NO_CSV_TYPE_MASK = 0x00400000

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_NUMBER = re.compile(r"\+?[0-9]+")


class SeqNoClass(Enum):
    """Classes of nSeq values."""

    UNENCUMBERED = "unencumbered"
    """No RBF and no time lock: 0xFFFFFFFF and 0xFFFFFFFE."""
    RBF_ONLY = "rbf-only"
    """RBF opt-in without a time lock."""
    RELATIVE_TIME = "relative-time"
    """RBF with a relative time-based lock."""
    RELATIVE_HEIGHT = "relative-height"
    """RBF with a relative height-based lock."""


def _check_range(value: int, limit: int, what: str) -> int:
    if not 0 <= value <= limit:
        raise ValueError(f"{what} {value} is out of range 0..={limit}")
    return value


@dataclass(frozen=True, order=True)
class SeqNo:
    """Input sequence number (nSeq)."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, _U32_MAX, "sequence number")

    def classify(self) -> SeqNoClass:
        """Classify the nSeq value."""
        no = self.value
        if no in (SEQ_NO_MAX_VALUE, SEQ_NO_SUBMAX_VALUE):
            return SeqNoClass.UNENCUMBERED
        if no & SEQ_NO_CSV_DISABLE_MASK:
            return SeqNoClass.RBF_ONLY
        if no & SEQ_NO_CSV_TYPE_MASK:
            return SeqNoClass.RELATIVE_TIME
        return SeqNoClass.RELATIVE_HEIGHT

    def is_rbf(self) -> bool:
        """Whether the value opts in to replace-by-fee (true for relative locks too)."""
        return self.value < SEQ_NO_SUBMAX_VALUE

    @classmethod
    def from_rbf(cls, order: int) -> SeqNo:
        """Replace-by-fee value with the given 16-bit order number."""
        return cls(_check_range(order, _U16_MAX, "order") | SEQ_NO_CSV_DISABLE_MASK)

    @classmethod
    def from_intervals(cls, intervals: int) -> SeqNo:
        """Relative time lock measured in 512-second intervals."""
        return cls(_check_range(intervals, _U16_MAX, "interval count") | SEQ_NO_CSV_TYPE_MASK)

    @classmethod
    def from_height(cls, height: int) -> SeqNo:
        """Relative time lock measured in blocks."""
        return cls(_check_range(height, _U16_MAX, "height"))


class RbfParseError(ValueError):
    """Error parsing a sequence number descriptor."""


class InvalidNumber(RbfParseError):
    """The number in the descriptor is not valid."""

    def __init__(self, text: str) -> None:
        super().__init__("invalid number in time lock descriptor")
        self.text = text


class InvalidDescriptor(RbfParseError):
    """The descriptor is not recognised."""

    def __init__(self, descriptor: str) -> None:
        super().__init__(f"time lock descriptor `{descriptor}` is not recognized")
        self.descriptor = descriptor


class NoRand(RbfParseError):
    """Randomly generated RBF sequence numbers are not available."""

    def __init__(self) -> None:
        super().__init__(
            "use of randomly-generated RBF sequence numbers requires compilation "
            "with `rand` feature"
        )


def _parse_uint(text: str, limit: int) -> int:
    if not _NUMBER.fullmatch(text):
        raise InvalidNumber(text)
    value = int(text)
    if value > limit:
        raise InvalidNumber(text)
    return value


@dataclass(frozen=True, order=True)
class Rbf:
    """Sequence number with a human-readable form."""

    seq_no: SeqNo

    @classmethod
    def unencumbered(cls, max_value: bool) -> Rbf:
        """Value free of RBF and time locks: 0xFFFFFFFF if max_value else 0xFFFFFFFE."""
        return cls(SeqNo(SEQ_NO_MAX_VALUE if max_value else SEQ_NO_SUBMAX_VALUE))

    @classmethod
    def from_rbf(cls, order: int) -> Rbf:
        """Replace-by-fee value with the given order number."""
        return cls(SeqNo.from_rbf(order))

    @classmethod
    def rbf(cls) -> Rbf:
        """Replace-by-fee value 0xFFFFFFFD."""
        return cls(SeqNo(SEQ_NO_SUBMAX_VALUE - 1))

    @classmethod
    def parse(cls, text: str) -> Rbf:
        """Parse a descriptor such as ``rbf(5)``, ``time(10)``, ``height(6)`` or a number."""
        s = text.lower()
        if s == "rbf":
            raise NoRand()
        if s.startswith("rbf(") and s.endswith(")"):
            return cls(SeqNo.from_rbf(_parse_uint(s[4:].rstrip(")"), _U16_MAX)))
        if s.startswith("time(") and s.endswith(")"):
            return cls(SeqNo.from_intervals(_parse_uint(s[5:].rstrip(")"), _U16_MAX)))
        if s.startswith("height(") and s.endswith(")"):
            return cls(SeqNo.from_height(_parse_uint(s[7:].rstrip(")"), _U16_MAX)))
        return cls(SeqNo(_parse_uint(s, _U32_MAX)))

    def __str__(self) -> str:
        value = self.seq_no.value
        kind = self.seq_no.classify()
        if kind is SeqNoClass.UNENCUMBERED:
            if value == SEQ_NO_MAX_VALUE:
                return "final(0xFFFFFFFF)"
            return "non-rbf(0xFFFFFFFE)"
        if kind is SeqNoClass.RBF_ONLY:
            return f"rbf({value ^ SEQ_NO_CSV_DISABLE_MASK})"
        if (value >> 16) & 0xFFBF:
            return str(value)
        if kind is SeqNoClass.RELATIVE_TIME:
            return f"time({value & 0xFFFF})"
        return f"height({value & 0xFFFF})"