"""PSBT format versions."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["PsbtUnsupportedVer", "PsbtVer"]


class PsbtUnsupportedVer(ValueError):
    """Raised for a PSBT version number that is not supported."""

    def __init__(self, version: int) -> None:
        super().__init__(f"unsupported version of PSBT v{version}")
        self.version = version

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PsbtUnsupportedVer):
            return NotImplemented
        return self.version == other.version

    def __hash__(self) -> int:
        return hash((PsbtUnsupportedVer, self.version))


class PsbtVer(IntEnum):
    """Version of the PSBT format."""

    V0 = 0
    V2 = 2

    @classmethod
    def try_from_standard_u32(cls, value: int) -> PsbtVer:
        """Return the version for a standard version number."""
        try:
            return cls(value)
        except ValueError:
            raise PsbtUnsupportedVer(value) from None

    @classmethod
    def try_from(cls, value: int) -> PsbtVer:
        """Return the version for an arbitrary non-negative integer."""
        try:
            return cls(value)
        except ValueError:
            raise PsbtUnsupportedVer(value & 0xFFFFFFFF) from None

    def to_standard_u32(self) -> int:
        """Return the version number as used in the PSBT encoding."""
        return int(self.value)

    @classmethod
    def max(cls) -> PsbtVer:
        """Return the most recent supported version."""
        return cls.V2

    def __str__(self) -> str:
        return f"v{self.value}"