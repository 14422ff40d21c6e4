"""Key types of the PSBT global and output maps, key pairs and proprietary keys."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Generic, Mapping, TypeVar

from bpstd.version import PsbtVer

__all__ = [
    "KeyType",
    "GlobalKey",
    "OutputKey",
    "KeyPair",
    "PropKey",
]

PROPRIETARY_CODE = 0xFC

_U8_MAX = 0xFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class _KeySpec:
    """Static properties of a standard key type."""

    name: str
    has_key_data: bool
    present_since: PsbtVer = PsbtVer.V0
    deprecated_since: PsbtVer | None = None
    required: bool = False


@total_ordering
@dataclass(frozen=True)
class KeyType:
    """A PSBT key type byte interpreted within one kind of map.

    Subclasses describe their standard key types in ``_SPECS``, in the order
    in which they are encoded. The proprietary type and every other byte are
    handled uniformly: both carry key data, are present since v0, are never
    deprecated and never required.
    """

    code: int

    _SPECS: ClassVar[Mapping[int, _KeySpec]] = {}

    def __post_init__(self) -> None:
        if not isinstance(self.code, int) or not 0 <= self.code <= _U8_MAX:
            raise ValueError(f"key type {self.code!r} is not a byte value")

    @classmethod
    def from_u8(cls, value: int) -> KeyType:
        """Return the key type for a raw type byte."""
        return cls(value)

    @classmethod
    def unknown(cls, value: int) -> KeyType:
        """Return a key type for a byte that is not one of the standard types."""
        if value in cls._SPECS:
            raise ValueError(f"key type {value:#04x} is a standard {cls.__name__}")
        return cls(value)

    @classmethod
    def standard(cls) -> tuple[KeyType, ...]:
        """All standard key types, in encoding order."""
        return tuple(cls(code) for code in cls._SPECS)

    def to_u8(self) -> int:
        """The raw type byte."""
        return self.code

    def is_standard(self) -> bool:
        """Whether this is one of the standard (non-proprietary, known) key types."""
        return self.code in self._SPECS

    def _spec(self) -> _KeySpec | None:
        return self._SPECS.get(self.code)

    @property
    def name(self) -> str:
        """Symbolic name of the key type."""
        spec = self._spec()
        if spec is not None:
            return spec.name
        if self.is_proprietary():
            return "PROPRIETARY"
        return f"UNKNOWN_{self.code:#04x}"

    def has_key_data(self) -> bool:
        """Whether keys of this type carry key data after the type byte."""
        spec = self._spec()
        return True if spec is None else spec.has_key_data

    def present_since(self) -> PsbtVer:
        """The first PSBT version that defines this key type."""
        spec = self._spec()
        return PsbtVer.V0 if spec is None else spec.present_since

    def deprecated_since(self) -> PsbtVer | None:
        """The PSBT version from which this key type is no longer allowed."""
        spec = self._spec()
        return None if spec is None else spec.deprecated_since

    def is_allowed(self, version: PsbtVer) -> bool:
        """Whether the key type may appear in a PSBT of the given version."""
        if version < self.present_since():
            return False
        deprecated = self.deprecated_since()
        return deprecated is None or version < deprecated

    def is_required(self) -> bool:
        """Whether the key type must be present in the versions that allow it."""
        spec = self._spec()
        return False if spec is None else spec.required

    def is_proprietary(self) -> bool:
        """Whether this is the proprietary key type."""
        return self.code == PROPRIETARY_CODE and self.code not in self._SPECS

    def _rank(self) -> tuple[int, int]:
        codes = list(self._SPECS)
        if self.code in self._SPECS:
            return codes.index(self.code), self.code
        if self.is_proprietary():
            return len(codes), self.code
        return len(codes) + 1, self.code

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, KeyType)
        return self._rank() < other._rank()

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


class GlobalKey(KeyType):
    """Key types of the PSBT global map."""

    UNSIGNED_TX: ClassVar[GlobalKey]
    XPUB: ClassVar[GlobalKey]
    TX_VERSION: ClassVar[GlobalKey]
    FALLBACK_LOCKTIME: ClassVar[GlobalKey]
    INPUT_COUNT: ClassVar[GlobalKey]
    OUTPUT_COUNT: ClassVar[GlobalKey]
    TX_MODIFIABLE: ClassVar[GlobalKey]
    VERSION: ClassVar[GlobalKey]
    PROPRIETARY: ClassVar[GlobalKey]

    _SPECS: ClassVar[Mapping[int, _KeySpec]] = {
        0x00: _KeySpec(
            "UNSIGNED_TX", False, PsbtVer.V0, deprecated_since=PsbtVer.V2, required=True
        ),
        0x01: _KeySpec("XPUB", True),
        0x02: _KeySpec("TX_VERSION", False, PsbtVer.V2, required=True),
        0x03: _KeySpec("FALLBACK_LOCKTIME", False, PsbtVer.V2),
        0x04: _KeySpec("INPUT_COUNT", False, PsbtVer.V2, required=True),
        0x05: _KeySpec("OUTPUT_COUNT", False, PsbtVer.V2, required=True),
        0x06: _KeySpec("TX_MODIFIABLE", False, PsbtVer.V2),
        0xFB: _KeySpec("VERSION", False),
    }


GlobalKey.UNSIGNED_TX = GlobalKey(0x00)
GlobalKey.XPUB = GlobalKey(0x01)
GlobalKey.TX_VERSION = GlobalKey(0x02)
GlobalKey.FALLBACK_LOCKTIME = GlobalKey(0x03)
GlobalKey.INPUT_COUNT = GlobalKey(0x04)
GlobalKey.OUTPUT_COUNT = GlobalKey(0x05)
GlobalKey.TX_MODIFIABLE = GlobalKey(0x06)
GlobalKey.VERSION = GlobalKey(0xFB)
GlobalKey.PROPRIETARY = GlobalKey(PROPRIETARY_CODE)


class OutputKey(KeyType):
    """Key types of a PSBT output map."""

    REDEEM_SCRIPT: ClassVar[OutputKey]
    WITNESS_SCRIPT: ClassVar[OutputKey]
    BIP32_DERIVATION: ClassVar[OutputKey]
    AMOUNT: ClassVar[OutputKey]
    SCRIPT: ClassVar[OutputKey]
    TAP_INTERNAL_KEY: ClassVar[OutputKey]
    TAP_TREE: ClassVar[OutputKey]
    TAP_BIP32_DERIVATION: ClassVar[OutputKey]
    PROPRIETARY: ClassVar[OutputKey]

    _SPECS: ClassVar[Mapping[int, _KeySpec]] = {
        0x00: _KeySpec("REDEEM_SCRIPT", False),
        0x01: _KeySpec("WITNESS_SCRIPT", False),
        0x02: _KeySpec("BIP32_DERIVATION", True),
        0x03: _KeySpec("AMOUNT", False, PsbtVer.V2, required=True),
        0x04: _KeySpec("SCRIPT", False, PsbtVer.V2, required=True),
        0x05: _KeySpec("TAP_INTERNAL_KEY", False),
        0x06: _KeySpec("TAP_TREE", False),
        0x07: _KeySpec("TAP_BIP32_DERIVATION", True),
    }


OutputKey.REDEEM_SCRIPT = OutputKey(0x00)
OutputKey.WITNESS_SCRIPT = OutputKey(0x01)
OutputKey.BIP32_DERIVATION = OutputKey(0x02)
OutputKey.AMOUNT = OutputKey(0x03)
OutputKey.SCRIPT = OutputKey(0x04)
OutputKey.TAP_INTERNAL_KEY = OutputKey(0x05)
OutputKey.TAP_TREE = OutputKey(0x06)
OutputKey.TAP_BIP32_DERIVATION = OutputKey(0x07)
OutputKey.PROPRIETARY = OutputKey(PROPRIETARY_CODE)


K = TypeVar("K", bound=KeyType)
D = TypeVar("D")
V = TypeVar("V")


@dataclass
class KeyPair(Generic[K, D, V]):
    """A key type with its key data and value data."""

    key_type: K
    key_data: D
    value_data: V


@dataclass(frozen=True, order=True)
class PropKey:
    """Key of a proprietary PSBT entry."""

    identifier: str
    subtype: int
    data: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.subtype <= _U64_MAX:
            raise ValueError(f"proprietary key subtype {self.subtype} is out of range")
        object.__setattr__(self, "data", bytes(self.data))

    def __str__(self) -> str:
        return f"{self.identifier} {self.subtype:#x} {self.data.hex()}"