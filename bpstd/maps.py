"""Raw PSBT key-value maps and the checks applied to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterable, TypeVar

from bpstd.keys import KeyPair, KeyType, PropKey
from bpstd.version import PsbtVer

__all__ = [
    "MapName",
    "PsbtMapError",
    "RepeatedKey",
    "RepeatedPropKey",
    "RepeatedUnknownKey",
    "NonEmptyKeyData",
    "UnexpectedKey",
    "DeprecatedKey",
    "RequiredKeyAbsent",
    "Map",
]

K = TypeVar("K", bound=KeyType)


class MapName(Enum):
    """Which of the PSBT maps a key-value set belongs to."""

    GLOBAL = "global"
    INPUT = "input"
    OUTPUT = "output"

    def __str__(self) -> str:
        return self.value


class PsbtMapError(ValueError):
    """A PSBT map is malformed or not valid for its version."""


class RepeatedKey(PsbtMapError):
    """A standard key appears more than once in a map."""

    def __init__(self, map_name: MapName, key_type: int) -> None:
        super().__init__(f"repeated key {key_type:#04x} in {map_name} map")
        self.map_name = map_name
        self.key_type = key_type


class RepeatedPropKey(PsbtMapError):
    """A proprietary key appears more than once in a map."""

    def __init__(self, map_name: MapName, prop_key: PropKey) -> None:
        super().__init__(f"repeated proprietary key '{prop_key}' in {map_name} map")
        self.map_name = map_name
        self.prop_key = prop_key


class RepeatedUnknownKey(PsbtMapError):
    """An unknown key with the same key data appears more than once in a map."""

    def __init__(self, map_name: MapName, key_type: int) -> None:
        super().__init__(f"repeated unknown key {key_type:#04x} in {map_name} map")
        self.map_name = map_name
        self.key_type = key_type


class NonEmptyKeyData(PsbtMapError):
    """A key type that takes no key data was given some."""

    def __init__(self, map_name: MapName, key_type: int, key_data: bytes) -> None:
        super().__init__(
            f"key {key_type:#04x} in {map_name} map must have empty key data, "
            f"but has {key_data.hex()}"
        )
        self.map_name = map_name
        self.key_type = key_type
        self.key_data = key_data


class UnexpectedKey(PsbtMapError):
    """A key type that does not exist yet in the PSBT version."""

    def __init__(self, map_name: MapName, key_type: int, version: PsbtVer) -> None:
        super().__init__(
            f"key {key_type:#04x} in {map_name} map is not allowed in PSBT {version}"
        )
        self.map_name = map_name
        self.key_type = key_type
        self.version = version


class DeprecatedKey(PsbtMapError):
    """A key type that is deprecated in the PSBT version."""

    def __init__(self, map_name: MapName, key_type: int, version: PsbtVer) -> None:
        super().__init__(
            f"key {key_type:#04x} in {map_name} map is deprecated in PSBT {version}"
        )
        self.map_name = map_name
        self.key_type = key_type
        self.version = version


class RequiredKeyAbsent(PsbtMapError):
    """A key type required by the PSBT version is missing."""

    def __init__(self, map_name: MapName, key_type: int, version: PsbtVer) -> None:
        super().__init__(
            f"required key {key_type:#04x} is absent from {map_name} map in PSBT {version}"
        )
        self.map_name = map_name
        self.key_type = key_type
        self.version = version


def _read_compact_size(data: bytes, pos: int) -> tuple[int, int]:
    if pos >= len(data):
        raise PsbtMapError("unexpected end of proprietary key data")
    first = data[pos]
    pos += 1
    width = {0xFD: 2, 0xFE: 4, 0xFF: 8}.get(first)
    if width is None:
        return first, pos
    if pos + width > len(data):
        raise PsbtMapError("unexpected end of proprietary key data")
    return int.from_bytes(data[pos : pos + width], "little"), pos + width


def _decode_prop_key(key_data: bytes | PropKey) -> PropKey:
    """Decode proprietary key data: identifier, subtype and trailing key data."""
    if isinstance(key_data, PropKey):
        return key_data
    data = bytes(key_data)
    length, pos = _read_compact_size(data, 0)
    if pos + length > len(data):
        raise PsbtMapError("proprietary key identifier exceeds key data")
    try:
        identifier = data[pos : pos + length].decode("utf-8")
    except UnicodeDecodeError as err:
        raise PsbtMapError("proprietary key identifier is not valid UTF-8") from err
    subtype, pos = _read_compact_size(data, pos + length)
    return PropKey(identifier, subtype, data[pos:])


@dataclass
class Map(Generic[K]):
    """Key-value pairs of one PSBT map, sorted into their kinds."""

    name: MapName
    key_class: type[K]
    singular: dict[K, bytes] = field(default_factory=dict)
    plural: dict[K, dict[bytes, bytes]] = field(default_factory=dict)
    proprietary: dict[PropKey, bytes] = field(default_factory=dict)
    unknown: dict[int, dict[bytes, bytes]] = field(default_factory=dict)

    @classmethod
    def parse(
        cls, name: MapName, key_class: type[K], pairs: Iterable[KeyPair]
    ) -> Map[K]:
        """Build a map from key pairs, rejecting repeated and malformed keys."""
        result = cls(name, key_class)
        for pair in pairs:
            result.insert(pair)
        return result

    def _key_type(self, raw: KeyType | int) -> K:
        if isinstance(raw, self.key_class):
            return raw
        if isinstance(raw, KeyType):
            return self.key_class.from_u8(raw.to_u8())  # type: ignore[return-value]
        return self.key_class.from_u8(raw)  # type: ignore[return-value]

    def insert(self, pair: KeyPair) -> None:
        """Add one key pair to the map."""
        key_type = self._key_type(pair.key_type)
        code = key_type.to_u8()
        value = bytes(pair.value_data)
        if key_type in self.singular:
            raise RepeatedKey(self.name, code)
        if key_type.is_proprietary():
            prop_key = _decode_prop_key(pair.key_data)
            if prop_key in self.proprietary:
                raise RepeatedPropKey(self.name, prop_key)
            self.proprietary[prop_key] = value
            return
        key_data = bytes(pair.key_data)
        if key_type.is_standard():
            if key_type.has_key_data():
                submap = self.plural.setdefault(key_type, {})
                if key_data in submap:
                    raise RepeatedKey(self.name, code)
                submap[key_data] = value
            else:
                if key_data:
                    raise NonEmptyKeyData(self.name, code, key_data)
                self.singular[key_type] = value
            return
        submap = self.unknown.setdefault(code, {})
        if key_data in submap:
            raise RepeatedUnknownKey(self.name, code)
        submap[key_data] = value

    def check(self, version: PsbtVer) -> None:
        """Verify that the keys present fit the given PSBT version."""
        for key_type in [*sorted(self.singular), *sorted(self.plural)]:
            if version < key_type.present_since():
                raise UnexpectedKey(self.name, key_type.to_u8(), version)
            deprecated = key_type.deprecated_since()
            if deprecated is not None and version >= deprecated:
                raise DeprecatedKey(self.name, key_type.to_u8(), version)
        for key_type in self.key_class.standard():
            deprecated = key_type.deprecated_since()
            if not (
                key_type.is_required()
                and version >= key_type.present_since()
                and deprecated is not None
                and version < deprecated
            ):
                continue
            present = (
                key_type in self.plural
                if key_type.has_key_data()
                else key_type in self.singular
            )
            if not present:
                raise RequiredKeyAbsent(self.name, key_type.to_u8(), version)