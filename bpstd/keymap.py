"""PSBT key maps: proprietary and unknown entries, and absorbing parsed maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from bpstd.keys import KeyPair, KeyType, PropKey
from bpstd.maps import Map
from bpstd.version import PsbtVer

__all__ = ["KeyAlreadyPresent", "KeyMap"]


class KeyAlreadyPresent(ValueError):
    """A proprietary key is already present with a different value."""

    def __init__(self, key: PropKey) -> None:
        super().__init__(f"proprietary key '{key}' is already present")
        self.key = key


@dataclass
class KeyMap:
    """Key-value content of one PSBT map.

    Standard entries are kept as raw values in ``singular`` and ``plural``;
    subclasses that decode them override ``_insert_singular`` and
    ``_insert_plural``. Proprietary and unknown entries are kept in the order
    in which they were added.
    """

    key_class: type[KeyType]
    singular: dict[KeyType, bytes] = field(default_factory=dict)
    plural: dict[KeyType, dict[bytes, bytes]] = field(default_factory=dict)
    proprietary: dict[PropKey, bytes] = field(default_factory=dict)
    unknown: dict[int, dict[bytes, bytes]] = field(default_factory=dict)

    def has_proprietary(self, key: PropKey) -> bool:
        """Whether a value is stored under the proprietary key."""
        return key in self.proprietary

    def proprietary_value(self, key: PropKey) -> bytes | None:
        """The value stored under the proprietary key, if any."""
        return self.proprietary.get(key)

    def push_proprietary(self, key: PropKey, value: bytes) -> bool:
        """Add a proprietary entry.

        Returns True if the entry was added and False if the same value was
        already present; raises KeyAlreadyPresent if a different value is.
        """
        value = bytes(value)
        existing = self.proprietary.get(key)
        if existing is not None:
            if existing != value:
                raise KeyAlreadyPresent(key)
            return False
        self.proprietary[key] = value
        return True

    def remove_proprietary(self, key: PropKey) -> bytes | None:
        """Remove a proprietary entry and return its value, if it was present."""
        return self.proprietary.pop(key, None)

    def insert_proprietary(self, key: PropKey, value: bytes) -> None:
        """Store a proprietary entry, replacing any previous value."""
        self.proprietary[key] = bytes(value)

    def insert_unknown(self, key_type: int, key_data: bytes, value_data: bytes) -> None:
        """Store an entry of an unknown key type."""
        self.unknown.setdefault(key_type, {})[bytes(key_data)] = bytes(value_data)

    def _insert_singular(self, key_type: KeyType, value_data: bytes) -> None:
        self.singular[key_type] = value_data

    def _insert_plural(self, key_type: KeyType, key_data: bytes, value_data: bytes) -> None:
        self.plural.setdefault(key_type, {})[key_data] = value_data

    def absorb(self, version: PsbtVer, map: Map) -> None:
        """Check a parsed map against the version and take over all its entries."""
        if map.key_class is not self.key_class:
            raise TypeError(
                f"cannot absorb a map of {map.key_class.__name__} keys into a map "
                f"of {self.key_class.__name__} keys"
            )
        map.check(version)
        for key_type, value in map.singular.items():
            self._insert_singular(key_type, value)
        for key_type, submap in map.plural.items():
            for key_data, value in submap.items():
                self._insert_plural(key_type, key_data, value)
        for prop_key, value in map.proprietary.items():
            self.insert_proprietary(prop_key, value)
        for code, submap in map.unknown.items():
            for key_data, value in submap.items():
                self.insert_unknown(code, key_data, value)

    def extra_pairs(self) -> Iterator[KeyPair]:
        """Key pairs of the unknown entries, then of the proprietary ones."""
        for code, submap in self.unknown.items():
            key_type = self.key_class.unknown(code)
            for key_data, value in submap.items():
                yield KeyPair(key_type, key_data, value)
        proprietary_type = self.key_class.from_u8(0xFC)
        for prop_key, value in self.proprietary.items():
            yield KeyPair(proprietary_type, prop_key, value)