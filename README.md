# bpstd

Building blocks for Partially Signed Bitcoin Transactions (PSBT, BIP-174 /
BIP-370 / BIP-371) and for transaction input sequence numbers.

## Modules

- `bpstd.version` – `PsbtVer` (`V0` and `V2`) and the `PsbtUnsupportedVer`
  error (a `ValueError`).
- `bpstd.rbf` – `SeqNo` with its `SeqNoClass` classification, and `Rbf`,
  which parses and prints human-readable `nSequence` descriptors such as
  `rbf(5)`, `time(10)`, `height(144)` or a plain number. Parse failures raise
  subclasses of `RbfParseError`: `InvalidNumber`, `InvalidDescriptor` and
  `NoRand` (the bare descriptor `rbf` is not accepted).
- `bpstd.keys` – the `KeyType` base with `GlobalKey` and `OutputKey`, the
  generic `KeyPair`, and proprietary keys (`PropKey`).
- `bpstd.input_keys` – `InputKey`, the key types of a PSBT input map.
- `bpstd.maps` – `Map`, which sorts raw key pairs into singular, plural,
  proprietary and unknown entries and validates them against a PSBT version.
  Errors are subclasses of `PsbtMapError`: `RepeatedKey`, `RepeatedPropKey`,
  `RepeatedUnknownKey`, `NonEmptyKeyData`, `UnexpectedKey`, `DeprecatedKey`
  and `RequiredKeyAbsent`.
- `bpstd.keymap` – `KeyMap`, a dataclass holding the content of one PSBT map,
  with proprietary and unknown entry management (`push_proprietary`,
  `remove_proprietary`, `insert_unknown`, `absorb`, `extra_pairs`, ...), and
  the `KeyAlreadyPresent` error.

## Installation

```
pip install bpstd
```

## Examples

PSBT versions:

```python
from bpstd.version import PsbtVer, PsbtUnsupportedVer

assert PsbtVer.try_from(2) is PsbtVer.V2
assert str(PsbtVer.max()) == "v2"

try:
    PsbtVer.try_from(1)
except PsbtUnsupportedVer as err:
    print(err)  # unsupported version of PSBT v1
```

Sequence numbers and replace-by-fee:

```python
from bpstd.rbf import Rbf, SeqNoClass

seq = Rbf.parse("rbf(5)")
assert seq.seq_no.classify() is SeqNoClass.RBF_ONLY
assert seq.seq_no.is_rbf()
print(seq)  # rbf(5)

print(Rbf.unencumbered(True))   # final(0xFFFFFFFF)
print(Rbf.parse("height(144)"))  # height(144)
```

Key types and their rules:

```python
from bpstd.keys import GlobalKey
from bpstd.version import PsbtVer

key = GlobalKey.from_u8(0x00)
assert key == GlobalKey.UNSIGNED_TX
assert key.is_allowed(PsbtVer.V0)
assert not key.is_allowed(PsbtVer.V2)
```

Collecting and checking a map:

```python
from bpstd.keys import GlobalKey, KeyPair
from bpstd.maps import DeprecatedKey, Map, MapName
from bpstd.version import PsbtVer

raw = Map.parse(MapName.GLOBAL, GlobalKey, [KeyPair(GlobalKey.UNSIGNED_TX, b"", b"\x01")])
raw.check(PsbtVer.V0)  # fine
try:
    raw.check(PsbtVer.V2)
except DeprecatedKey as err:
    print(err)
```

`Map.check` rejects key types that are not yet defined in the given version
or are deprecated in it. `RequiredKeyAbsent` is raised for a missing required
key type only when that key type also has a later deprecation version (for
example `UNSIGNED_TX` in a v0 map).

Proprietary entries:

```python
from bpstd.keymap import KeyAlreadyPresent, KeyMap
from bpstd.keys import GlobalKey, PropKey

entries = KeyMap(GlobalKey)
key = PropKey("example", 1)
assert entries.push_proprietary(key, b"\x01") is True
assert entries.push_proprietary(key, b"\x01") is False
try:
    entries.push_proprietary(key, b"\x02")
except KeyAlreadyPresent as err:
    print(err)
```

## What this package does not do

It works on key types and already split key-value pairs. It does not read or
write the binary or base64 PSBT format, does not decode transactions, scripts,
extended keys or signatures held in the values, and does not sign anything.
`KeyMap` keeps standard entries as raw bytes.

## Running the tests

```
pip install -e ".[test]"
pytest
```