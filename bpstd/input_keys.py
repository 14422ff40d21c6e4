"""Key types of a PSBT input map."""

from __future__ import annotations

from typing import ClassVar, Mapping

from bpstd.keys import PROPRIETARY_CODE, KeyType, _KeySpec
from bpstd.version import PsbtVer

__all__ = ["InputKey"]


class InputKey(KeyType):
    """Key types of a PSBT input map."""

    NON_WITNESS_UTXO: ClassVar[InputKey]
    WITNESS_UTXO: ClassVar[InputKey]
    PARTIAL_SIG: ClassVar[InputKey]
    SIGHASH_TYPE: ClassVar[InputKey]
    REDEEM_SCRIPT: ClassVar[InputKey]
    WITNESS_SCRIPT: ClassVar[InputKey]
    BIP32_DERIVATION: ClassVar[InputKey]
    FINAL_SCRIPT_SIG: ClassVar[InputKey]
    FINAL_WITNESS: ClassVar[InputKey]
    POR_COMMITMENT: ClassVar[InputKey]
    RIPEMD160: ClassVar[InputKey]
    SHA256: ClassVar[InputKey]
    HASH160: ClassVar[InputKey]
    HASH256: ClassVar[InputKey]
    PREVIOUS_TXID: ClassVar[InputKey]
    OUTPUT_INDEX: ClassVar[InputKey]
    SEQUENCE: ClassVar[InputKey]
    REQUIRED_TIME_LOCK: ClassVar[InputKey]
    REQUIRED_HEIGHT_LOCK: ClassVar[InputKey]
    TAP_KEY_SIG: ClassVar[InputKey]
    TAP_SCRIPT_SIG: ClassVar[InputKey]
    TAP_LEAF_SCRIPT: ClassVar[InputKey]
    TAP_BIP32_DERIVATION: ClassVar[InputKey]
    TAP_INTERNAL_KEY: ClassVar[InputKey]
    TAP_MERKLE_ROOT: ClassVar[InputKey]
    PROPRIETARY: ClassVar[InputKey]

    _SPECS: ClassVar[Mapping[int, _KeySpec]] = {
        0x00: _KeySpec("NON_WITNESS_UTXO", False),
        0x01: _KeySpec("WITNESS_UTXO", False),
        0x02: _KeySpec("PARTIAL_SIG", True),
        0x03: _KeySpec("SIGHASH_TYPE", False),
        0x04: _KeySpec("REDEEM_SCRIPT", False),
        0x05: _KeySpec("WITNESS_SCRIPT", False),
        0x06: _KeySpec("BIP32_DERIVATION", True),
        0x07: _KeySpec("FINAL_SCRIPT_SIG", False),
        0x08: _KeySpec("FINAL_WITNESS", False),
        0x09: _KeySpec("POR_COMMITMENT", False),
        0x0A: _KeySpec("RIPEMD160", True),
        0x0B: _KeySpec("SHA256", True),
        0x0C: _KeySpec("HASH160", True),
        0x0D: _KeySpec("HASH256", True),
        0x0E: _KeySpec("PREVIOUS_TXID", False, PsbtVer.V2, required=True),
        0x0F: _KeySpec("OUTPUT_INDEX", False, PsbtVer.V2, required=True),
        0x10: _KeySpec("SEQUENCE", False, PsbtVer.V2),
        0x11: _KeySpec("REQUIRED_TIME_LOCK", False, PsbtVer.V2),
        0x12: _KeySpec("REQUIRED_HEIGHT_LOCK", False, PsbtVer.V2),
        0x13: _KeySpec("TAP_KEY_SIG", False),
        0x14: _KeySpec("TAP_SCRIPT_SIG", True),
        0x15: _KeySpec("TAP_LEAF_SCRIPT", True),
        0x16: _KeySpec("TAP_BIP32_DERIVATION", True),
        0x17: _KeySpec("TAP_INTERNAL_KEY", False),
        0x18: _KeySpec("TAP_MERKLE_ROOT", False),
    }


InputKey.NON_WITNESS_UTXO = InputKey(0x00)
InputKey.WITNESS_UTXO = InputKey(0x01)
InputKey.PARTIAL_SIG = InputKey(0x02)
InputKey.SIGHASH_TYPE = InputKey(0x03)
InputKey.REDEEM_SCRIPT = InputKey(0x04)
InputKey.WITNESS_SCRIPT = InputKey(0x05)
InputKey.BIP32_DERIVATION = InputKey(0x06)
InputKey.FINAL_SCRIPT_SIG = InputKey(0x07)
InputKey.FINAL_WITNESS = InputKey(0x08)
InputKey.POR_COMMITMENT = InputKey(0x09)
InputKey.RIPEMD160 = InputKey(0x0A)
InputKey.SHA256 = InputKey(0x0B)
InputKey.HASH160 = InputKey(0x0C)
InputKey.HASH256 = InputKey(0x0D)
InputKey.PREVIOUS_TXID = InputKey(0x0E)
InputKey.OUTPUT_INDEX = InputKey(0x0F)
InputKey.SEQUENCE = InputKey(0x10)
InputKey.REQUIRED_TIME_LOCK = InputKey(0x11)
InputKey.REQUIRED_HEIGHT_LOCK = InputKey(0x12)
InputKey.TAP_KEY_SIG = InputKey(0x13)
InputKey.TAP_SCRIPT_SIG = InputKey(0x14)
InputKey.TAP_LEAF_SCRIPT = InputKey(0x15)
InputKey.TAP_BIP32_DERIVATION = InputKey(0x16)
InputKey.TAP_INTERNAL_KEY = InputKey(0x17)
InputKey.TAP_MERKLE_ROOT = InputKey(0x18)
InputKey.PROPRIETARY = InputKey(PROPRIETARY_CODE)