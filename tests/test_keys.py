import pytest

from bpstd.keys import GlobalKey, KeyPair, OutputKey, PropKey
from bpstd.version import PsbtVer


def test_global_key_codes():
    assert GlobalKey.UNSIGNED_TX.to_u8() == 0x00
    assert GlobalKey.XPUB.to_u8() == 0x01
    assert GlobalKey.TX_MODIFIABLE.to_u8() == 0x06
    assert GlobalKey.VERSION.to_u8() == 0xFB
    assert GlobalKey.PROPRIETARY.to_u8() == 0xFC


def test_output_key_codes():
    assert OutputKey.REDEEM_SCRIPT.to_u8() == 0x00
    assert OutputKey.AMOUNT.to_u8() == 0x03
    assert OutputKey.SCRIPT.to_u8() == 0x04
    assert OutputKey.TAP_BIP32_DERIVATION.to_u8() == 0x07
    assert OutputKey.PROPRIETARY.to_u8() == 0xFC


@pytest.mark.parametrize("cls", [GlobalKey, OutputKey])
@pytest.mark.parametrize("value", range(256))
def test_from_u8_roundtrip(cls, value):
    assert cls.from_u8(value).to_u8() == value


def test_from_u8_yields_named_constants():
    assert GlobalKey.from_u8(0xFB) == GlobalKey.VERSION
    assert OutputKey.from_u8(0x03) == OutputKey.AMOUNT
    assert GlobalKey.from_u8(0xFC).is_proprietary()


def test_from_u8_rejects_non_bytes():
    with pytest.raises(ValueError):
        GlobalKey.from_u8(256)
    with pytest.raises(ValueError):
        OutputKey.from_u8(-1)


def test_unknown_rejects_standard():
    with pytest.raises(ValueError):
        GlobalKey.unknown(0x00)
    with pytest.raises(ValueError):
        OutputKey.unknown(0x05)


def test_unknown_key_properties():
    key = GlobalKey.unknown(0x42)
    assert not key.is_standard()
    assert not key.is_proprietary()
    assert key.has_key_data()
    assert key.present_since() == PsbtVer.V0
    assert key.deprecated_since() is None
    assert not key.is_required()
    assert key.is_allowed(PsbtVer.V0) and key.is_allowed(PsbtVer.V2)


def test_standard_lists():
    assert GlobalKey.standard() == (
        GlobalKey.UNSIGNED_TX,
        GlobalKey.XPUB,
        GlobalKey.TX_VERSION,
        GlobalKey.FALLBACK_LOCKTIME,
        GlobalKey.INPUT_COUNT,
        GlobalKey.OUTPUT_COUNT,
        GlobalKey.TX_MODIFIABLE,
        GlobalKey.VERSION,
    )
    assert len(OutputKey.standard()) == 8
    assert GlobalKey.PROPRIETARY not in GlobalKey.standard()
    assert all(k.is_standard() for k in OutputKey.standard())


def test_global_key_versions():
    assert GlobalKey.UNSIGNED_TX.is_allowed(PsbtVer.V0)
    assert not GlobalKey.UNSIGNED_TX.is_allowed(PsbtVer.V2)
    assert GlobalKey.UNSIGNED_TX.deprecated_since() == PsbtVer.V2
    for key in (
        GlobalKey.TX_VERSION,
        GlobalKey.FALLBACK_LOCKTIME,
        GlobalKey.INPUT_COUNT,
        GlobalKey.OUTPUT_COUNT,
        GlobalKey.TX_MODIFIABLE,
    ):
        assert key.present_since() == PsbtVer.V2
        assert not key.is_allowed(PsbtVer.V0)
        assert key.is_allowed(PsbtVer.V2)
    assert GlobalKey.VERSION.is_allowed(PsbtVer.V0)
    assert GlobalKey.XPUB.is_allowed(PsbtVer.V2)


def test_global_key_data_and_required():
    with_data = {k for k in GlobalKey.standard() if k.has_key_data()}
    assert with_data == {GlobalKey.XPUB}
    required = {k for k in GlobalKey.standard() if k.is_required()}
    assert required == {
        GlobalKey.UNSIGNED_TX,
        GlobalKey.TX_VERSION,
        GlobalKey.INPUT_COUNT,
        GlobalKey.OUTPUT_COUNT,
    }
    assert GlobalKey.PROPRIETARY.has_key_data()
    assert not GlobalKey.PROPRIETARY.is_required()


def test_output_key_properties():
    with_data = {k for k in OutputKey.standard() if k.has_key_data()}
    assert with_data == {OutputKey.BIP32_DERIVATION, OutputKey.TAP_BIP32_DERIVATION}
    required = {k for k in OutputKey.standard() if k.is_required()}
    assert required == {OutputKey.AMOUNT, OutputKey.SCRIPT}
    assert OutputKey.AMOUNT.present_since() == PsbtVer.V2
    assert OutputKey.TAP_TREE.present_since() == PsbtVer.V0
    assert all(k.deprecated_since() is None for k in OutputKey.standard())


def test_ordering_follows_declaration():
    keys = [GlobalKey.unknown(0x10), GlobalKey.PROPRIETARY, GlobalKey.VERSION, GlobalKey.UNSIGNED_TX]
    assert sorted(keys) == [
        GlobalKey.UNSIGNED_TX,
        GlobalKey.VERSION,
        GlobalKey.PROPRIETARY,
        GlobalKey.unknown(0x10),
    ]
    assert list(GlobalKey.standard()) == sorted(GlobalKey.standard())


def test_keys_of_different_maps_differ():
    assert GlobalKey.from_u8(0x03) != OutputKey.from_u8(0x03)
    with pytest.raises(TypeError):
        _ = GlobalKey.XPUB < OutputKey.AMOUNT


def test_key_type_hashable():
    assert {GlobalKey.from_u8(1): "x"}[GlobalKey.XPUB] == "x"


def test_key_pair_fields():
    pair = KeyPair(OutputKey.AMOUNT, b"", b"\x01")
    assert pair.key_type == OutputKey.AMOUNT
    assert pair.key_data == b""
    assert pair.value_data == b"\x01"


def test_prop_key_display():
    key = PropKey("abc", 1, b"\x01\x02")
    assert str(key) == "abc 0x1 0102"


def test_prop_key_ordering_and_equality():
    a = PropKey("a", 2, b"")
    b = PropKey("a", 10, b"")
    c = PropKey("b", 0, b"")
    assert sorted([c, b, a]) == [a, b, c]
    assert PropKey("a", 2, bytearray()) == a


def test_prop_key_rejects_bad_subtype():
    with pytest.raises(ValueError):
        PropKey("a", -1)
    with pytest.raises(ValueError):
        PropKey("a", 1 << 64)