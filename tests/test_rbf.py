import pytest

from bpstd.rbf import (
    SEQ_NO_MAX_VALUE,
    SEQ_NO_SUBMAX_VALUE,
    InvalidNumber,
    NoRand,
    Rbf,
    RbfParseError,
    SeqNo,
    SeqNoClass,
)


def test_unencumbered_values():
    assert Rbf.unencumbered(True).seq_no == SeqNo(SEQ_NO_MAX_VALUE)
    assert Rbf.unencumbered(False).seq_no == SeqNo(SEQ_NO_SUBMAX_VALUE)
    assert Rbf.unencumbered(True).seq_no.classify() is SeqNoClass.UNENCUMBERED
    assert Rbf.unencumbered(False).seq_no.classify() is SeqNoClass.UNENCUMBERED


def test_unencumbered_display():
    assert str(Rbf.unencumbered(True)) == "final(0xFFFFFFFF)"
    assert str(Rbf.unencumbered(False)) == "non-rbf(0xFFFFFFFE)"


def test_unencumbered_is_not_rbf():
    assert not SeqNo(SEQ_NO_MAX_VALUE).is_rbf()
    assert not SeqNo(SEQ_NO_SUBMAX_VALUE).is_rbf()


def test_rbf_default_value():
    rbf = Rbf.rbf()
    assert rbf.seq_no.value == 0xFFFFFFFD
    assert rbf.seq_no.is_rbf()
    assert rbf.seq_no.classify() is SeqNoClass.RBF_ONLY


@pytest.mark.parametrize("order", [0, 1, 7, 0xFFFF])
def test_from_rbf_classification(order):
    seq = SeqNo.from_rbf(order)
    assert seq.classify() is SeqNoClass.RBF_ONLY
    assert seq.is_rbf()
    assert Rbf.from_rbf(order).seq_no == seq


@pytest.mark.parametrize("intervals", [0, 10, 0xFFFF])
def test_from_intervals_classification(intervals):
    seq = SeqNo.from_intervals(intervals)
    assert seq.classify() is SeqNoClass.RELATIVE_TIME
    assert seq.is_rbf()
    assert seq.value & 0xFFFF == intervals


@pytest.mark.parametrize("height", [0, 6, 0xFFFF])
def test_from_height_classification(height):
    seq = SeqNo.from_height(height)
    assert seq.classify() is SeqNoClass.RELATIVE_HEIGHT
    assert seq.value == height


@pytest.mark.parametrize("text", ["rbf(5)", "rbf(0)", "time(10)", "height(100)", "65536"])
def test_parse_display_round_trip(text):
    assert str(Rbf.parse(text)) == text


@pytest.mark.parametrize("order", [0, 3, 0xFFFF])
def test_from_rbf_display_round_trip(order):
    rbf = Rbf.from_rbf(order)
    assert Rbf.parse(str(rbf)) == rbf


def test_parse_is_case_insensitive():
    assert Rbf.parse("RBF(3)") == Rbf.parse("rbf(3)")
    assert Rbf.parse("Height(4)") == Rbf(SeqNo.from_height(4))
    assert Rbf.parse("TIME(9)") == Rbf(SeqNo.from_intervals(9))


def test_parse_plain_number():
    assert Rbf.parse("4294967295") == Rbf.unencumbered(True)
    assert Rbf.parse("4294967294") == Rbf.unencumbered(False)


def test_parse_bare_rbf_needs_randomness():
    with pytest.raises(NoRand):
        Rbf.parse("rbf")


@pytest.mark.parametrize(
    "text",
    ["abc", "", "-1", "rbf()", "rbf(70000)", "time(x)", "height(65536)", "4294967296", "1.5"],
)
def test_parse_invalid_number(text):
    with pytest.raises(InvalidNumber):
        Rbf.parse(text)


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        Rbf.parse("nonsense")
    with pytest.raises(RbfParseError):
        Rbf.parse("rbf")


def test_seq_no_range_checked():
    with pytest.raises(ValueError):
        SeqNo(SEQ_NO_MAX_VALUE + 1)
    with pytest.raises(ValueError):
        SeqNo.from_rbf(0x10000)


def test_ordering():
    assert SeqNo.from_height(1) < SeqNo.from_height(2)
    assert Rbf.rbf() < Rbf.unencumbered(False) < Rbf.unencumbered(True)