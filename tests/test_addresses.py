import pytest
from hypothesis import given
from hypothesis import strategies as st

from x86defs.addresses import (
    BASE_PAGE_SIZE,
    LARGE_PAGE_SIZE,
    IOAddr,
    PAddr,
    VAddr,
    align_down,
    align_up,
)


def test_align_0x1000():
    for base in (PAddr(0x1000), IOAddr(0x1000), VAddr(0x1000)):
        kind = type(base)
        assert base.base_page_offset() == 0x0
        assert base.large_page_offset() == 0x1000
        assert base.align_down_to_base_page() == kind(0x1000)
        assert base.align_down_to_large_page() == kind(0x0)
        assert base.align_up_to_base_page() == kind(0x1000)
        assert base.align_up_to_large_page() == kind(0x400000)
        assert base.is_base_page_aligned()
        assert not base.is_large_page_aligned()
        assert base.is_aligned(0x1)
        assert base.is_aligned(0x2)
        assert not base.is_aligned(0x3)
        assert base.is_aligned(0x4)


def test_align_0x1001():
    for base in (PAddr(0x1001), IOAddr(0x1001), VAddr(0x1001)):
        kind = type(base)
        assert base.base_page_offset() == 0x1
        assert base.large_page_offset() == 0x1001
        assert base.align_down_to_base_page() == kind(0x1000)
        assert base.align_down_to_large_page() == kind(0x0)
        assert base.align_up_to_base_page() == kind(0x2000)
        assert base.align_up_to_large_page() == kind(0x400000)
        assert not base.is_base_page_aligned()
        assert not base.is_large_page_aligned()
        assert base.is_aligned(0x1)
        assert not base.is_aligned(0x2)
        assert not base.is_aligned(0x3)
        assert not base.is_aligned(0x4)


def test_align_0x400000():
    for base in (PAddr(0x400000), IOAddr(0x400000), VAddr(0x400000)):
        kind = type(base)
        assert base.base_page_offset() == 0x0
        assert base.large_page_offset() == 0x0
        assert base.align_down_to_base_page() == kind(0x400000)
        assert base.align_down_to_large_page() == kind(0x400000)
        assert base.align_up_to_base_page() == kind(0x400000)
        assert base.align_up_to_large_page() == kind(0x400000)
        assert base.is_base_page_aligned()
        assert base.is_large_page_aligned()
        assert base.is_aligned(0x1)
        assert base.is_aligned(0x2)
        assert not base.is_aligned(0x3)
        assert base.is_aligned(0x4)


def test_align_0x400002():
    for base in (PAddr(0x400002), IOAddr(0x400002), VAddr(0x400002)):
        kind = type(base)
        assert base.base_page_offset() == 0x2
        assert base.large_page_offset() == 0x2
        assert base.align_down_to_base_page() == kind(0x400000)
        assert base.align_down_to_large_page() == kind(0x400000)
        assert base.align_up_to_base_page() == kind(0x401000)
        assert base.align_up_to_large_page() == kind(0x800000)
        assert not base.is_base_page_aligned()
        assert not base.is_large_page_aligned()
        assert base.is_aligned(0x1)
        assert base.is_aligned(0x2)
        assert not base.is_aligned(0x3)
        assert not base.is_aligned(0x4)


def test_free_align_functions():
    assert align_down(0x1234, 0x1000) == 0x1000
    assert align_up(0x1234, 0x1000) == 0x2000
    assert align_up(0x2000, 0x1000) == 0x2000


def test_align_up_overflow():
    with pytest.raises(OverflowError):
        align_up(0xFFFF_FFFF, 0x1000)
    with pytest.raises(OverflowError):
        PAddr(0xFFFF_F001).align_up_to_base_page()


def test_is_aligned_zero_is_false():
    assert PAddr(0x1000).is_aligned(0) is False


def test_zero():
    assert PAddr.zero().is_zero()
    assert IOAddr.zero().is_zero()
    assert VAddr.zero().is_zero()
    assert PAddr.zero() == PAddr(0)
    assert IOAddr.zero() == IOAddr(0)
    assert VAddr.zero() == VAddr(0)
    assert not PAddr(1).is_zero()
    assert not IOAddr(1).is_zero()
    assert not VAddr(1).is_zero()


def test_negative_wraps():
    assert PAddr(-1).as_u32() == 0xFFFF_FFFF
    assert VAddr(-4096).as_usize() == 0xFFFF_F000


def test_vaddr_constructors():
    assert VAddr.from_u32(0x1000) == VAddr(0x1000)
    assert VAddr.from_usize(0x2000).as_u32() == 0x2000


def test_types_do_not_compare_equal():
    assert PAddr(0x1000) != VAddr(0x1000)
    assert PAddr(0x1000) != 0x1000


def test_ordering_and_hash():
    assert PAddr(1) < PAddr(2)
    assert sorted([VAddr(3), VAddr(1)]) == [VAddr(1), VAddr(3)]
    assert len({IOAddr(5), IOAddr(5), IOAddr(6)}) == 2


def test_add_and_sub():
    assert PAddr(0x1000) + PAddr(0x10) == PAddr(0x1010)
    assert PAddr(0x1000) + 0x20 == PAddr(0x1020)
    assert VAddr(0x1000) - 0x1000 == VAddr(0)
    addr = IOAddr(0x10)
    addr += 0x10
    assert addr == IOAddr(0x20)


def test_add_overflow_and_sub_underflow():
    with pytest.raises(OverflowError):
        PAddr(0xFFFF_FFFF) + 1
    with pytest.raises(OverflowError):
        VAddr(0) - 1


def test_mixed_types_rejected():
    with pytest.raises(TypeError):
        PAddr(1) + VAddr(1)


def test_rem():
    assert PAddr(0x1001) % PAddr(0x1000) == PAddr(1)
    assert PAddr(0x1001) % 0x1000 == 1
    assert VAddr(0x1003) % 0x1000 == 3


def test_bit_ops_paddr_return_int_with_int():
    assert PAddr(0x1234) & 0xF00 == 0x200
    assert PAddr(0x1000) | 0x7 == 0x1007
    assert PAddr(0x1234) & PAddr(0xFF) == PAddr(0x34)
    assert IOAddr(0x10) | IOAddr(0x1) == IOAddr(0x11)


def test_bit_ops_vaddr_return_vaddr():
    assert VAddr(0x1234) & 0xF00 == VAddr(0x200)
    assert VAddr(0x1000) | 0x7 == VAddr(0x1007)


def test_shift():
    assert VAddr(0x0040_3000) >> 22 == 1
    assert PAddr(0x1000) >> 12 == 1


def test_formatting():
    assert str(PAddr(0x1000)) == "4096"
    assert str(VAddr(0x1000)) == "0x1000"
    assert repr(PAddr(0x1000)) == "PAddr(0x1000)"
    assert f"{IOAddr(255):x}" == "ff"
    assert f"{IOAddr(255):#X}" == "0XFF"
    assert f"{PAddr(8):o}" == "10"
    assert f"{PAddr(5):b}" == "101"


def test_immutable():
    addr = PAddr(1)
    with pytest.raises(AttributeError):
        addr.foo = 3
    assert addr == PAddr(1)
    assert addr.as_u32() == 1
    assert not hasattr(addr, "foo")


@given(st.integers(min_value=0, max_value=0xFFFF_FFFF))
def test_align_down_invariants(value):
    addr = PAddr(value)
    down = addr.align_down_to_base_page()
    assert down <= addr
    assert down.is_base_page_aligned()
    assert addr.as_u32() - down.as_u32() == addr.base_page_offset()


@given(st.integers(min_value=0, max_value=0xFFFF_FFFF - LARGE_PAGE_SIZE))
def test_align_up_invariants(value):
    addr = VAddr(value)
    up = addr.align_up_to_large_page()
    assert up >= addr
    assert up.is_large_page_aligned()
    assert up.as_u32() - addr.as_u32() < LARGE_PAGE_SIZE
    assert addr.align_up_to_base_page().as_u32() % BASE_PAGE_SIZE == 0