"""Physical, I/O and virtual 32-bit addresses with page-alignment helpers."""

from __future__ import annotations

from functools import total_ordering
from typing import TypeVar

BASE_PAGE_SHIFT = 12
"""Log2 of the base page size."""

BASE_PAGE_SIZE = 4096
"""Size of a base page (4 KiB)."""

LARGE_PAGE_SIZE = 1024 * 1024 * 4
"""Size of a large page (4 MiB)."""

CACHE_LINE_SIZE = 64
"""Size of a cache line."""

_U32_MASK = 0xFFFF_FFFF

_A = TypeVar("_A", bound="Address")


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MASK:
        raise OverflowError(f"value {value:#x} does not fit in 32 bits")
    return value


def align_down(addr: int, align: int) -> int:
    """Return the greatest multiple of ``align`` that is <= ``addr``.

    ``align`` must be a power of two.
    """
    if align <= 0:
        raise ValueError("alignment must be a positive power of two")
    return addr & ~(align - 1) & _U32_MASK


def align_up(addr: int, align: int) -> int:
    """Return the smallest multiple of ``align`` that is >= ``addr``.

    ``align`` must be a power of two. Raises OverflowError if the result
    does not fit in 32 bits.
    """
    if align <= 0:
        raise ValueError("alignment must be a positive power of two")
    mask = align - 1
    if addr & mask == 0:
        return addr
    return _check_u32((addr | mask) + 1)


def _operand(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value & _U32_MASK
    return None


@total_ordering
class Address:
    """An immutable 32-bit address."""

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        # Values are truncated to 32 bits, so negative numbers wrap around.
        object.__setattr__(self, "_value", int(value) & _U32_MASK)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value(self) -> int:
        """The raw 32-bit value."""
        return self._value

    def as_u32(self) -> int:
        return self._value

    def as_usize(self) -> int:
        return self._value

    @classmethod
    def zero(cls: type[_A]) -> _A:
        return cls(0)

    def is_zero(self) -> bool:
        return self._value == 0

    def base_page_offset(self) -> int:
        """Offset within the 4 KiB page."""
        return self._value & (BASE_PAGE_SIZE - 1)

    def large_page_offset(self) -> int:
        """Offset within the 4 MiB page."""
        return self._value & (LARGE_PAGE_SIZE - 1)

    def align_down_to_base_page(self: _A) -> _A:
        return type(self)(align_down(self._value, BASE_PAGE_SIZE))

    def align_down_to_large_page(self: _A) -> _A:
        return type(self)(align_down(self._value, LARGE_PAGE_SIZE))

    def align_up_to_base_page(self: _A) -> _A:
        return type(self)(align_up(self._value, BASE_PAGE_SIZE))

    def align_up_to_large_page(self: _A) -> _A:
        return type(self)(align_up(self._value, LARGE_PAGE_SIZE))

    def is_base_page_aligned(self) -> bool:
        return align_down(self._value, BASE_PAGE_SIZE) == self._value

    def is_large_page_aligned(self) -> bool:
        return align_down(self._value, LARGE_PAGE_SIZE) == self._value

    def is_aligned(self, align: int) -> bool:
        """Is this address aligned to ``align``? False if ``align`` is not a power of two."""
        if align <= 0 or align & (align - 1):
            return False
        return align_down(self._value, align) == self._value

    # Conversions and comparison

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value  # type: ignore[attr-defined]

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value:#x})"

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        return format(self._value, spec)

    # Arithmetic

    def _rhs(self, other: object) -> int | None:
        if type(other) is type(self):
            return other._value  # type: ignore[attr-defined]
        return _operand(other)

    def __add__(self: _A, other: object) -> _A:
        rhs = self._rhs(other)
        if rhs is None:
            return NotImplemented
        return type(self)(_check_u32(self._value + rhs))

    def __sub__(self: _A, other: object) -> _A:
        rhs = self._rhs(other)
        if rhs is None:
            return NotImplemented
        return type(self)(_check_u32(self._value - rhs))

    def __mod__(self, other: object):
        if type(other) is type(self):
            return type(self)(self._value % other._value)  # type: ignore[attr-defined]
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._value % rhs

    def __and__(self, other: object):
        if type(other) is type(self):
            return type(self)(self._value & other._value)  # type: ignore[attr-defined]
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._value & rhs

    def __or__(self, other: object):
        if type(other) is type(self):
            return type(self)(self._value | other._value)  # type: ignore[attr-defined]
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._value | rhs

    def __rshift__(self, other: object) -> int:
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._value >> rhs


class PAddr(Address):
    """A physical address."""

    __slots__ = ()


class IOAddr(Address):
    """An I/O (DMA) address as seen by devices."""

    __slots__ = ()


class VAddr(Address):
    """A virtual address."""

    __slots__ = ()

    @classmethod
    def from_u32(cls, value: int) -> VAddr:
        return cls(value)

    @classmethod
    def from_usize(cls, value: int) -> VAddr:
        return cls(value)

    def __str__(self) -> str:
        return f"{self._value:#x}"

    def __and__(self, other: object):
        rhs = self._rhs(other)
        if rhs is None:
            return NotImplemented
        return VAddr(self._value & rhs)

    def __or__(self, other: object):
        rhs = self._rhs(other)
        if rhs is None:
            return NotImplemented
        return VAddr(self._value | rhs)