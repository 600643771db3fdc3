"""Page-directory and page-table entries for IA-32 (non-PAE) paging."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from .addresses import BASE_PAGE_SIZE, PAddr, VAddr

PAGE_SIZE_ENTRIES = 1024
"""Page directories and page tables have 1024 (4096 bytes / 32 bits) entries."""

_U32_MASK = 0xFFFF_FFFF
_ADDRESS_MASK = ~0xFFF & _U32_MASK
_ADDRESS_MASK_PSE = ~0x3FFFFF & _U32_MASK
_INDEX_MASK = 0b11_1111_1111


def pd_index(addr: VAddr | int) -> int:
    """Index of the page-directory entry that maps ``addr``."""
    return (int(addr) >> 22) & _INDEX_MASK


def pt_index(addr: VAddr | int) -> int:
    """Index of the page-table entry that maps ``addr``."""
    return (int(addr) >> 12) & _INDEX_MASK


class PDFlags(IntFlag):
    """Configuration bits of a page-directory entry."""

    P = 1 << 0
    """Present; must be 1 to map a 4-MByte page."""
    RW = 1 << 1
    """Read/write; if 0, writes may not be allowed."""
    US = 1 << 2
    """User/supervisor; if 0, user-mode accesses are not allowed."""
    PWT = 1 << 3
    """Page-level write-through."""
    PCD = 1 << 4
    """Page-level cache disable."""
    A = 1 << 5
    """Accessed."""
    D = 1 << 6
    """Dirty."""
    PS = 1 << 7
    """Page size; if set this entry maps a 4-MByte page."""
    G = 1 << 8
    """Global; meaningful only if CR4.PGE = 1."""
    PAT = 1 << 12
    """Memory type selection through the PAT, if supported."""


class PTFlags(IntFlag):
    """Configuration bits of a page-table entry."""

    P = 1 << 0
    """Present; must be 1 to map a 4-KByte page."""
    RW = 1 << 1
    """Read/write; if 0, writes may not be allowed."""
    US = 1 << 2
    """User/supervisor; if 0, user-mode accesses are not allowed."""
    PWT = 1 << 3
    """Page-level write-through."""
    PCD = 1 << 4
    """Page-level cache disable."""
    A = 1 << 5
    """Accessed."""
    D = 1 << 6
    """Dirty."""
    PAT = 1 << 7
    """Memory type selection through the PAT, if supported."""
    G = 1 << 8
    """Global; meaningful only if CR4.PGE = 1."""


_PD_FLAG_BITS = 0x11FF
_PT_FLAG_BITS = 0x1FF


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MASK:
        raise OverflowError(f"entry value {value:#x} does not fit in 32 bits")
    return value


@dataclass(frozen=True)
class PDEntry:
    """A page-directory entry: an address and a set of flags in one 32-bit word."""

    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _check_u32(int(self.value)))

    @classmethod
    def new(cls, pt: PAddr, flags: PDFlags) -> PDEntry:
        """Build an entry pointing at ``pt`` (a page table, or a 4 MiB page if PS is set).

        PSE-36 and PSE-40 are not supported. Raises ValueError if ``pt`` has
        bits set below the address mask or is not 4 KiB aligned.
        """
        mask = _ADDRESS_MASK_PSE if flags & PDFlags.PS else _ADDRESS_MASK
        raw = int(pt)
        pt_val = raw & mask
        if pt_val != raw:
            raise ValueError(f"address {raw:#x} is not aligned for this entry type")
        if raw % BASE_PAGE_SIZE != 0:
            raise ValueError(f"address {raw:#x} is not 4 KiB aligned")
        return cls(pt_val | int(flags))

    def address(self) -> PAddr:
        """The physical address held in this entry."""
        if self.flags() & PDFlags.PS:
            return PAddr(self.value & _ADDRESS_MASK_PSE)
        return PAddr(self.value & _ADDRESS_MASK)

    def flags(self) -> PDFlags:
        """The known flag bits of this entry."""
        return PDFlags(self.value & _PD_FLAG_BITS)

    def _has(self, flag: PDFlags) -> bool:
        return bool(self.flags() & flag)

    def is_present(self) -> bool:
        return self._has(PDFlags.P)

    def is_writeable(self) -> bool:
        return self._has(PDFlags.RW)

    def is_user_mode_allowed(self) -> bool:
        return self._has(PDFlags.US)

    def is_page_write_through(self) -> bool:
        return self._has(PDFlags.PWT)

    def is_page_level_cache_disabled(self) -> bool:
        return self._has(PDFlags.PCD)

    def is_accessed(self) -> bool:
        return self._has(PDFlags.A)

    def is_dirty(self) -> bool:
        return self._has(PDFlags.D)

    def is_page(self) -> bool:
        return self._has(PDFlags.PS)

    def is_global(self) -> bool:
        return self._has(PDFlags.G)

    def is_pat(self) -> bool:
        return self._has(PDFlags.PAT)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"PDEntry {{ {int(self.address()):#x}, {self.flags()!r} }}"


@dataclass(frozen=True)
class PTEntry:
    """A page-table entry: a 4 KiB page address and a set of flags in one 32-bit word."""

    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _check_u32(int(self.value)))

    @classmethod
    def new(cls, page: PAddr, flags: PTFlags) -> PTEntry:
        """Build an entry mapping the 4 KiB page at ``page``.

        Raises ValueError if ``page`` is not 4 KiB aligned.
        """
        raw = int(page)
        page_val = raw & _ADDRESS_MASK
        if page_val != raw or raw % BASE_PAGE_SIZE != 0:
            raise ValueError(f"address {raw:#x} is not 4 KiB aligned")
        return cls(page_val | int(flags))

    def address(self) -> PAddr:
        """The physical address held in this entry."""
        return PAddr(self.value & _ADDRESS_MASK)

    def flags(self) -> PTFlags:
        """The known flag bits of this entry."""
        return PTFlags(self.value & _PT_FLAG_BITS)

    def _has(self, flag: PTFlags) -> bool:
        return bool(self.flags() & flag)

    def is_present(self) -> bool:
        return self._has(PTFlags.P)

    def is_writeable(self) -> bool:
        return self._has(PTFlags.RW)

    def is_user_mode_allowed(self) -> bool:
        return self._has(PTFlags.US)

    def is_page_write_through(self) -> bool:
        return self._has(PTFlags.PWT)

    def is_page_level_cache_disabled(self) -> bool:
        return self._has(PTFlags.PCD)

    def is_accessed(self) -> bool:
        return self._has(PTFlags.A)

    def is_dirty(self) -> bool:
        return self._has(PTFlags.D)

    def is_pat(self) -> bool:
        return self._has(PTFlags.PAT)

    def is_global(self) -> bool:
        return self._has(PTFlags.G)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"PTEntry {{ {int(self.address()):#x}, {self.flags()!r} }}"