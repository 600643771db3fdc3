"""Processor state flags held in the 32-bit EFLAGS register."""

from __future__ import annotations

from enum import IntFlag


class EFlags(IntFlag):
    """The EFLAGS register."""

    FLAGS_ID = 1 << 21
    """ID flag."""
    FLAGS_VIP = 1 << 20
    """Virtual interrupt pending."""
    FLAGS_VIF = 1 << 19
    """Virtual interrupt flag."""
    FLAGS_AC = 1 << 18
    """Alignment check."""
    FLAGS_VM = 1 << 17
    """Virtual-8086 mode."""
    FLAGS_RF = 1 << 16
    """Resume flag."""
    FLAGS_NT = 1 << 14
    """Nested task."""
    FLAGS_IOPL0 = 0b00 << 12
    """I/O privilege level 0."""
    FLAGS_IOPL1 = 0b01 << 12
    """I/O privilege level 1."""
    FLAGS_IOPL2 = 0b10 << 12
    """I/O privilege level 2."""
    FLAGS_IOPL3 = 0b11 << 12
    """I/O privilege level 3."""
    FLAGS_OF = 1 << 11
    """Overflow flag."""
    FLAGS_DF = 1 << 10
    """Direction flag."""
    FLAGS_IF = 1 << 9
    """Interrupt enable flag."""
    FLAGS_TF = 1 << 8
    """Trap flag."""
    FLAGS_SF = 1 << 7
    """Sign flag."""
    FLAGS_ZF = 1 << 6
    """Zero flag."""
    FLAGS_AF = 1 << 4
    """Auxiliary carry flag."""
    FLAGS_PF = 1 << 2
    """Parity flag."""
    FLAGS_A1 = 1 << 1
    """Bit 1, which is always set."""
    FLAGS_CF = 1 << 0
    """Carry flag."""

    @classmethod
    def new(cls) -> EFlags:
        """A fresh flags value with the always-one bit set."""
        return cls.FLAGS_A1

    @classmethod
    def from_priv(cls, iopl: int) -> EFlags:
        """Flags holding only the given I/O privilege level (ring 0 to 3)."""
        ring = int(iopl)
        if not 0 <= ring <= 3:
            raise ValueError(f"privilege level must be between 0 and 3, got {ring}")
        return cls(ring << 12)