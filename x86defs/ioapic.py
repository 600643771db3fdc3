"""Programming an I/O APIC through its indirect register window."""

from __future__ import annotations

from enum import IntFlag
from typing import MutableMapping, MutableSequence, Union

REG_ID = 0x00
"""Register index: ID."""

REG_VER = 0x01
"""Register index: version."""

REG_TABLE = 0x10
"""Base register of the redirection table."""

T_IRQ0 = 32
"""Interrupt vector of IRQ 0."""

_MAX_REGISTER = 0xFF
_U32_MASK = 0xFFFF_FFFF

Registers = Union[MutableSequence[int], MutableMapping[int, int]]


class RedirectionEntry(IntFlag):
    """Configuration bits of the low word of a redirection table entry."""

    DISABLED = 0x00010000
    """Interrupt disabled."""
    LEVEL = 0x00008000
    """Level-triggered (vs edge)."""
    ACTIVELOW = 0x00002000
    """Active low (vs high)."""
    LOGICAL = 0x00000800
    """Destination is a CPU id (vs APIC ID)."""
    NONE = 0x00000000
    """No flags."""


class IoApic:
    """An I/O APIC, which routes hardware interrupts to local APICs.

    ``registers`` is indexed by register number and stands for the
    device's register file behind its select/data window.
    """

    def __init__(self, registers: Registers) -> None:
        self._registers = registers

    def _read(self, reg: int) -> int:
        return self._registers[reg] & _U32_MASK

    def _write(self, reg: int, data: int) -> None:
        self._registers[reg] = data & _U32_MASK

    def _write_irq(self, irq: int, flags: RedirectionEntry, dest: int) -> None:
        if irq < 0 or REG_TABLE + 2 * irq + 1 > _MAX_REGISTER:
            raise ValueError(f"IRQ {irq} is outside the redirection table")
        if not 0 <= dest <= 0xFF:
            raise ValueError(f"destination must fit in 8 bits, got {dest}")
        self._write(REG_TABLE + 2 * irq, (T_IRQ0 + irq) | int(flags))
        self._write(REG_TABLE + 2 * irq + 1, dest << 24)

    def disable_all(self) -> None:
        """Mark every interrupt edge-triggered, active high, disabled and unrouted."""
        for irq in range(self.supported_interrupts()):
            self._write_irq(irq, RedirectionEntry.DISABLED, 0)

    def enable(self, irq: int, cpunum: int) -> None:
        """Route ``irq`` edge-triggered, active high, to the CPU with APIC ID ``cpunum``."""
        self._write_irq(irq, RedirectionEntry.NONE, cpunum)

    def id(self) -> int:
        """The I/O APIC ID (bits 27:24 of the ID register)."""
        return (self._read(REG_ID) >> 24) & 0xF

    def version(self) -> int:
        """The version (bits 7:0 of the version register)."""
        return self._read(REG_VER) & 0xFF

    def supported_interrupts(self) -> int:
        """Number of interrupts handled: max redirection entry plus one, as 8 bits."""
        return (((self._read(REG_VER) >> 16) & 0xFF) + 1) & 0xFF