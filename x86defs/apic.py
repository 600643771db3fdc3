"""Local APIC identifiers and the interrupt command register (ICR) encoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_U8_MAX = 0xFF
_U32_MAX = 0xFFFF_FFFF


class DeliveryMode(IntEnum):
    """IPI delivery mode."""

    FIXED = 0b000
    LOWEST_PRIORITY = 0b001
    SMI = 0b010
    RESERVED = 0b011
    NMI = 0b100
    INIT = 0b101
    STARTUP = 0b110


class DestinationMode(IntEnum):
    """IPI destination mode."""

    PHYSICAL = 0
    LOGICAL = 1


class DeliveryStatus(IntEnum):
    """IPI delivery status."""

    IDLE = 0
    SEND_PENDING = 1


class Level(IntEnum):
    """IPI level."""

    DEASSERT = 0
    ASSERT = 1


class TriggerMode(IntEnum):
    """IPI trigger mode."""

    EDGE = 0
    LEVEL = 1


class DestinationShorthand(IntEnum):
    """IPI destination shorthand."""

    NO_SHORTHAND = 0b00
    MYSELF = 0b01
    ALL_INCLUDING_SELF = 0b10
    ALL_EXCLUDING_SELF = 0b11


@dataclass(frozen=True)
class ApicId:
    """The id of a core; use XApicId or X2ApicId."""

    id: int

    _MAX = _U32_MAX

    def __post_init__(self) -> None:
        if not 0 <= self.id <= self._MAX:
            raise ValueError(f"{type(self).__name__} out of range: {self.id}")

    def __int__(self) -> int:
        return self.id

    def x2apic_logical_id(self) -> int:
        """Logical x2APIC ID: (ID[19:4] << 16) | (1 << ID[3:0])."""
        return (
            (self.x2apic_logical_cluster_id() << 16)
            | (1 << self.x2apic_logical_cluster_address())
        ) & _U32_MAX

    def x2apic_logical_cluster_address(self) -> int:
        """Address of the core within its cluster (bits 3:0)."""
        return self.id & 0xF

    def x2apic_logical_cluster_id(self) -> int:
        """Cluster the core belongs to (bits 19:4)."""
        return (self.id >> 4) & 0xFFFF


@dataclass(frozen=True)
class XApicId(ApicId):
    """A core id encoded as an 8-bit xAPIC ID."""

    _MAX = _U8_MAX


@dataclass(frozen=True)
class X2ApicId(ApicId):
    """A core id encoded as a 32-bit x2APIC ID."""

    _MAX = _U32_MAX


def _xapic_destination(destination: ApicId) -> int:
    if not isinstance(destination, XApicId):
        raise ValueError(
            "x2APIC IDs are not supported for xAPIC (use the x2APIC controller)"
        )
    return destination.id << 56


def _x2apic_destination(destination: ApicId) -> int:
    return int(destination) << 32


@dataclass(frozen=True)
class Icr:
    """A 64-bit interrupt command register value."""

    value: int

    @classmethod
    def _build(
        cls,
        destination_bits: int,
        vector: int,
        destination_shorthand: DestinationShorthand,
        delivery_mode: DeliveryMode,
        destination_mode: DestinationMode,
        delivery_status: DeliveryStatus,
        level: Level,
        trigger_mode: TriggerMode,
    ) -> Icr:
        if not 0 <= vector <= _U8_MAX:
            raise ValueError(f"vector must fit in 8 bits, got {vector}")
        return cls(
            destination_bits
            | int(destination_shorthand) << 18
            | int(trigger_mode) << 15
            | int(level) << 14
            | int(delivery_status) << 12
            | int(destination_mode) << 11
            | int(delivery_mode) << 8
            | vector
        )

    @classmethod
    def for_x2apic(
        cls,
        vector,
        destination,
        destination_shorthand,
        delivery_mode,
        destination_mode,
        delivery_status,
        level,
        trigger_mode,
    ) -> Icr:
        """An ICR value for an x2APIC controller (destination in bits 63:32)."""
        return cls._build(
            _x2apic_destination(destination),
            vector,
            destination_shorthand,
            delivery_mode,
            destination_mode,
            delivery_status,
            level,
            trigger_mode,
        )

    @classmethod
    def for_xapic(
        cls,
        vector,
        destination,
        destination_shorthand,
        delivery_mode,
        destination_mode,
        delivery_status,
        level,
        trigger_mode,
    ) -> Icr:
        """An ICR value for an xAPIC controller (destination in bits 63:56).

        Raises ValueError if the destination is not an XApicId.
        """
        return cls._build(
            _xapic_destination(destination),
            vector,
            destination_shorthand,
            delivery_mode,
            destination_mode,
            delivery_status,
            level,
            trigger_mode,
        )

    def lower(self) -> int:
        """The low 32 bits."""
        return self.value & _U32_MAX

    def upper(self) -> int:
        """The high 32 bits."""
        return (self.value >> 32) & _U32_MAX