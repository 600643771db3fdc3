# x86defs

Plain-Python models of x86 hardware data structures. The package uses only the
standard library. It produces the exact bit patterns the processor expects, so
you can compute, inspect or check them without touching hardware.

## What it covers

- `x86defs.addresses`: the 32-bit address types `PAddr`, `VAddr` and `IOAddr`,
  built on a shared `Address` base. They are immutable and hashable, and they
  compare only with values of the same type. They provide 4 KiB and 4 MiB page
  offsets and alignment (`align_up_to_base_page`, `align_down_to_large_page`,
  `is_aligned`, and so on). They also support arithmetic (`+`, `-`, `%`, `&`,
  `|`, `>>`). Addition or subtraction that leaves the 32-bit range raises
  `OverflowError`. The module also has the helpers `align_up` and `align_down`
  and the constants `BASE_PAGE_SIZE`, `LARGE_PAGE_SIZE`, `BASE_PAGE_SHIFT` and
  `CACHE_LINE_SIZE`.
- `x86defs.paging`: page-directory and page-table entries (`PDEntry`, `PTEntry`)
  and their flags (`PDFlags`, `PTFlags`). `pd_index` and `pt_index` split a
  virtual address into table indices. `PDEntry.new` and `PTEntry.new` raise
  `ValueError` for a misaligned address.
- `x86defs.eflags`: `EFlags`, an `IntFlag` of the EFLAGS bits, with
  `EFlags.new()` (only the always-one bit set) and `EFlags.from_priv(iopl)`.
- `x86defs.task`: `TaskStateSegment`, a dataclass that packs to and unpacks from
  the 104-byte little-endian in-memory layout (`pack()` / `unpack(data)`).
  Reserved words are written as zero.
- `x86defs.apic`: the interrupt command register `Icr` (`for_xapic`,
  `for_x2apic`, `lower`, `upper`) and the IPI enums `DeliveryMode`,
  `DestinationMode`, `DeliveryStatus`, `Level`, `TriggerMode` and
  `DestinationShorthand`. APIC ids are `XApicId` (8 bits) and `X2ApicId`
  (32 bits). Both derive x2APIC logical ids, cluster ids and cluster addresses.
  `Icr.for_xapic` raises `ValueError` when given an `X2ApicId`.
- `x86defs.ioapic`: `IoApic`, which programs an I/O APIC's redirection table
  through a register file that you supply, either a mutable sequence or a
  mapping indexed by register number. It also defines the `RedirectionEntry`
  flags.

## Install

```
pip install x86defs
```

## Examples

Page alignment:

```python
from x86defs.addresses import PAddr

addr = PAddr(0x400002)
addr.align_up_to_base_page()   # PAddr(0x401000)
addr.large_page_offset()       # 2
addr.is_aligned(4)             # False
```

A page-table entry:

```python
from x86defs.addresses import PAddr
from x86defs.paging import PTEntry, PTFlags

entry = PTEntry.new(PAddr(0x5000), PTFlags.P | PTFlags.RW)
entry.is_present()   # True
entry.address()      # PAddr(0x5000)
```

A STARTUP IPI for an x2APIC:

```python
from x86defs.apic import (
    Icr, X2ApicId, DestinationShorthand, DeliveryMode,
    DestinationMode, DeliveryStatus, Level, TriggerMode,
)

icr = Icr.for_x2apic(
    0x08, X2ApicId(3), DestinationShorthand.NO_SHORTHAND,
    DeliveryMode.STARTUP, DestinationMode.PHYSICAL,
    DeliveryStatus.IDLE, Level.ASSERT, TriggerMode.EDGE,
)
icr.upper(), icr.lower()
```

Routing an interrupt with an in-memory register file:

```python
from x86defs.ioapic import IoApic

registers = [0] * 0x40
registers[0x01] = 0x00170011   # 24 redirection entries, version 0x11
ioapic = IoApic(registers)
ioapic.supported_interrupts()   # 24
ioapic.enable(1, cpunum=2)
```

## What it does not do

The package only computes and decodes values. It does not read or write model-specific
registers, memory-mapped registers or CPU state. It has no local APIC
driver and does not send IPIs. `IoApic` acts only on the register file that
you pass to it.

## Tests

```
pip install -e .[test]
pytest
```