"""The 32-bit task state segment (TSS)."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass, fields
from typing import ClassVar

# Packed little-endian layout; reserved words are written as zero.
_LAYOUT = struct.Struct(
    "<"
    "HH"  # link, reserved
    "IHH"  # esp0, ss0, reserved
    "IHH"  # esp1, ss1, reserved
    "IHH"  # esp2, ss2, reserved
    "III"  # cr3, eip, eflags
    "IIIIIIII"  # eax, ecx, edx, ebx, esp, ebp, esi, edi
    "HHHHHHHHHHHH"  # es, cs, ss, ds, fs, gs with reserved words
    "HIH"  # ldtr, reserved, iobp_offset
)

_SEGMENT_NAMES = ("es", "cs", "ss", "ds", "fs", "gs")


@dataclass
class TaskStateSegment:
    """A 32-bit task state segment. Reserved fields are always zero."""

    SIZE: ClassVar[int] = _LAYOUT.size

    link: int = 0
    esp0: int = 0
    ss0: int = 0
    esp1: int = 0
    ss1: int = 0
    esp2: int = 0
    ss2: int = 0
    cr3: int = 0
    eip: int = 0
    eflags: int = 0
    eax: int = 0
    ecx: int = 0
    edx: int = 0
    ebx: int = 0
    esp: int = 0
    ebp: int = 0
    esi: int = 0
    edi: int = 0
    es: int = 0
    cs: int = 0
    ss: int = 0
    ds: int = 0
    fs: int = 0
    gs: int = 0
    ldtr: int = 0
    iobp_offset: int = _LAYOUT.size

    def pack(self) -> bytes:
        """Encode the segment in its in-memory layout."""
        segments = []
        for name in _SEGMENT_NAMES:
            segments.extend((getattr(self, name), 0))
        try:
            return _LAYOUT.pack(
                self.link, 0,
                self.esp0, self.ss0, 0,
                self.esp1, self.ss1, 0,
                self.esp2, self.ss2, 0,
                self.cr3, self.eip, self.eflags,
                self.eax, self.ecx, self.edx, self.ebx,
                self.esp, self.ebp, self.esi, self.edi,
                *segments,
                self.ldtr, 0, self.iobp_offset,
            )
        except struct.error as exc:
            raise ValueError(f"field value out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> TaskStateSegment:
        """Decode a segment from its in-memory layout; reserved words are ignored."""
        if len(data) != _LAYOUT.size:
            raise ValueError(
                f"a task state segment is {_LAYOUT.size} bytes, got {len(data)}"
            )
        raw = _LAYOUT.unpack(bytes(data))
        (
            link, _,
            esp0, ss0, _,
            esp1, ss1, _,
            esp2, ss2, _,
            cr3, eip, eflags,
            eax, ecx, edx, ebx, esp, ebp, esi, edi,
        ) = raw[:22]
        segment_words = raw[22:34]
        ldtr, _, iobp_offset = raw[34:]
        segments = dict(zip(_SEGMENT_NAMES, segment_words[::2]))
        return cls(
            link=link,
            esp0=esp0, ss0=ss0,
            esp1=esp1, ss1=ss1,
            esp2=esp2, ss2=ss2,
            cr3=cr3, eip=eip, eflags=eflags,
            eax=eax, ecx=ecx, edx=edx, ebx=ebx,
            esp=esp, ebp=ebp, esi=esi, edi=edi,
            ldtr=ldtr, iobp_offset=iobp_offset,
            **segments,
        )

    def __iter__(self):
        return iter(astuple(self))

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))