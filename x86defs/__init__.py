"""Bit-exact models of x86 addresses, paging entries, EFLAGS, task state, APIC and I/O APIC."""

__version__ = "0.1.0"
__all__ = ["addresses", "paging", "eflags", "task", "apic", "ioapic"]