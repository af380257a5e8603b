"""Law-firm back office service: approval workflow, records, and usage counters."""

__version__ = "1.0.0"
