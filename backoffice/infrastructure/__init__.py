"""Infrastructure: persistence and security adapters."""
