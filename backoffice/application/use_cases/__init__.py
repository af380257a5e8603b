"""Use cases: approval workflow and records."""
