"""Record use cases."""

from backoffice.application.use_cases.records.record_operations import RecordService

__all__ = ["RecordService"]
