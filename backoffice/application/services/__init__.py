"""Application services: usage counters."""

from backoffice.application.services.usage_counter_service import (
    UsageCharge,
    UsageCounterService,
    classify_category,
)

__all__ = ["UsageCharge", "UsageCounterService", "classify_category"]
