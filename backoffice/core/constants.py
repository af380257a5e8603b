"""Domain constants shared across layers (categories, placeholders)."""

# Stored as rejection_reason when a reject call carries no reason.
DEFAULT_REJECTION_REASON = "No reason provided"

# Fallback for answered_by when the staff account has no display name or email.
DEFAULT_STAFF_DISPLAY_NAME = "Administrator"

# Record categories with special handling.
PHONE_LOG_CATEGORY = "phone_log"
PHONE_REQUEST_CATEGORY = "phone_request"

# Administrative/meta categories: never billed, hidden from dashboard counts.
NON_BILLABLE_CATEGORIES: frozenset[str] = frozenset(
    {
        PHONE_LOG_CATEGORY,
        "payment_request",
        "plan_change",
        "payment_method",
        "member_req",
        "member_req_internal",
        "member_req_admin",
        "extra_usage_quote",
    }
)

# Record status groups used by list filters and dashboard counts.
RECORD_WAITING_STATUSES: tuple[str, ...] = (
    "pending",
    "waiting",
    "analyzing",
    "processing",
    "InProgress",
    "Pending",
)
RECORD_DONE_STATUSES: tuple[str, ...] = (
    "done",
    "completed",
    "answered",
    "resolved",
    "Completed",
)
