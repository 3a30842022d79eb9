from enum import Enum
from typing import Type

from claimdesk.core.errors import ValidationError


class ClaimStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    QUERY_RAISED = "Query Raised"
    QUERY_ANSWERED = "Query Answered"
    INITIAL_APPROVAL_AMOUNT = "Initial Approval Amount"
    APPROVAL = "Approval"
    AMOUNT_SANCTIONED = "Amount Sanctioned"
    INITIAL_APPROVAL = "Initial Approval"
    SETTLEMENT_DONE = "Settlement Done"
    REJECTED = "Rejected"
    APPEALED = "Appealed"
    PAID = "Paid"
    APPROVED = "Approved"
    PRE_AUTH_SENT = "Pre auth Sent"
    FINAL_APPROVAL = "Final Approval"
    SETTLED = "Settled"
    AMOUNT_RECEIVED = "Amount Received"


class PreAuthStatus(str, Enum):
    DRAFT = "Draft"
    PENDING = "Pending"
    PRE_AUTH_SENT = "Pre auth Sent"
    QUERY_RAISED = "Query Raised"
    QUERY_ANSWERED = "Query Answered"
    ENHANCEMENT_REQUEST = "Enhancement Request"
    ENHANCEMENT_APPROVAL = "Enhancement Approval"
    INITIAL_APPROVAL = "Initial Approval"
    FINAL_DISCHARGE_SENT = "Final Discharge sent"
    FINAL_APPROVAL = "Final Approval"
    FINAL_AMOUNT_SANCTIONED = "Final Amount Sanctioned"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    SETTLED = "Settled"


# Report buckets. Totals depend on these exact strings; "Approval", "Approved",
# "Amount Sanctioned" and "Final Amount Sanctioned" are intentionally distinct.
BILLED_STATUSES = ("Pre auth Sent",)
BILLED_WITH_ENHANCEMENT = ("Pre auth Sent", "Enhancement Request")
RECEIVED_STATUSES = ("Final Approval",)
SANCTIONED_STATUSES = ("Final Amount Sanctioned",)
REJECTED_STATUSES = ("Rejected",)
SETTLED_STATUSES = ("Settled",)
APPROVAL_AMOUNT_STATUSES = ("Initial Approval", "Final Approval", "Enhancement Approval")
PENDING_PREAUTH_STATUS = "Pre auth Sent"
QUERY_RAISED_STATUS = "Query Raised"
DISCHARGED_STATUS = "Final Discharge sent"


def _parse(enum_cls: Type[Enum], value, label: str):
    if isinstance(value, enum_cls):
        return value
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {label.lower()}: {value}")


def parse_claim_status(value) -> ClaimStatus:
    """
    Any listed status may replace any other; only membership is checked.
    """
    return _parse(ClaimStatus, value, "Status")


def parse_preauth_status(value) -> PreAuthStatus:
    return _parse(PreAuthStatus, value, "Status")


# Written by the pre-auth flow and summed by the hospital and staff reports
CARRIED_PREAUTH_STATUSES = tuple(
    s for s in SANCTIONED_STATUSES + BILLED_WITH_ENHANCEMENT if s not in {c.value for c in ClaimStatus}
)


def parse_new_claim_status(value) -> str:
    """Status for a new claim: any ClaimStatus, or a pre-auth status the reports bucket claims under."""
    if isinstance(value, str) and value in CARRIED_PREAUTH_STATUSES:
        return value
    return parse_claim_status(value).value
