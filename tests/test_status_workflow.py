import pytest

from claimdesk.core.errors import ValidationError
from claimdesk.services.status_workflow import (
    ClaimStatus,
    PreAuthStatus,
    parse_claim_status,
    parse_new_claim_status,
    parse_preauth_status,
)


def test_claim_status_vocabulary():
    assert [s.value for s in ClaimStatus] == [
        "Pending", "Processing", "Query Raised", "Query Answered",
        "Initial Approval Amount", "Approval", "Amount Sanctioned",
        "Initial Approval", "Settlement Done", "Rejected", "Appealed", "Paid",
        "Approved", "Pre auth Sent", "Final Approval", "Settled", "Amount Received",
    ]


def test_near_duplicates_stay_distinct():
    values = {s.value for s in ClaimStatus}
    assert {"Approval", "Approved", "Amount Sanctioned"} <= values
    assert "Final Amount Sanctioned" not in values
    assert PreAuthStatus("Final Amount Sanctioned") is PreAuthStatus.FINAL_AMOUNT_SANCTIONED


def test_parse_claim_status_exact_match():
    assert parse_claim_status("Pre auth Sent") is ClaimStatus.PRE_AUTH_SENT
    with pytest.raises(ValidationError):
        parse_claim_status("pre auth sent")


@pytest.mark.parametrize("value", ["", "   ", None, "Archived"])
def test_parse_claim_status_rejects(value):
    with pytest.raises(ValidationError):
        parse_claim_status(value)


def test_preauth_only_statuses():
    assert parse_preauth_status("Enhancement Request") is PreAuthStatus.ENHANCEMENT_REQUEST
    with pytest.raises(ValidationError):
        parse_claim_status("Enhancement Request")


def test_new_claims_may_carry_reported_preauth_statuses():
    assert parse_new_claim_status("Final Amount Sanctioned") == "Final Amount Sanctioned"
    assert parse_new_claim_status("Enhancement Request") == "Enhancement Request"
    assert parse_new_claim_status(ClaimStatus.PENDING) == "Pending"
    with pytest.raises(ValidationError):
        parse_new_claim_status("Draft")
    with pytest.raises(ValidationError):
        parse_claim_status("Final Amount Sanctioned")
