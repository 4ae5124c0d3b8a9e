import logging
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from bill_recognition import (
    AccountRecord,
    CategoryRecord,
    CategoryType,
    RawRecognizedItem,
    TagRecord,
    TransactionType,
    assemble_candidate,
    build_lookup_tables,
)
from bill_recognition.outcomes import Rejected, RejectionReason, Resolved

SHANGHAI = ZoneInfo("Asia/Shanghai")

LOOKUPS = build_lookup_tables(
    accounts=[AccountRecord(1, "Cash"), AccountRecord(2, "Bank")],
    categories=[
        CategoryRecord(10, "Food", CategoryType.EXPENSE),
        CategoryRecord(11, "Groceries", CategoryType.EXPENSE, parent_category_id=10),
        CategoryRecord(21, "Interest", CategoryType.INCOME, parent_category_id=20),
        CategoryRecord(31, "Between Accounts", CategoryType.TRANSFER, parent_category_id=30),
    ],
    tags=[TagRecord(100, "trip"), TagRecord(101, "work")],
)


def _assemble(**fields):
    return assemble_candidate(RawRecognizedItem(**fields), SHANGHAI, LOOKUPS)


def test_fully_resolved_expense():
    outcome = _assemble(
        type="expense",
        time="2026-02-07 21:49",
        amount="-100.00",
        account_name="Cash",
        category_name="Groceries",
        tag_names=("work", "unknown", "trip"),
        description="京东超市",
    )

    assert isinstance(outcome, Resolved)
    c = outcome.value
    assert c.type is TransactionType.EXPENSE
    assert c.time == int(datetime(2026, 2, 7, 13, 49, tzinfo=UTC).timestamp())
    assert c.source_amount == 10000
    assert c.category_id == 11
    assert c.source_account_id == 1
    assert c.destination_account_id is None
    assert c.destination_amount is None
    assert c.tag_ids == (101, 100)
    assert c.comment == "京东超市"


def test_unknown_category_leaves_field_unset():
    outcome = _assemble(type="expense", amount="12.00", category_name="Unknown", description="x")

    assert isinstance(outcome, Resolved)
    assert outcome.value.category_id is None
    assert outcome.value.source_amount == 1200
    assert outcome.value.comment == "x"


def test_category_from_other_type_does_not_resolve():
    outcome = _assemble(type="expense", amount="1", category_name="Interest")

    assert outcome.value.category_id is None


def test_empty_type_is_rejected_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="bill_recognition.assembler"):
        outcome = _assemble(type="", amount="1.00")

    assert outcome == Rejected(RejectionReason.EMPTY_TYPE)
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_unknown_type_is_rejected_with_error(caplog):
    with caplog.at_level(logging.ERROR, logger="bill_recognition.assembler"):
        outcome = _assemble(type="refund", amount="1.00")

    assert isinstance(outcome, Rejected)
    assert outcome.reason is RejectionReason.INVALID_TYPE
    assert any(r.levelno == logging.ERROR for r in caplog.records)


@pytest.mark.parametrize(
    ("amount", "reason"),
    [
        ("", RejectionReason.MISSING_AMOUNT),
        ("  ", RejectionReason.MISSING_AMOUNT),
        ("abc", RejectionReason.INVALID_AMOUNT),
        ("12.345", RejectionReason.INVALID_AMOUNT),
    ],
)
def test_bad_source_amount_is_rejected(amount, reason):
    outcome = _assemble(type="income", amount=amount)

    assert isinstance(outcome, Rejected)
    assert outcome.reason is reason


def test_unparseable_time_is_soft():
    outcome = _assemble(type="income", time="last tuesday", amount="5")

    assert isinstance(outcome, Resolved)
    assert outcome.value.time is None


def test_empty_description_gives_no_comment():
    outcome = _assemble(type="income", amount="5")

    assert outcome.value.comment is None


def test_transfer_with_destination():
    outcome = _assemble(
        type="transfer",
        amount="-50.00",
        destination_amount="49.50",
        account_name="Bank",
        destination_account_name="Cash",
        category_name="Between Accounts",
    )

    c = outcome.value
    assert c.type is TransactionType.TRANSFER
    assert c.source_amount == 5000
    assert c.destination_amount == 4950
    assert c.source_account_id == 2
    assert c.destination_account_id == 1
    assert c.category_id == 31


def test_transfer_with_bad_destination_amount_is_rejected():
    outcome = _assemble(type="transfer", amount="50", destination_amount="lots")

    assert isinstance(outcome, Rejected)
    assert outcome.reason is RejectionReason.INVALID_DESTINATION_AMOUNT


def test_destination_amount_ignored_for_non_transfer():
    outcome = _assemble(type="expense", amount="50", destination_amount="lots")

    assert isinstance(outcome, Resolved)
    assert outcome.value.destination_amount is None


def test_payload_uses_camel_case_and_string_ids():
    outcome = _assemble(
        type="expense",
        amount="-1.00",
        account_name="Cash",
        category_name="Groceries",
        tag_names=("trip",),
    )

    payload = outcome.value.model_dump(mode="json", by_alias=True, exclude_none=True)

    assert payload == {
        "type": 3,
        "sourceAmount": 100,
        "categoryId": "11",
        "sourceAccountId": "1",
        "tagIds": ["100"],
    }
