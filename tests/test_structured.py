from bill_recognition import RawRecognizedItem
from bill_recognition.providers import StructuredOcrItem
from bill_recognition.structured import raw_item_from_structured, raw_items_from_structured


def test_classify_type_word_sets_type():
    item = StructuredOcrItem(
        amount="-20.00",
        classify="转账",
        account="Bank",
        date="2026-02-07 10:00",
        text="还信用卡",
    )

    raw = raw_item_from_structured(item)

    assert raw == RawRecognizedItem(
        type="transfer",
        time="2026-02-07 10:00",
        amount="-20.00",
        account_name="Bank",
        description="还信用卡",
    )


def test_classify_other_word_becomes_category():
    raw = raw_item_from_structured(StructuredOcrItem(amount="-8.5", classify="Groceries"))

    assert raw.type == "expense"
    assert raw.category_name == "Groceries"


def test_numeric_amount_and_nulls_are_accepted():
    item = StructuredOcrItem.model_validate(
        {"amount": 5.23, "classify": None, "account": None, "extra": "ignored"}
    )

    raw = raw_item_from_structured(item)

    assert raw.amount == "5.23"
    assert raw.type == "income"
    assert raw.category_name == ""
    assert raw.account_name == ""


def test_empty_amount_keeps_a_type_so_amount_is_reported():
    raw = raw_item_from_structured(StructuredOcrItem(classify="Food"))

    assert raw.type == "income"
    assert raw.amount == ""


def test_project_and_labels_become_ordered_unique_tags():
    item = StructuredOcrItem(amount="1", project="trip", label="work， trip、family;  food")

    assert raw_item_from_structured(item).tag_names == ("trip", "work", "family", "food")


def test_batch_mapping_keeps_order():
    items = [StructuredOcrItem(amount="1", text="a"), StructuredOcrItem(amount="-2", text="b")]

    assert [r.description for r in raw_items_from_structured(items)] == ["a", "b"]
