from bill_recognition import (
    AccountRecord,
    CategoryRecord,
    CategoryType,
    TagRecord,
    TransactionType,
    build_lookup_tables,
)
from bill_recognition.lookups import LookupTables


def _tables() -> LookupTables:
    return build_lookup_tables(
        accounts=[
            AccountRecord(1, "Cash"),
            AccountRecord(2, "Old Card", hidden=True),
            AccountRecord(3, "Cash"),
        ],
        categories=[
            CategoryRecord(10, "Food", CategoryType.EXPENSE),
            CategoryRecord(11, "Groceries", CategoryType.EXPENSE, parent_category_id=10),
            CategoryRecord(12, "Snacks", CategoryType.EXPENSE, parent_category_id=10, hidden=True),
            CategoryRecord(20, "Salary", CategoryType.INCOME),
            CategoryRecord(21, "Interest", CategoryType.INCOME, parent_category_id=20),
            CategoryRecord(22, "Groceries", CategoryType.INCOME, parent_category_id=20),
            CategoryRecord(31, "Between Accounts", CategoryType.TRANSFER, parent_category_id=30),
        ],
        tags=[
            TagRecord(100, "trip"),
            TagRecord(101, "work"),
            TagRecord(102, "secret", hidden=True),
        ],
    )


def test_only_visible_secondary_categories_resolve():
    t = _tables()

    assert t.resolve_category("Groceries", TransactionType.EXPENSE) == 11
    assert t.resolve_category("Food", TransactionType.EXPENSE) is None
    assert t.resolve_category("Snacks", TransactionType.EXPENSE) is None


def test_category_resolution_is_partitioned_by_type():
    t = _tables()

    assert t.resolve_category("Groceries", TransactionType.INCOME) == 22
    assert t.resolve_category("Interest", TransactionType.EXPENSE) is None
    assert t.resolve_category("Interest", TransactionType.INCOME) == 21
    assert t.resolve_category("Between Accounts", TransactionType.TRANSFER) == 31
    assert t.resolve_category("", TransactionType.EXPENSE) is None


def test_accounts_skip_hidden_and_last_name_wins():
    t = _tables()

    assert t.resolve_account("Cash") == 3
    assert t.resolve_account("Old Card") is None
    assert t.resolve_account("") is None


def test_tags_keep_input_order_and_drop_unknown():
    t = _tables()

    assert t.resolve_tags(["work", "nope", "trip", "secret"]) == (101, 100)
    assert t.resolve_tags([]) == ()


def test_empty_tables_resolve_nothing():
    t = LookupTables()

    assert t.resolve_account("Cash") is None
    assert t.resolve_category("Groceries", TransactionType.EXPENSE) is None
    assert t.resolve_tags(["trip"]) == ()


def test_duplicate_category_names_resolve_to_the_later_record():
    t = build_lookup_tables(
        accounts=[],
        categories=[
            CategoryRecord(10, "Daily", CategoryType.EXPENSE),
            CategoryRecord(11, "Food", CategoryType.EXPENSE, parent_category_id=10),
            CategoryRecord(12, "Food", CategoryType.EXPENSE, parent_category_id=10),
            CategoryRecord(13, "Food", CategoryType.EXPENSE, parent_category_id=10, hidden=True),
        ],
        tags=[TagRecord(1, "trip"), TagRecord(2, "trip")],
    )

    assert t.resolve_category("Food", TransactionType.EXPENSE) == 12
    assert t.resolve_tags(["trip"]) == (2,)
