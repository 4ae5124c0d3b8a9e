from datetime import datetime
from zoneinfo import ZoneInfo

from bill_recognition import RawRecognizedItem, parse_bill_list_text
from bill_recognition.bill_parser import DESCRIPTION_PLACEHOLDER

SHANGHAI = ZoneInfo("Asia/Shanghai")
REF_2026 = datetime(2026, 3, 1, 12, 0, tzinfo=SHANGHAI)


def _parse(text: str, ref: datetime = REF_2026) -> list[RawRecognizedItem]:
    return list(parse_bill_list_text(text, ref))


def test_two_line_transcript():
    items = _parse("京东超市 2月7日 21:49 -100.00\n余额宝收益 2月7日 22:10 +5.23\n")

    assert items == [
        RawRecognizedItem(
            type="expense",
            time="2026-02-07 21:49:00",
            amount="-100.00",
            description="京东超市",
        ),
        RawRecognizedItem(
            type="income",
            time="2026-02-07 22:10:00",
            amount="+5.23",
            description="余额宝收益",
        ),
    ]


def test_year_comes_from_reference_time():
    items = _parse("咖啡 12月31日 09:05 -18.00", datetime(2025, 6, 1, tzinfo=SHANGHAI))

    assert items[0].time == "2025-12-31 09:05:00"


def test_single_digit_fields_are_zero_padded():
    items = _parse("地铁 3月5日 8:07 -4")

    assert items[0].time == "2026-03-05 08:07:00"
    assert items[0].amount == "-4"


def test_unsigned_amount_is_income():
    items = _parse("退款 2月1日 10:00 30.50")

    assert items[0].type == "income"
    assert items[0].amount == "30.50"


def test_non_transaction_lines_are_skipped():
    text = "\n".join(
        [
            "账单明细",
            "本月支出 1234.00",
            "",
            "   ",
            "京东超市 2月7日 21:49 -100.00",
            "2月7日 没有金额",
            "共 1 笔",
        ]
    )

    items = _parse(text)

    assert [i.description for i in items] == ["京东超市"]


def test_description_falls_back_to_text_after_date():
    items = _parse("2月7日 21:49 午餐 -25.00")

    assert items[0].description == "午餐"


def test_description_placeholder_when_no_text():
    items = _parse("2月7日 21:49 -25.00")

    assert items[0].description == DESCRIPTION_PLACEHOLDER


def test_empty_transcript_yields_nothing():
    assert _parse("") == []


def test_parser_never_emits_transfer():
    text = "转账给张三 2月7日 21:49 -100.00\n转账收入 2月8日 09:00 100.00"

    assert {i.type for i in _parse(text)} == {"expense", "income"}
