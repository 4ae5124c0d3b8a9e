import json

from typer.testing import CliRunner

from bill_recognition.cli import app

runner = CliRunner()

TRANSCRIPT = "京东超市 2月7日 21:49 -100.00\n余额宝收益 2月7日 22:10 +5.23\n"


def test_parse_text_json(tmp_path):
    text_file = tmp_path / "ocr.txt"
    text_file.write_text(TRANSCRIPT, encoding="utf-8")

    result = runner.invoke(
        app, ["parse-text", str(text_file), "--timezone", "Asia/Shanghai", "--year", "2026", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [t["sourceAmount"] for t in payload["transactions"]] == [10000, 523]
    assert [t["type"] for t in payload["transactions"]] == [3, 2]
    assert payload["transactions"][0]["comment"] == "京东超市"


def test_parse_text_table(tmp_path):
    text_file = tmp_path / "ocr.txt"
    text_file.write_text(TRANSCRIPT, encoding="utf-8")

    result = runner.invoke(app, ["parse-text", str(text_file), "--year", "2026"])

    assert result.exit_code == 0, result.output
    assert "2 transaction(s) recognized" in result.stdout


def test_parse_text_with_no_transactions(tmp_path):
    text_file = tmp_path / "ocr.txt"
    text_file.write_text("nothing here\n", encoding="utf-8")

    result = runner.invoke(app, ["parse-text", str(text_file)])

    assert result.exit_code == 1


def test_recognize_reports_disabled_feature(tmp_path):
    image = tmp_path / "bill.png"
    image.write_bytes(b"\x89PNG fake")
    db_url = f"sqlite+pysqlite:///{tmp_path / 'unused.sqlite'}"

    result = runner.invoke(app, ["recognize", str(image), "--uid", "1", "--database-url", db_url])

    assert result.exit_code == 1


def test_no_arguments_shows_help():
    result = runner.invoke(app, [])

    assert "parse-text" in result.output
