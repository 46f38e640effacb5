"""
Tests for the command-line extractor.
"""

import io
import json

from usemyvoucher.cli import main


def test_reads_file(tmp_path, capsys):
    voucher = tmp_path / "voucher.txt"
    voucher.write_text("Shop: Books Corner\nCode: READ-MORE\nExpires 2025-01-31", encoding="utf-8")

    assert main([str(voucher), "--category", "Books"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["fields"]["merchant_name"] == "Books Corner"
    assert output["fields"]["voucher_code"] == "READ-MORE"
    assert output["fields"]["expiry_date"] == "2025-01-31"
    assert output["fields"]["category"] == "Books"
    assert "debug" not in output


def test_reads_stdin_with_debug(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Brand: Zed\n15% off"))

    assert main(["--debug"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["fields"]["discount_value"] == "15% off"
    assert output["debug"]["patterns_matched"]["merchant_name"] == "merchant_label"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "cannot read" in capsys.readouterr().err
