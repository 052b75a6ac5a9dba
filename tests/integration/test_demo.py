from __future__ import annotations

from pathlib import Path

import pytest

from cdex.demo import main


def test_demo_runs_end_to_end(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--base", "10", "--token", "10", "--swap", "1"]) == 0
    out = capsys.readouterr().out
    assert "[pool-demo] minted 10000000000000000000 shares" in out
    assert "[pool-demo] OK" in out


def test_demo_reads_yaml_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "pool.yaml"
    cfg.write_text("base_decimals: 0\ntoken_decimals: 0\nfee_numerator: 0\nfee_denominator: 1\n", encoding="utf-8")

    assert main(["--config", str(cfg), "--base", "1000", "--token", "1000", "--swap", "1000"]) == 0
    out = capsys.readouterr().out
    assert "swapped 1000 base for 500 token" in out


def test_demo_reports_failures(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--base", "0"]) == 1
    assert "FAIL (add liquidity)" in capsys.readouterr().out


@pytest.mark.parametrize("amount", ["1e999999", "1e-999999999", "abc"])
def test_demo_reports_bad_amounts(amount: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--base", amount]) == 1
    assert "FAIL (bad amount)" in capsys.readouterr().out
