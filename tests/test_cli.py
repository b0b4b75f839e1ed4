"""Tests for the print-rebalance command."""

import json

import pytest

from portfolio_models import SnapshotLoadError
from rebalance_engine.cli import load_snapshot, main


@pytest.fixture
def snapshot_path(tmp_path, demo_client):
    path = tmp_path / "clients.json"
    path.write_text(json.dumps([demo_client.model_dump(by_alias=True, mode="json")]))
    return path


@pytest.fixture
def run(preserve_root_logger, capsys):
    def _run(*argv):
        code = main(list(argv))
        return code, capsys.readouterr().out
    return _run


class TestLoadSnapshot:

    def test_list_of_clients(self, snapshot_path, demo_client):
        assert load_snapshot(snapshot_path) == [demo_client]

    def test_single_client_object(self, tmp_path, demo_client):
        path = tmp_path / "client.json"
        path.write_text(demo_client.model_dump_json(by_alias=True))

        assert load_snapshot(path) == [demo_client]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError):
            load_snapshot(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(SnapshotLoadError):
            load_snapshot(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'\xff\xfe{"id": 1}')

        with pytest.raises(SnapshotLoadError, match="Cannot read snapshot"):
            load_snapshot(path)

    def test_invalid_client(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"id": "c1"}]))

        with pytest.raises(SnapshotLoadError, match="Invalid snapshot"):
            load_snapshot(path)


class TestPrintRebalance:

    def test_logs_trades_and_cash_row(self, run, snapshot_path):
        code, out = run("print-rebalance", str(snapshot_path))

        assert code == 0
        assert "total portfolio value $128,905.00" in out
        assert "AAPL" in out and "+24" in out and "$+4,452.00" in out
        assert "CASH" in out and "diff $-5,000.00" in out
        assert "[client_id=demo-1]" in out
        assert "[account_id=acc-1]" in out

    def test_classify_logs_exposure(self, run, snapshot_path):
        code, out = run("print-rebalance", str(snapshot_path), "--classify")

        assert code == 0
        assert "US_EQUITY" in out
        assert "US Equity" in out

    def test_account_filter(self, run, snapshot_path):
        code, out = run("print-rebalance", str(snapshot_path), "--account", "other")

        assert code == 0
        assert "AAPL" not in out

    def test_unknown_client(self, run, snapshot_path):
        code, out = run("print-rebalance", str(snapshot_path), "--client", "nobody")

        assert code == 1
        assert "not found" in out

    def test_json_logging_from_config(self, run, snapshot_path, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("logging:\n  format: json\n")

        code, out = run("print-rebalance", str(snapshot_path), "--config", str(config_path))

        assert code == 0
        records = [json.loads(line) for line in out.splitlines() if line.strip()]
        assert any(record.get("account_id") == "acc-1" for record in records)

    def test_over_allocation_warning(self, run, tmp_path, demo_client):
        account = demo_client.accounts[0]
        over = account.model_copy(update={
            "positions": [pos.model_copy(update={"target_pct": 60}) for pos in account.positions]
        })
        path = tmp_path / "over.json"
        path.write_text(demo_client.model_copy(update={"accounts": [over]}).model_dump_json(by_alias=True))

        code, out = run("print-rebalance", str(path))

        assert code == 0
        assert "WARNING" in out
        assert "-20.00%" in out

    def test_bad_snapshot_exits_1(self, run, tmp_path):
        code, out = run("print-rebalance", str(tmp_path / "missing.json"))

        assert code == 1
        assert "Cannot read snapshot" in out

    def test_bad_config_exits_1(self, run, snapshot_path, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("engine:\n  drift_threshold_percent: 99\n")

        code, out = run("print-rebalance", str(snapshot_path), "--config", str(config_path))

        assert code == 1
        assert "Failed to load configuration" in out

    def test_malformed_config_exits_1(self, run, snapshot_path, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("engine: [unclosed\n")

        code, out = run("print-rebalance", str(snapshot_path), "--config", str(config_path))

        assert code == 1
        assert "Failed to load configuration" in out

    def test_classify_logs_composition(self, run, snapshot_path):
        code, out = run("print-rebalance", str(snapshot_path), "--classify")

        assert code == 0
        assert "Composition: equity 96.12%" in out
        assert "Municipal bond states" not in out
