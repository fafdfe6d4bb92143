"""Position Store Unit Tests."""

import json

import pytest

from src.business.trading.models.position import PositionLedger
from src.business.trading.models.trading import LedgerError
from src.business.trading.store import PositionStore


class TestPositionStore:
    def test_missing_file_is_empty_ledger(self, tmp_path):
        store = PositionStore(tmp_path / "positions.json")
        assert len(store.load()) == 0

    def test_save_and_load(self, tmp_path, make_position):
        store = PositionStore(tmp_path / "nested" / "positions.json")
        ledger = PositionLedger()
        ledger.open_position(make_position("a", amount=10**25))
        ledger.open_position(make_position("b", entry_price=0.0042))

        store.save(ledger)

        assert store.path.exists()
        assert not store.path.with_suffix(".json.tmp").exists()
        assert store.load() == ledger

        data = json.loads(store.path.read_text())
        assert "updated_at" in data
        assert data["positions"][0]["amount"] == str(10**25)

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "positions.json"
        path.write_text("{not json")
        with pytest.raises(LedgerError):
            PositionStore(path).load()

    def test_missing_fields_raise(self, tmp_path):
        path = tmp_path / "positions.json"
        path.write_text(json.dumps({"positions": [{"symbol": "X"}]}))
        with pytest.raises(LedgerError):
            PositionStore(path).load()

    def test_failed_replace_removes_tmp_file(self, tmp_path, make_position, monkeypatch):
        store = PositionStore(tmp_path / "positions.json")
        ledger = PositionLedger()
        ledger.open_position(make_position("a"))

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("src.business.trading.store.os.replace", fail_replace)
        with pytest.raises(OSError, match="disk full"):
            store.save(ledger)

        assert not store.path.exists()
        assert not store.path.with_suffix(".json.tmp").exists()
