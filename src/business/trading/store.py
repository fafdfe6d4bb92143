"""
Position Store - 持仓账本存储

使用 JSON 文件持久化持仓账本，重启后恢复持仓。

文件结构:
    data/trading/positions.json
    {
        "positions": [{"token_id": ..., "amount": "123", ...}],
        "updated_at": "2025-01-26T10:00:00"
    }
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path

from src.business.trading.models.position import PositionLedger
from src.business.trading.models.trading import LedgerError

logger = logging.getLogger(__name__)


class PositionStore:
    """持仓账本存储

    Usage:
        store = PositionStore("data/trading/positions.json")
        ledger = store.load()
        store.save(ledger)
    """

    def __init__(self, path: str | Path) -> None:
        """初始化存储

        Args:
            path: JSON 文件路径
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> PositionLedger:
        """加载账本，文件不存在时返回空账本

        Raises:
            LedgerError: 文件内容无法解析
        """
        if not self._path.exists():
            logger.info(f"No position file at {self._path}, starting with empty ledger")
            return PositionLedger()

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            ledger = PositionLedger.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            raise LedgerError(f"Failed to load positions from {self._path}: {e}") from e

        logger.info(f"Loaded {len(ledger)} positions from {self._path}")
        return ledger

    def save(self, ledger: PositionLedger) -> None:
        """保存账本 (先写临时文件再替换，避免写一半的文件)"""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = ledger.to_dict()
        data["updated_at"] = datetime.now().isoformat()

        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except Exception as e:
            logger.error(f"Failed to save positions to {self._path}: {e}")
            tmp_path.unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(ledger)} positions -> {self._path}")
