"""Trade file loader.

Reads closed trades from CSV or JSON into TradeRecord objects.

CSV files need a header row with at least `pnl` and `trade_date` columns
(`tradeDate` is accepted as an alias). Other TradeRecord fields are optional;
empty cells are treated as missing. JSON files hold a list of objects with
the same keys.

Example:
    >>> trades = load_trades(Path("journal/trades.csv"))
    >>> len(trades)
    120
"""

import csv
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tradestats.statistics.errors import InvalidArgumentError
from tradestats.statistics.models import TradeRecord
from tradestats.system import LoggerFactory

logger = LoggerFactory.get_logger()

_FIELD_ALIASES = {
    "tradeDate": "trade_date",
    "tradeId": "trade_id",
    "entryPrice": "entry_price",
    "exitPrice": "exit_price",
    "positionSize": "position_size",
    "stopLoss": "stop_loss",
    "exitDate": "exit_date",
}


def _normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        name = _FIELD_ALIASES.get(key.strip(), key.strip())
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                continue
        normalized[name] = value
    return normalized


def _read_csv(path: Path) -> list[dict[str, Any]]:
    with path.open("r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def _read_json(path: Path) -> list[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise InvalidArgumentError(f"Expected a JSON list of trades in {path}, got {type(data).__name__}")
    return data


def load_trades(path: Path | str) -> list[TradeRecord]:
    """
    Load trades from a .csv or .json file.

    Args:
        path: Path to the trade file

    Returns:
        TradeRecords in file order

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidArgumentError: If the suffix is not .csv/.json, or a row is
            missing pnl/trade_date or holds unparseable values
    """
    trade_path = Path(path)
    if not trade_path.exists():
        raise FileNotFoundError(f"Trade file not found: {trade_path}")

    suffix = trade_path.suffix.lower()
    if suffix == ".csv":
        rows = _read_csv(trade_path)
    elif suffix == ".json":
        rows = _read_json(trade_path)
    else:
        raise InvalidArgumentError(f"Unsupported trade file type: {trade_path.suffix!r} (expected .csv or .json)")

    trades: list[TradeRecord] = []
    for row_number, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise InvalidArgumentError(f"Row {row_number} in {trade_path} is not an object")
        try:
            trades.append(TradeRecord.model_validate(_normalize_row(row)))
        except ValidationError as e:
            logger.error(
                "loaders.invalid_row",
                path=str(trade_path),
                row=row_number,
                error_count=e.error_count(),
            )
            raise InvalidArgumentError(f"Invalid trade at row {row_number} in {trade_path}: {e}") from e

    logger.info("loaders.trades_loaded", path=str(trade_path), count=len(trades))
    return trades
