"""
Reshape Etherscan txlist records for display.

Every raw field is passed through untouched; the derived fields
dateIso, status, valueEth and explorerUrl are added alongside.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

WEI_PER_ETHER = 10**18
ETHER_DECIMALS = 18

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def to_iso_date(timestamp: Any) -> Optional[str]:
    """
    Convert a Unix timestamp in seconds to an ISO-8601 UTC string.

    Returns e.g. "2023-11-14T22:13:20.000Z", or None when the timestamp
    is missing, unparseable or out of range.
    """
    seconds = _parse_int(timestamp)
    if seconds is None:
        return None
    try:
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def tx_status(record: Mapping[str, Any]) -> str:
    """Failed if either the error flag or the receipt status says so."""
    if record.get("isError") == "1" or record.get("txreceipt_status") == "0":
        return STATUS_FAILED
    return STATUS_SUCCESS


def parse_wei(value: Any) -> int:
    """Parse an amount in wei; missing, negative or garbage values are 0."""
    amount = _parse_int(value if value is not None else "0")
    if amount is None or amount < 0:
        return 0
    return amount


def format_ether(wei: int) -> str:
    """
    Format a wei amount as a decimal ether string.

    Trailing fractional zeros are trimmed, keeping at least one digit:
    10**18 -> "1.0", 1 -> "0.000000000000000001".
    """
    try:
        whole, frac = divmod(int(wei), WEI_PER_ETHER)
        if whole < 0:
            return "0"
        frac_str = f"{frac:0{ETHER_DECIMALS}d}".rstrip("0") or "0"
        return f"{whole}.{frac_str}"
    except (TypeError, ValueError):
        return "0"


def explorer_url(base_url: str, tx_hash: Any) -> Optional[str]:
    if not isinstance(tx_hash, str) or not tx_hash:
        return None
    return f"{base_url}{tx_hash}"


def map_transaction(record: Mapping[str, Any], explorer_base: str) -> dict[str, Any]:
    """Build a display record from a raw txlist entry without mutating it."""
    mapped = dict(record)
    mapped["dateIso"] = to_iso_date(record.get("timeStamp"))
    mapped["status"] = tx_status(record)
    mapped["valueEth"] = format_ether(parse_wei(record.get("value")))
    mapped["explorerUrl"] = explorer_url(explorer_base, record.get("hash"))
    return mapped


def map_transactions(
    records: Iterable[Any], explorer_base: str
) -> list[dict[str, Any]]:
    """Map raw records in order, skipping entries that are not objects."""
    return [
        map_transaction(record, explorer_base)
        for record in records
        if isinstance(record, Mapping)
    ]
