"""Credit balance status — reports Redis connectivity and live balances.

Checks:
- Redis connectivity
- Every balance key under the configured prefix: stored credits, remaining
  TTL and seconds since the last write (60 - TTL)

Usage:
    python scripts/credit_status.py
    python scripts/credit_status.py --json
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import settings  # noqa: E402
from credit_manager.db.redis import close_redis, get_redis  # noqa: E402
from credit_manager.limiter.balance_key import BALANCE_TTL_SEC  # noqa: E402
from credit_manager.utils.logger import setup_logger  # noqa: E402

STATUS_OK = "OK"
STATUS_ERROR = "ERROR"


async def check_balances() -> dict:
    """Scan balance keys and return structured report."""
    report: dict = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "prefix": settings.credit_key_prefix,
        "balances": [],
    }

    try:
        redis = await get_redis()
        await redis.ping()
        report["redis"] = {"status": STATUS_OK, "url": settings.redis_url}
    except Exception as e:
        logger.warning(f"[STATUS] Redis unreachable at {settings.redis_url}: {e}")
        report["redis"] = {"status": STATUS_ERROR, "error": str(e)}
        return report

    async for key in redis.scan_iter(match=f"{settings.credit_key_prefix}:*"):
        balance = await redis.get(key)
        ttl = await redis.ttl(key)
        if balance is None:
            continue  # expired between SCAN and GET
        report["balances"].append({
            "key": key,
            "balance": int(balance),
            "ttl": ttl,
            "since_write_sec": BALANCE_TTL_SEC - ttl if ttl >= 0 else None,
        })

    report["balances"].sort(key=lambda b: b["key"])
    logger.debug(f"[STATUS] {len(report['balances'])} balance keys under {settings.credit_key_prefix}")
    return report


def print_report(report: dict) -> None:
    """Pretty-print the balance report."""
    print("=" * 60)
    print(f"CREDIT STATUS — {report['timestamp']}")
    print("=" * 60)

    redis = report["redis"]
    print(f"\n  Redis:    [{redis['status']}]")
    if "error" in redis:
        print(f"    Error: {redis['error']}")
        return

    balances = report["balances"]
    print(f"\n  Balance keys ({report['prefix']}:*): {len(balances)}")
    for b in balances:
        since = b["since_write_sec"]
        print(
            f"    {b['key']:70s} {b['balance']:>6,}  ttl={b['ttl']:>3}s"
            f"  since_write={since if since is not None else 'N/A'}"
        )


async def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--json", action="store_true", help="print raw JSON report")
    args = parser.parse_args()
    # Keep stdout clean for --json consumers
    setup_logger(level="WARNING" if args.json else None, log_dir=None)

    try:
        report = await check_balances()
    finally:
        await close_redis()

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print_report(report)


if __name__ == "__main__":
    asyncio.run(main())
