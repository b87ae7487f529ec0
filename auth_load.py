"""
auth_load.py - simple async load script against a gated app

Sends COUNT requests carrying the same Basic credentials. With the cache
enabled, only the first requests pay for bcrypt; the rest are cache hits.

Usage:
  python auth_load.py --base http://127.0.0.1:8000 --user alice --password secret --count 2000 --concurrency 50
"""
import argparse
import asyncio
import time
from datetime import datetime, timezone

import httpx

from basic_gate.gate.credentials import encode_basic


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


async def _hit_one(client: httpx.AsyncClient, url: str, authorization: str):
    try:
        r = await client.get(url, headers={"Authorization": authorization}, timeout=30)
        return r.status_code
    except httpx.HTTPError:
        return None


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--path", default="/health_gate")
    parser.add_argument("--user", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=50)
    args = parser.parse_args()

    authorization = encode_basic(args.user, args.password)
    url = f"{args.base}{args.path}"

    start_iso = _now_iso()
    t0 = time.perf_counter()
    statuses = {}

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            async with sem:
                code = await _hit_one(client, url, authorization)
                statuses[code] = statuses.get(code, 0) + 1

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    ok = statuses.get(200, 0)
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   requests={args.count}, ok={ok}, fail={args.count - ok}")
    print(f"CODES: {dict(sorted(statuses.items(), key=lambda kv: str(kv[0])))}")
    if dt > 0:
        print(f"RPS:   {ok/dt:.1f} req/s")


if __name__ == "__main__":
    asyncio.run(main())
