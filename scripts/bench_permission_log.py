#!/usr/bin/env python3
"""Benchmark permission log queries: latency (p50, p95, p99) and QPS.

Seeds flag edits on one user through the API, then pages through the
permission log with and without a key filter.

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=... BENCH_USER_ID=<target user id>
  uv run python scripts/bench_permission_log.py [--num-edits 500] [--num-queries 100]
"""
from __future__ import annotations

import argparse
import itertools
import os
import statistics
import sys
import time

import httpx

KEYS = ("manageUsers", "manageCategories", "viewAIReports", "generateAIReports")


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def percentiles(latencies: list[float]) -> tuple[float, float, float]:
    n = len(latencies)
    ordered = sorted(latencies)
    p50 = statistics.median(latencies) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95
    return p50, p95, p99


def run_queries(
    client: httpx.Client,
    url: str,
    headers: dict[str, str],
    params: dict[str, object],
    num_queries: int,
) -> tuple[list[float], int, float]:
    """Walk the log page by page, restarting from the top when exhausted."""
    latencies: list[float] = []
    errors = 0
    cursor: str | None = None
    start = time.perf_counter()
    for _ in range(num_queries):
        query = dict(params)
        if cursor:
            query["cursor"] = cursor
        t0 = time.perf_counter()
        r = client.get(url, params=query, headers=headers)
        elapsed = time.perf_counter() - t0
        if r.status_code == 200:
            latencies.append(elapsed)
            cursor = r.json()["next_cursor"]
        else:
            errors += 1
            cursor = None
    return latencies, errors, time.perf_counter() - start


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark permission log queries")
    parser.add_argument("--num-edits", type=int, default=200, help="Flag edits to seed before querying")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of log page requests per run")
    parser.add_argument("--page-size", type=int, default=25, help="Log page size")
    parser.add_argument("--output", type=str, default="/results/bench_permission_log.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    keycloak_url = os.environ.get("KEYCLOAK_URL", "http://localhost:8080")
    realm = os.environ.get("KEYCLOAK_REALM", "orgperms")
    client_id = os.environ.get("KEYCLOAK_CLIENT_ID", "orgperms-api")
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "orgperms-api-secret")
    user = os.environ.get("BENCH_USER", "testuser")
    password = os.environ.get("BENCH_PASSWORD", "testpass")
    target_user_id = os.environ.get("BENCH_USER_ID")
    if not target_user_id:
        print("BENCH_USER_ID must name an existing user to edit.")
        return 1

    print("Getting token...")
    token = get_token(keycloak_url, realm, client_id, client_secret, user, password)
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    print(f"Seeding {args.num_edits} flag edits on user {target_user_id}...")
    with httpx.Client(timeout=60.0) as client:
        values = itertools.cycle((True, False))
        for i in range(args.num_edits):
            key = KEYS[i % len(KEYS)]
            client.patch(
                f"{api_url}/v1/users/{target_user_id}/permissions/{key}",
                json={"value": next(values), "notes": f"bench edit {i}"},
                headers=headers,
            ).raise_for_status()
        client.post(
            f"{api_url}/v1/users/{target_user_id}/permissions/reset",
            json={"notes": "bench cleanup"},
            headers=headers,
        ).raise_for_status()

    runs = {
        "unfiltered": {"limit": args.page_size},
        "by user": {"limit": args.page_size, "user_id": target_user_id},
        "by key": {"limit": args.page_size, "key": KEYS[0]},
    }
    lines = [f"Permission log benchmark (edits={args.num_edits}, page size={args.page_size})"]
    with httpx.Client(timeout=30.0) as client:
        for name, params in runs.items():
            print(f"Running {args.num_queries} log queries ({name})...")
            latencies, errors, total_elapsed = run_queries(
                client, f"{api_url}/v1/permission-logs", headers, params, args.num_queries
            )
            if not latencies:
                print(f"No successful log queries ({name}).")
                return 1
            p50, p95, p99 = percentiles(latencies)
            lines.append(
                f"  {name}: QPS={len(latencies) / total_elapsed:.2f} "
                f"p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms, errors={errors}"
            )

    summary = "\n".join(lines) + "\n"
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
