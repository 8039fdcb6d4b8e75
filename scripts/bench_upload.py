#!/usr/bin/env python3
"""Benchmark document upload and sharing: throughput (docs/s) and latency.

Both accounts must already exist and be verified.

Usage:
    export API_URL=http://localhost:8000
    export BENCH_EMAIL=owner@example.com BENCH_PASSWORD=secret123
    export BENCH_SHARE_EMAIL=viewer@example.com
    python scripts/bench_upload.py [--num-docs 100] [--file-size 20000]
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx


def get_token(client: httpx.Client, api_url: str, email: str, password: str) -> str:
    r = client.post(f"{api_url}/auth/login", json={"email": email, "password": password})
    r.raise_for_status()
    return r.json()["data"]["token"]


def percentiles(latencies: list[float]) -> tuple[float, float, float]:
    n = len(latencies)
    ordered = sorted(latencies)
    p50 = statistics.median(latencies) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95
    return p50, p95, p99


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark document upload and sharing")
    parser.add_argument("--num-docs", type=int, default=50, help="Number of documents to upload")
    parser.add_argument("--file-size", type=int, default=20_000, help="Bytes per uploaded file")
    parser.add_argument("--output", type=str, default="/results/bench_upload.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    email = os.environ.get("BENCH_EMAIL", "owner@example.com")
    password = os.environ.get("BENCH_PASSWORD", "secret123")
    share_email = os.environ.get("BENCH_SHARE_EMAIL", "")

    payload = b"%PDF-1.4\n" + b"x" * max(args.file_size - 9, 0)
    upload_latencies: list[float] = []
    share_latencies: list[float] = []
    errors = 0

    with httpx.Client(timeout=120.0) as client:
        print("Getting token...")
        headers = {"Authorization": f"Bearer {get_token(client, api_url, email, password)}"}

        print(f"Uploading {args.num_docs} documents ({args.file_size} bytes each)...")
        start_total = time.perf_counter()
        for i in range(args.num_docs):
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/documents",
                data={
                    "title": f"Bench document {i}",
                    "description": "Benchmark upload",
                    "documentType": "Other",
                },
                files={"document": (f"bench_{i}.pdf", payload, "application/pdf")},
                headers=headers,
            )
            upload_latencies.append(time.perf_counter() - t0)
            if r.status_code != 201:
                errors += 1
                continue
            if share_email:
                doc_id = r.json()["data"]["id"]
                t0 = time.perf_counter()
                r = client.post(
                    f"{api_url}/documents/{doc_id}/share",
                    json={"email": share_email, "accessLevel": "view"},
                    headers=headers,
                )
                share_latencies.append(time.perf_counter() - t0)
                if r.status_code != 200:
                    errors += 1
        total_elapsed = time.perf_counter() - start_total

    n = args.num_docs - errors
    if n <= 0:
        print("No successful uploads.")
        return 1

    p50, p95, p99 = percentiles(upload_latencies)
    mb_per_sec = (n * args.file_size / 1_000_000) / total_elapsed if total_elapsed else 0
    summary = (
        f"Upload benchmark (n={args.num_docs}, errors={errors})\n"
        f"  Throughput: {n / total_elapsed:.2f} docs/s, ~{mb_per_sec:.4f} MB/s\n"
        f"  Upload latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
    )
    if share_latencies:
        s50, s95, s99 = percentiles(share_latencies)
        summary += f"  Share latency: p50={s50:.1f} ms, p95={s95:.1f} ms, p99={s99:.1f} ms\n"
    summary += f"  Total time: {total_elapsed:.2f} s\n"
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
