#!/usr/bin/env python3
"""
Benchmark token generation and parsing.
Outputs ops/sec for generate and parse on a fixed payload.
"""

import argparse
import json
import logging
import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))
from libs.hmacsigner.app.signer import Signer

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)


def run_bench(signer: Signer, payload: bytes, iterations: int):
    start = time.perf_counter()
    for _ in range(iterations):
        token = signer.generate(payload)
    gen_elapsed = time.perf_counter() - start

    start = time.perf_counter()
    for _ in range(iterations):
        if signer.parse(token) != payload:
            raise RuntimeError("parsed payload does not match")
    parse_elapsed = time.perf_counter() - start

    return {
        "iterations": iterations,
        "payload_bytes": len(payload),
        "token_bytes": len(token),
        "generate_ops_per_sec": round(iterations / gen_elapsed, 1),
        "parse_ops_per_sec": round(iterations / parse_elapsed, 1),
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark signed token generate/parse.")
    parser.add_argument("--iterations", type=int, default=100000, help="Calls per operation")
    parser.add_argument("--payload", default="a@b.c", help="Payload to sign")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    args = parser.parse_args()
    if args.iterations <= 0:
        raise ValueError("--iterations must be positive")

    signer = Signer(secret=os.urandom(32), ttl=3600)
    logger.info("Running %d iterations", args.iterations)
    result = run_bench(signer, args.payload.encode("utf-8"), args.iterations)

    if args.json:
        print(json.dumps(result, ensure_ascii=True, indent=2))
        return

    print("=== Signer Benchmark ===")
    print(f"Payload: {result['payload_bytes']} bytes, token: {result['token_bytes']} bytes")
    print(f"Generate: {result['generate_ops_per_sec']} ops/sec")
    print(f"Parse:    {result['parse_ops_per_sec']} ops/sec")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
