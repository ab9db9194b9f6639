#!/usr/bin/env python3
"""
Smoke-check a running DalCo API.
Usage: BASE_URL=http://localhost:8000 python scripts/health_check.py
"""

import os
import sys

import requests

BASE_URL = os.environ.get("BASE_URL", "http://localhost:8000").rstrip("/")
TIMEOUT_SECONDS = 15
ENDPOINTS = [
    "/",
    "/api/health",
    "/api/system/status",
    "/api/system/status?deep=true",
    "/api/analytics/overview",
]


def check(path: str) -> bool:
    url = f"{BASE_URL}{path}"
    print(f"Checking {url} ... ", end="", flush=True)
    try:
        response = requests.get(url, timeout=TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.HTTPError as e:
        print(f"FAIL - {e.response.status_code} {e.response.reason}")
        return False
    except requests.RequestException as e:
        print(f"FAIL - {e}")
        return False
    print(f"OK ({response.status_code})")
    return True


def main():
    print(f"Health check base: {BASE_URL}")
    results = [check(path) for path in ENDPOINTS]
    if not all(results):
        print("One or more checks failed", file=sys.stderr)
        sys.exit(1)
    print("All checks passed")


if __name__ == "__main__":
    main()
