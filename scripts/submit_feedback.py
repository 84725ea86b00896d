#!/usr/bin/env python3
"""Post a feedback submission to a running endpoint (smoke test).

Usage:
    python -m scripts.submit_feedback --app-name MyApp --title "Crash on launch" \
        --body "Steps..." --version 1.2.0
    python -m scripts.submit_feedback --url https://example.com/api/feedback ...
"""

import argparse
import asyncio
import json
import sys

import httpx

DEFAULT_URL = "http://localhost:8000/api/feedback"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--url", default=DEFAULT_URL, help="Feedback endpoint URL")
    parser.add_argument("--app-name", required=True, help="Target repository name")
    parser.add_argument("--title", required=True)
    parser.add_argument("--body", required=True)
    parser.add_argument("--version", required=True, help="App version label")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    payload = {
        "appName": args.app_name,
        "title": args.title,
        "body": args.body,
        "version": args.version,
    }

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.post(args.url, json=payload)
        except httpx.HTTPError as e:
            print(f"ERROR: request to {args.url} failed: {e}")
            return 1

    print(f"Status: {resp.status_code}")
    try:
        print(json.dumps(resp.json(), indent=2))
    except ValueError:
        print(resp.text)

    return 0 if resp.status_code == 201 else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
