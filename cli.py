#!/usr/bin/env python3
"""
Command-line front end for the resilient invoker.

Submits one generation through the gateway and prints the image URL.

Usage:
    python cli.py "a red fox" [--model img3] [--gateway-url URL]
                              [--timeout S] [--max-attempts N]
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from infra import InvokerConfig
from invoker import DEFAULT_MODEL, SUPPORTED_MODELS, Failure, GenerationResult

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an image through the Image Weaver gateway"
    )
    parser.add_argument("prompt", help="Text prompt (max 200 characters)")
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        choices=SUPPORTED_MODELS,
        help=f"Image model (default: {DEFAULT_MODEL})",
    )
    parser.add_argument(
        "--gateway-url",
        default=None,
        help="Gateway root URL (default: $GATEWAY_URL or http://localhost:5000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-attempt timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Maximum number of attempts (default: 3)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each attempt")
    return parser


def report(result: GenerationResult) -> int:
    """Print a terminal result and map it to an exit code."""
    if isinstance(result, Failure):
        print(f"✗ {result.message}", file=sys.stderr)
        return EXIT_INVALID if result.kind == "validation" else EXIT_FAILED
    print(result.url)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = InvokerConfig.from_env(
        gateway_url=args.gateway_url,
        timeout_s=args.timeout,
        max_attempts=args.max_attempts,
    )
    try:
        invoker = config.create_invoker()
    except ValueError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_INVALID

    result = asyncio.run(invoker.generate(args.prompt, args.model))
    return report(result)


if __name__ == "__main__":
    sys.exit(main())
