import argparse
import asyncio
import json
import logging
import sys
from typing import List

from pointer_api.batch import BatchCoordinator
from pointer_api.cache import ResponseCache
from pointer_api.chain_client import ChainQueryClient
from pointer_api.config import ServiceConfig
from pointer_api.resolver import PointerResolver


async def run_lookup(addresses: List[str], base_url: str, strategy: str) -> list:
    client = ChainQueryClient(base_url=base_url)
    try:
        coordinator = BatchCoordinator(
            PointerResolver(client, strategy=strategy),
            cache=ResponseCache(),
        )
        results = await coordinator.resolve_many(addresses)
    finally:
        await client.aclose()
    return [r.to_response() for r in results]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pointer-api",
        description="Classify addresses and denoms as pointers or base assets.",
    )
    parser.add_argument("addresses", nargs="*", help="EVM, CosmWasm, ibc/ or factory/ addresses")
    parser.add_argument("--rest", default=ServiceConfig.SEIREST, help="Chain REST endpoint")
    parser.add_argument(
        "--strategy",
        choices=["parallel", "sequential"],
        default="parallel",
        help="Issue all candidate lookups at once or stop at the first match",
    )
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: List[str] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else ServiceConfig.LOG_LEVEL)

    if args.serve:
        from pointer_api.api import main as serve
        serve()
        return 0

    if not args.addresses:
        print("Provide at least one address, or --serve to start the API.", file=sys.stderr)
        return 2

    results = asyncio.run(run_lookup(args.addresses, args.rest, args.strategy))
    print(json.dumps(results, indent=2))
    return 1 if any("error" in r for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
