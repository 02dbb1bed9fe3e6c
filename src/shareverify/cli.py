"""Command line interface: reconstruct the secret of a JSON test case."""

from __future__ import annotations

import argparse
import logging
import sys

from shareverify.errors import SharingError
from shareverify.ingest import load
from shareverify.resolver import ConsistencyResolver
from shareverify.sharing import IntegerSecretSharing


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="shareverify",
        description="Reconstruct a secret from the shares in a JSON test case",
    )
    parser.add_argument("path", help="JSON share document")
    parser.add_argument(
        "--resolve",
        action="store_true",
        help="Vote over all k-subsets and report honest and fake shares",
    )
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        share_set = load(args.path)
        k = share_set.params.k
        if not args.resolve:
            print(IntegerSecretSharing().reconstruct(share_set.shares, k))
            return 0
        outcome = ConsistencyResolver(workers=args.workers).resolve(share_set.shares, k)
    except (SharingError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(outcome.secret)
    print(f"Honest: {', '.join(sorted(outcome.honest_ids))}")
    print(f"Fake: {', '.join(sorted(outcome.fake_ids)) or '-'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
