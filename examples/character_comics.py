#!/usr/bin/env python3
"""Look up a character, then page through their comics via AutoQuery.

Requires MARVEL_PUBLIC_KEY and MARVEL_PRIVATE_KEY in the environment.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from marvelquery import init_from_env


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List comics featuring a Marvel character")
    p.add_argument("name", nargs="?", default="Peter Parker")
    p.add_argument("limit", nargs="?", type=int, default=10)
    p.add_argument("pages", nargs="?", type=int, default=2)
    p.add_argument("--verbose", action="store_true", help="log the AutoQuery summary")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    async with init_from_env(auto_query=True) as api:
        character = await api("characters", {"name": args.name}).fetch_single()
        if character is None:
            print(f"No character named {args.name!r}")
            return

        print("=" * 65)
        print(f"Character : {character['name']}")
        print(f"Endpoint  : {'/'.join(map(str, character.endpoint))}")
        print(f"Comics    : {character['comics']['available']}")
        print("=" * 65)

        comics = character["comics"].query({"limit": args.limit, "order_by": "onsaleDate"})
        for _ in range(args.pages):
            if comics.is_complete:
                break
            await comics.fetch()
            for comic in comics.results:
                print(f"{comic['id']:>8} | {comic['title']}")
            print("-" * 65)

        print(f"Fetched {len(comics.result_history)} of {comics.total} comics")
        print(comics.metadata.attribution_text if comics.metadata else "")


if __name__ == "__main__":
    asyncio.run(main())
