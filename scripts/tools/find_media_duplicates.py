#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Scan the media collections for likely duplicates.

Reports two things per collection:
  - slugs that only differ by a year segment ("alien-ridley-scott" vs "alien-ridley-scott-1979")
  - slugs that no longer match the title, creator and year they were built from
"""
import asyncio
import sys
from collections import defaultdict
from pathlib import Path

# Project root on the import path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Load environment variables
from dotenv import load_dotenv
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

from quizcms.crud import media as media_crud
from quizcms.models.base import get_async_session_maker
from quizcms.schemas.content import CollectionKind
from quizcms.utils.slug import generate_media_slug, strip_year


def group_year_variants(items) -> dict[str, list]:
    """Items grouped by their slug without year, only groups with more than one item"""
    groups = defaultdict(list)
    for item in items:
        groups[strip_year(item.slug)].append(item)
    return {base: members for base, members in groups.items() if len(members) > 1}


async def find_media_duplicates(kinds: list[CollectionKind]):
    print(f"\n{'='*60}")
    print("Media duplicate scan")
    print(f"{'='*60}\n")

    total_groups = 0
    total_stale = 0
    async with get_async_session_maker()() as session:
        for kind in kinds:
            items = await media_crud.get_all_media_items(session, kind)
            print(f"[INFO] {kind.value}: {len(items)} items")

            for base, members in group_year_variants(items).items():
                total_groups += 1
                print(f"[WARN] Year variants of '{base}':")
                for item in members:
                    print(f"  - id={item.id} slug={item.slug} title={item.title} year={item.year}")

            for item in items:
                expected = generate_media_slug(item.title, item.creator or "", item.year)
                if item.slug != expected:
                    total_stale += 1
                    print(f"[WARN] Slug out of sync: id={item.id} slug={item.slug} expected={expected}")

    print(f"\n[OK] Scan complete: {total_groups} duplicate groups, {total_stale} stale slugs")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Find duplicate media items")
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in CollectionKind],
        action="append",
        help="Collection to scan (repeatable, default: all)",
    )

    args = parser.parse_args()
    kinds = [CollectionKind(kind) for kind in args.kind] if args.kind else list(CollectionKind)

    asyncio.run(find_media_duplicates(kinds))
