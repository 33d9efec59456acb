# This project was developed with assistance from AI tools.
"""CLI entrypoint for reference data seeding.

Usage:
    python -m portal.seed          # Seed missing reference data
    python -m portal.seed --force  # Also refresh existing document types
"""

import argparse
import asyncio
import json

from db.database import SessionLocal

from .services.seed.seeder import seed_reference_data


async def main(force: bool = False) -> None:
    """Run reference data seeding."""
    async with SessionLocal() as session:
        result = await seed_reference_data(session, force=force)
        print(json.dumps(result, indent=2, default=str))

        if result.get("status") == "up_to_date":
            print("\nReference data already up to date. Use --force to refresh document types.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed scholarship portal reference data")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite descriptions and priorities of existing document types",
    )
    args = parser.parse_args()
    asyncio.run(main(force=args.force))
