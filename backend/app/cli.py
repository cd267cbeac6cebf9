#!/usr/bin/env python3
"""
CLI for seeding test users.

Usage:
    comp-seed                      # Create test users only
    comp-seed <competition-id>     # Also register them as competitors

Environment variables required:
    SUPABASE_URL                   Your Supabase project URL
    SUPABASE_SERVICE_ROLE_KEY      Your Supabase service role key
"""

import argparse
import logging
import sys

from app.db.supabase import get_service_client
from app.services.seed import TEST_PASSWORD, TEST_USERS, seed_users

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _print_results(results: dict, competition_id: str | None) -> None:
    """Print seeding summary."""
    print(f"\n{'='*50}")
    print("Summary")
    print(f"{'='*50}")
    print(f"Created:  {results['created']} new users")
    print(f"Existing: {results['existing']} users reused")

    if competition_id:
        print(
            f"Registered {len(results['registered'])} competitors "
            f"for competition {competition_id}"
        )

    if results["errors"]:
        print(f"\n⚠️  {len(results['errors'])} errors occurred:")
        for error in results["errors"][:5]:
            print(f"   - {error}")
        if len(results["errors"]) > 5:
            print(f"   ... and {len(results['errors']) - 5} more")

    print("\n📝 Test credentials:")
    print(f"   All passwords: {TEST_PASSWORD}")
    print(f"   Emails: {', '.join(u['email'] for u in TEST_USERS)}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Boulder Comp Scoring - Seed test users",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  comp-seed
  comp-seed abc-123-def-456
        """,
    )

    parser.add_argument(
        "competition_id",
        nargs="?",
        help="If provided, users will be registered as competitors",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        client = get_service_client()
        print("🌱 Starting user seeding...\n")
        results = seed_users(client, competition_id=args.competition_id)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    _print_results(results, args.competition_id)
    print("\n✨ Seeding complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
