"""DSUB database management CLI.

Creates and drops the Subscription and WorkflowEvent tables for the
configured database (see ``[production.databases.default]`` in domain.toml).

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the dsub database schema."""
    from dsub.domain import dsub
    from dsub.utils.db import setup_db

    print("Initializing dsub domain...")
    dsub.init()
    print("Creating dsub database schema...")
    setup_db(dsub)
    print("  dsub schema ready.")
    print("Done.")


def drop_database():
    """Drop the dsub database schema."""
    from dsub.domain import dsub
    from dsub.utils.db import drop_db

    print("Initializing dsub domain...")
    dsub.init()
    print("Dropping dsub database schema...")
    drop_db(dsub)
    print("  dsub schema dropped.")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="DSUB database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
