"""Marketplace database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from marketplace.utils.bootstrap import domain_handle
from marketplace.utils.db import drop_db, setup_db


def setup_databases():
    domain = domain_handle.get()
    providers = setup_db(domain)
    print(f"Schema ready for providers: {', '.join(providers) or 'none (no SQL providers configured)'}")


def drop_databases():
    domain = domain_handle.get()
    providers = drop_db(domain)
    print(f"Schema dropped for providers: {', '.join(providers) or 'none (no SQL providers configured)'}")


def main():
    parser = argparse.ArgumentParser(description="Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
