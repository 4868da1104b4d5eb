"""Shipping database management CLI.

Provides commands to create and drop the database schema of the shipping
domain and to load the sample ports and voyage schedules.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Store sample locations and voyages
"""

import argparse
import sys


def _initialized_domain():
    from shipping.domain import shipping

    print("Initializing shipping domain...")
    shipping.init()
    return shipping


def setup_database():
    """Create the database schema of the shipping domain."""
    from shipping.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating shipping database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop the database schema of the shipping domain."""
    from shipping.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping shipping database schema...")
    drop_db(domain)
    print("Done.")


def seed_database():
    """Store the sample locations and voyages, skipping existing ones."""
    from shipping.sample_data import seed_reference_data

    domain = _initialized_domain()
    with domain.domain_context():
        seed_reference_data()
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Shipping database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load sample locations and voyage schedules")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
