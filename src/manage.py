"""FreshMart management CLI.

Creates and drops the database schema and seeds a starter catalogue.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed --admin-email admin@freshmart.test
"""

import argparse
import sys


def setup_database():
    """Create the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed(admin_name=None, admin_email=None):
    """Load the starter catalogue and, optionally, an administrator."""
    from storefront.domain import storefront
    from storefront.product.seed import SEED_PRODUCTS, seed_admin, seed_catalogue

    storefront.init()
    with storefront.domain_context():
        added = seed_catalogue()
        if added:
            print(f"Seeded {added} products:")
            for index, (name, _, price, _, _, unit) in enumerate(SEED_PRODUCTS, start=1):
                print(f"  {index}. {name} - {price}/{unit}")
        else:
            print("Catalogue already has products. Skipping seed.")

        if admin_email:
            admin_id = seed_admin(admin_name or "Administrator", admin_email)
            print(f"Admin customer id: {admin_id}")


def main():
    parser = argparse.ArgumentParser(description="FreshMart storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed", help="Seed the starter catalogue")
    seed_parser.add_argument("--admin-email", help="Also register an administrator with this email")
    seed_parser.add_argument("--admin-name", default="Administrator", help="Name for the administrator")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed(admin_name=args.admin_name, admin_email=args.admin_email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
