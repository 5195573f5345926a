"""Store database management CLI.

Creates and drops the database schema for the store domain and seeds the
demo shoppers and products.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Register demo shoppers and products
"""

import argparse
import sys

DEMO_SHOPPERS = [
    ("Moisés", "credit_ending_4242"),
    ("Gabrielle", "credit_ending_5151"),
    ("Liliana", "credit_ending_8987"),
    ("Luis", "credit_ending_3654"),
    ("Pedro", "credit_ending_7435"),
]

DEMO_PRODUCTS = [
    ("Silk Shirt", "799.90"),
    ("Jeans", "499.90"),
    ("Cargo Shorts", "350.00"),
    ("Polo Shirt", "299.50"),
    ("Leather Jacket", "1250.00"),
]


def _store():
    from store.domain import store

    store.init()
    return store


def setup_database():
    """Create the database schema for the store domain."""
    from store.utils.db import setup_db

    store = _store()
    print("Creating store database schema...")
    setup_db(store)
    print("Done.")


def drop_database():
    """Drop the database schema for the store domain."""
    from store.utils.db import drop_db

    store = _store()
    print("Dropping store database schema...")
    drop_db(store)
    print("Done.")


def seed():
    """Register the demo shoppers and products."""
    from store.catalogue.registration import RegisterProduct, RegisterShopper

    store = _store()
    with store.domain_context():
        for name, payment_method in DEMO_SHOPPERS:
            shopper_id = store.process(RegisterShopper(name=name, payment_method=payment_method), asynchronous=False)
            print(f"  shopper {name}: {shopper_id}")

        for name, price in DEMO_PRODUCTS:
            product_id = store.process(RegisterProduct(name=name, price=price), asynchronous=False)
            print(f"  product {name} ({price}): {product_id}")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Store database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Register demo shoppers and products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
