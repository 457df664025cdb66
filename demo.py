#!/usr/bin/env python
import os
from sdk.pycatalog import CatalogClient, CatalogAPIError

def main():
    c = CatalogClient(
        base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "mysecretkey123"),
    )

    print(c.greeting())

    # -----------------------------
    # Browse the seed catalog
    # -----------------------------
    print("\nFirst page of products...")
    print(c.list_products())

    print("\nElectronics, all on one page...")
    print(c.list_products(category="Electronics", limit=10))

    print("\nSearching for 'maker'...")
    print(c.list_products(search="maker"))

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "1.7L electric kettle", 0, "kitchen", in_stock=False)
    print(kettle)

    print("\nRepricing it...")
    print(c.update_product(kettle["id"], price=35, in_stock=True))

    print("\nStats...")
    print(c.stats())

    print("\nDeleting it...")
    print(c.delete_product(kettle["id"]))

    try:
        c.get_product(kettle["id"])
    except CatalogAPIError as e:
        print(f"\nLookup after delete: {e}")

if __name__ == "__main__":
    main()
