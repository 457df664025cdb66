import asyncio
import os
from sdk.pycatalog import CatalogClient, CatalogAPIError

async def create_one(client, n):
    try:
        p = await client.create_product_async(f"Widget {n}", f"Widget number {n}", 10 + n, "widgets")
        print(f"✅ created {p['name']} -> {p['id']}")
        return p
    except CatalogAPIError as e:
        print(f"❌ Widget {n} failed: {e}")
        return None

async def main():
    c = CatalogClient(
        base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "mysecretkey123"),
    )

    before = c.stats()["totalProducts"]

    print("\n⚡ Creating 20 products concurrently...")
    created = await asyncio.gather(*(create_one(c, n) for n in range(20)))
    ids = [p["id"] for p in created if p]

    print(f"\n{len(ids)} created, {len(set(ids))} distinct ids")
    stats = c.stats()
    print("📊 Stats:", stats)
    print(f"Total went from {before} to {stats['totalProducts']}")

    for pid in ids:
        c.delete_product(pid)
    print("🧹 Cleaned up")

if __name__ == "__main__":
    asyncio.run(main())
