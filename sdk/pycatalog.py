# sdk/pycatalog.py
import requests
import httpx
from typing import Optional, Dict, Any, Union
from rich import print

DEFAULT_BASE_URL = "http://localhost:3000"


class CatalogAPIError(Exception):
    """Raised for any non-2xx response; carries the server's ``error`` message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _payload(name=None, description=None, price=None, category=None, in_stock=None) -> Dict[str, Any]:
    fields = {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "inStock": in_stock,
    }
    return {k: v for k, v in fields.items() if v is not None}


class CatalogClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, api_key: Optional[str] = None, timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # any requests.Session-compatible object works, e.g. a FastAPI TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _check(self, r) -> Any:
        if r.status_code >= 400:
            try:
                message = r.json().get("error", r.text)
            except ValueError:
                message = r.text
            raise CatalogAPIError(r.status_code, message)
        return r.json()

    def greeting(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        if r.status_code >= 400:
            raise CatalogAPIError(r.status_code, r.text)
        return r.text

    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return self._check(r)

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._check(r)

    def create_product(self, name: str, description: str, price: Union[int, float], category: str, in_stock: bool = True):
        r = self.session.post(
            f"{self.base_url}/api/products",
            json=_payload(name, description, price, category, in_stock),
            timeout=self.timeout,
        )
        return self._check(r)

    def update_product(self, product_id: str, name: Optional[str] = None, description: Optional[str] = None,
                       price: Optional[Union[int, float]] = None, category: Optional[str] = None,
                       in_stock: Optional[bool] = None):
        r = self.session.put(
            f"{self.base_url}/api/products/{product_id}",
            json=_payload(name, description, price, category, in_stock),
            timeout=self.timeout,
        )
        return self._check(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._check(r)

    def stats(self):
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        return self._check(r)

    # Async create, for firing many requests at once (see demo_concurrent.py)
    async def create_product_async(self, name: str, description: str, price: Union[int, float], category: str,
                                   in_stock: bool = True, client: Optional[httpx.AsyncClient] = None):
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        body = _payload(name, description, price, category, in_stock)
        if client is not None:
            r = await client.post(f"{self.base_url}/api/products", json=body, headers=headers)
            return self._check(r)
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            r = await ac.post(f"{self.base_url}/api/products", json=body, headers=headers)
            return self._check(r)


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product catalog client")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_URL", DEFAULT_BASE_URL))
    parser.add_argument("--api-key", default=os.getenv("API_KEY", "mysecretkey123"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--out-of-stock", action="store_true", help="Mark the product as not in stock")

    up = subparsers.add_parser("update-product", help="Update selected fields of a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    subparsers.add_parser("stats", help="Product counts by category")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.search, args.page, args.limit))
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category, not args.out_of_stock))
        elif args.command == "update-product":
            in_stock = None if args.in_stock is None else args.in_stock == "true"
            print(c.update_product(args.product_id, args.name, args.description, args.price, args.category, in_stock))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
        elif args.command == "stats":
            print(c.stats())
    except CatalogAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
