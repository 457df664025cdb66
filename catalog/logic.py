import uuid
from typing import Optional, Dict, Any

from .core import ProductIn, ProductUpdate, _make_product
from .database import ProductStore
from .errors import NotFoundError

# Core logic behind the product endpoints. Each function takes the store
# explicitly so it can be exercised without the HTTP layer.

PRODUCT_NOT_FOUND = "Product not found"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 3


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Any = DEFAULT_PAGE,
    limit: Any = DEFAULT_LIMIT,
) -> Dict[str, Any]:
    filtered = store.all()

    if search:
        term = search.lower()
        filtered = [p for p in filtered if term in p.name.lower()]

    if category:
        wanted = category.lower()
        filtered = [p for p in filtered if p.category.lower() == wanted]

    # page/limit are deliberately not range-checked: zero or negative values
    # go through the same slice arithmetic, unparseable ones give no results
    page_num = _to_int(page)
    limit_num = _to_int(limit)
    if page_num is None or limit_num is None:
        results = []
    else:
        start = (page_num - 1) * limit_num
        results = filtered[start:start + limit_num]

    return {
        "total": len(filtered),
        "page": page_num,
        "limit": limit_num,
        "results": [p.to_dict() for p in results],
    }


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.find(product_id)
    if p is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return p.to_dict()


def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    product = _make_product(str(uuid.uuid4()), payload)
    return store.add(product).to_dict()


def update_product_logic(store: ProductStore, product_id: str, payload: ProductUpdate) -> Dict[str, Any]:
    updated = store.update(product_id, payload.changes())
    if updated is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return updated.to_dict()


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    deleted = store.remove(product_id)
    if not deleted:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return {"message": "Product deleted successfully", "deleted": [p.to_dict() for p in deleted]}


def stats_logic(store: ProductStore) -> Dict[str, Any]:
    products = store.all()
    counts: Dict[str, int] = {}
    for p in products:
        # raw category values, no case folding
        counts[p.category] = counts.get(p.category, 0) + 1
    return {"totalProducts": len(products), "countByCategory": counts}
