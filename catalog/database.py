import logging
import threading
from typing import Dict, Any, List, Optional, Iterable

from .models import Product

# In-memory product store. One instance is created per application and
# handed to the route handlers; nothing here is module-level state.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Laptop", "description": "High-performance laptop with 16GB RAM", "price": 1200, "category": "electronics", "inStock": True},
    {"id": "2", "name": "Smartphone", "description": "Latest model with 128GB storage", "price": 800, "category": "electronics", "inStock": True},
    {"id": "3", "name": "Coffee Maker", "description": "Programmable coffee maker with timer", "price": 50, "category": "kitchen", "inStock": False},
    {"id": "4", "name": "Headphones", "description": "Noise-cancelling wireless headphones", "price": 150, "category": "electronics", "inStock": True},
    {"id": "5", "name": "Blender", "description": "Powerful kitchen blender with 3 speeds", "price": 100, "category": "kitchen", "inStock": True},
]


class ProductStore:
    """Ordered collection of products, in insertion order.

    Every public method holds ``lock`` for its whole read-modify-write span.
    Callers that need several steps to be atomic (e.g. look up then mutate)
    can hold ``store.lock`` themselves; it is re-entrant.
    """

    def __init__(self, seed: Optional[Iterable[Dict[str, Any]]] = None):
        self.lock = threading.RLock()
        self._seed = list(SEED_PRODUCTS if seed is None else seed)
        self._products: List[Product] = []
        self.reset()

    def reset(self) -> None:
        with self.lock:
            self._products = [Product.model_validate(p) for p in self._seed]
        logger.debug("Store reset to %d seed products", len(self._seed))

    def __len__(self) -> int:
        with self.lock:
            return len(self._products)

    def all(self) -> List[Product]:
        with self.lock:
            return list(self._products)

    def find(self, product_id: str) -> Optional[Product]:
        with self.lock:
            return next((p for p in self._products if p.id == product_id), None)

    def add(self, product: Product) -> Product:
        with self.lock:
            if any(p.id == product.id for p in self._products):
                raise ValueError(f"duplicate product id: {product.id}")
            self._products.append(product)
        logger.info("Created product %s", product.id)
        return product

    def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
        with self.lock:
            product = self.find(product_id)
            if product is None:
                return None
            for field, value in changes.items():
                if field == "id":
                    continue
                setattr(product, field, value)
        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(changes)) or "no changes")
        return product

    def remove(self, product_id: str) -> List[Product]:
        """Remove the first product with ``product_id``; returns the removed
        records (empty when nothing matched)."""
        with self.lock:
            index = next((i for i, p in enumerate(self._products) if p.id == product_id), -1)
            if index == -1:
                return []
            removed = [self._products.pop(index)]
        logger.info("Deleted product %s", product_id)
        return removed
