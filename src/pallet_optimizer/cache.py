"""Bounded, thread-safe memo of optimization results keyed by normalized input."""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Iterable, Optional

from pallet_optimizer.config import load_settings
from pallet_optimizer.models import Container, OptimizationResult, PalletTemplate, Product, ProductRequest

logger = logging.getLogger(__name__)


def _product_key(request: ProductRequest, normalized: Product) -> dict[str, Any]:
    source = request.product
    dims = normalized.dimensions
    return {
        "id": source.id,
        "name": source.name,
        "sku": source.sku,
        "description": source.description,
        "created_at": source.created_at.isoformat() if source.created_at else None,
        "updated_at": source.updated_at.isoformat() if source.updated_at else None,
        # source labels keep a cached remainder identical to the caller's product
        "unit": source.dimensions.unit,
        "weight_unit": source.weight_unit,
        "dims": [repr(float(dims.length)), repr(float(dims.width)), repr(float(dims.height))],
        "weight": repr(float(normalized.weight)),
        "units_per_pallet": source.units_per_pallet,
        "quantity": request.quantity,
    }


def cache_key(
    items: Iterable[tuple[ProductRequest, Product]],
    container: Container,
    pallet: PalletTemplate,
) -> str:
    """
    SHA-256 over canonical JSON of the normalized inputs.

    Products are sorted before hashing so request order does not change the key.
    """
    products = sorted(
        (_product_key(request, normalized) for request, normalized in items),
        key=lambda p: json.dumps(p, sort_keys=True),
    )
    payload = {
        "products": products,
        "container": container.model_dump(mode="json"),
        "pallet": pallet.model_dump(mode="json"),
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()


class OptimizationCache:
    """
    LRU cache of optimization results with an optional time-to-live.

    Results are deep-copied in and out; callers never share the stored lists.
    A single lock serializes access. Two callers racing on the same missing
    key may both compute; the later put simply overwrites an equal value.
    """

    def __init__(self, max_size: int = 128, ttl: Optional[float] = None):
        self.max_size = max_size
        self.ttl = ttl
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[str, tuple[float, OptimizationResult]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _expired(self, stored_at: float) -> bool:
        return self.ttl is not None and time.monotonic() - stored_at > self.ttl

    def get(self, key: str) -> Optional[OptimizationResult]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._expired(entry[0]):
                if entry is not None:
                    del self._entries[key]
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return entry[1].model_copy(deep=True)

    def put(self, key: str, result: OptimizationResult) -> None:
        if self.max_size <= 0:
            return
        with self._lock:
            self._entries[key] = (time.monotonic(), result.model_copy(deep=True))
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"cache evicted {evicted[:12]}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


def _build_default_cache() -> OptimizationCache:
    settings = load_settings()
    return OptimizationCache(max_size=settings.cache_size, ttl=settings.cache_ttl)


default_cache = _build_default_cache()
