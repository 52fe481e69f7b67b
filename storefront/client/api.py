import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from storefront.config import get_settings
from storefront.schemas.cart import CartLineItem

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"


def _category_param(category: Optional[Union[str, int]]) -> Optional[str]:
    if category in (None, "", "All"):
        return None
    return str(category)


class StorefrontApi:
    """Read-only client for the catalog API.

    Any non-2xx answer or transport failure surfaces as ``ApiError``; status 0
    means the server could not be reached at all.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        clean = {k: v for k, v in (params or {}).items() if v not in (None, "", False, 0)}
        try:
            resp = self._client.get(endpoint, params=clean)
        except httpx.HTTPError as e:
            logger.error("API request failed: GET %s: %s", endpoint, e)
            raise ApiError(0, "Network error or server unavailable") from e

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {"error": "Unknown error"}
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(resp.status_code, message or f"HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(resp.status_code, "Invalid JSON in response") from e

    # Products
    def get_products(self, page: Optional[int] = None, limit: Optional[int] = None,
                     category: Optional[Union[str, int]] = None, featured: bool = False) -> List[dict]:
        return self._request("/products", {
            "page": page,
            "limit": limit,
            "category": _category_param(category),
            "featured": "true" if featured else None,
        })

    def get_product(self, product_id: int) -> dict:
        return self._request(f"/products/{product_id}")

    def get_featured_products(self) -> List[dict]:
        return self._request("/products/featured")

    def search_products(self, q: Optional[str] = None, category: Optional[Union[str, int]] = None,
                        min_price: Optional[float] = None, max_price: Optional[float] = None,
                        sort: Optional[str] = None) -> List[dict]:
        return self._request("/search/products", {
            "q": q,
            "category": _category_param(category),
            "min_price": min_price,
            "max_price": max_price,
            "sort": sort,
        })

    # Categories
    def get_categories(self) -> List[dict]:
        return self._request("/categories")

    # Reviews
    def get_reviews(self) -> List[dict]:
        return self._request("/reviews")

    def get_review(self, review_id: int) -> dict:
        return self._request(f"/reviews/{review_id}")

    def get_product_reviews(self, product_id: int) -> List[dict]:
        return self._request(f"/products/{product_id}/reviews")

    # Blog
    def get_blog_posts(self) -> List[dict]:
        return self._request("/blogposts")

    def get_blog_post(self, post_id: int) -> dict:
        return self._request(f"/blogposts/{post_id}")

    # Misc
    def get_stats(self) -> dict:
        return self._request("/stats")

    def check_health(self) -> dict:
        return self._request("/health")


def cart_item_from_product(product: Dict[str, Any], quantity: int = 1) -> CartLineItem:
    """Build a cart line from a product payload as returned by the catalog API."""
    category = product.get("category_name") or product.get("category")
    return CartLineItem(
        productId=int(product["id"]),
        name=product["name"],
        image=product.get("image"),
        category=str(category) if category is not None else None,
        price=float(product.get("price") or 0),
        stock=max(0, int(product.get("stock") or 0)),
        quantity=max(1, int(quantity)),
    )
