from storefront.client.checkout import CheckoutNotifier
from storefront.main import app
from storefront.routers.checkout import get_notifier


def test_list_products(client):
    res = client.get("/api/products")
    assert res.status_code == 200
    data = res.json()
    assert [p["id"] for p in data] == [1, 2, 3]
    first = data[0]
    for key in ("id", "name", "price", "description", "image", "category", "rating", "stock"):
        assert key in first
    assert first["category_name"] == "Shoes"
    assert first["price"] == 1000


def test_list_products_filters_and_pagination(client):
    assert [p["id"] for p in client.get("/api/products?category=2").json()] == [3]
    assert [p["id"] for p in client.get("/api/products?category=All").json()] == [1, 2, 3]
    assert [p["id"] for p in client.get("/api/products?featured=true").json()] == [1, 2]
    assert [p["id"] for p in client.get("/api/products?page=2&limit=2").json()] == [3]
    # limit without page returns everything
    assert len(client.get("/api/products?limit=1").json()) == 3


def test_featured_products_sorted_by_rating(client):
    data = client.get("/api/products/featured").json()
    assert [p["id"] for p in data] == [2, 1]


def test_get_product_and_404(client):
    assert client.get("/api/products/1").json()["name"] == "Trail Runner"
    res = client.get("/api/products/999")
    assert res.status_code == 404
    assert res.json() == {"error": "Product not found"}


def test_categories_sorted_by_name(client):
    data = client.get("/api/categories").json()
    assert [c["name"] for c in data] == ["Bags", "Shoes"]
    assert data[0] == {"id": 2, "name": "Bags", "description": "Backpacks"}


def test_reviews(client):
    data = client.get("/api/reviews").json()
    assert [r["id"] for r in data] == [2, 1, 3]
    assert data[0]["date"] == "10 May 2024"

    product_reviews = client.get("/api/products/1/reviews").json()
    assert [r["id"] for r in product_reviews] == [2, 1]

    review = client.get("/api/reviews/3").json()
    assert review["product_name"] == "City Sneaker"
    assert client.get("/api/reviews/99").status_code == 404


def test_search_products(client):
    ids = lambda url: [p["id"] for p in client.get(url).json()]  # noqa: E731
    assert ids("/api/search/products?q=running") == [1, 3]
    assert ids("/api/search/products?q=RUNNING&category=1") == [1]
    assert ids("/api/search/products?min_price=500&max_price=900") == [2]
    assert ids("/api/search/products?sort=price_asc") == [3, 2, 1]
    assert ids("/api/search/products?sort=price_desc") == [1, 2, 3]
    assert ids("/api/search/products?sort=rating") == [2, 1, 3]
    assert ids("/api/search/products?sort=name") == [2, 3, 1]


def test_blog_posts_with_tags(client):
    data = client.get("/api/blogposts").json()
    assert [p["id"] for p in data] == [2, 1]
    spring = data[1]
    assert spring["tags"] == ["gear", "running"]
    assert spring["category"] == "News"
    assert spring["date"] == "01 Apr 2024 09:30"
    assert spring["comments"] == 1
    assert data[0]["tags"] == []

    assert client.get("/api/blogposts/1").json()["title"] == "Spring collection"
    assert client.get("/api/blogposts/9").json() == {"error": "Blog post not found"}


def test_stats_and_health(client):
    assert client.get("/api/stats").json() == {"products": 3, "categories": 2, "reviews": 3}
    health = client.get("/api/health").json()
    assert health["status"] == "OK"
    assert health["database"] == "Connected"
    assert health["environment"] == "test"
    assert health["server_time"]


def test_unknown_route_uses_error_envelope(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert "error" in res.json()


def test_invalid_query_uses_error_envelope(client):
    res = client.get("/api/products?category=shoes")
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid category"}
    res = client.get("/api/products?page=0&limit=2")
    assert res.status_code == 422
    assert res.json()["error"] == "Invalid request"


class _RecordingChannel:
    def __init__(self, name, fail=False):
        self.name = name
        self.fail = fail
        self.texts = []

    async def send(self, request, text):
        if self.fail:
            raise ConnectionError("unreachable")
        self.texts.append(text)


CHECKOUT_BODY = {
    "items": [{"productId": 1, "name": "Trail Runner", "price": 1000, "stock": 5, "quantity": 2}],
    "total": 2000,
    "name": "Awa",
    "phone": "77 000 00 00",
    "email": "awa@example.com",
}


def test_checkout_endpoint(client):
    channel = _RecordingChannel("Email")
    app.dependency_overrides[get_notifier] = lambda: CheckoutNotifier(
        [_RecordingChannel("Telegram", fail=True), channel]
    )
    try:
        res = client.post("/api/checkout", json=CHECKOUT_BODY)
    finally:
        app.dependency_overrides.clear()
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Failed via Telegram (unreachable), Delivered via Email"
    assert "Trail Runner × 2" in channel.texts[0]


def test_checkout_endpoint_rejects_blank_contact(client):
    res = client.post("/api/checkout", json={**CHECKOUT_BODY, "email": ""})
    assert res.status_code == 422
    assert res.json()["error"] == "Invalid request"
