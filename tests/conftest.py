import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="storefront-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["CART_STORAGE_DIR"] = str(_TMP / "local_storage")
os.environ["ENVIRONMENT"] = "test"
os.environ["EMAIL_BACKEND"] = "console"
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["TELEGRAM_CHAT_ID"] = ""
os.environ["CURRENCY"] = "FCFA"

from fastapi.testclient import TestClient  # noqa: E402

from storefront.main import app  # noqa: E402
from storefront.models.blog import BlogCategory, BlogPost, Tag  # noqa: E402
from storefront.models.database import Base, SessionLocal, engine  # noqa: E402
from storefront.models.product import Category, Product  # noqa: E402
from storefront.models.review import Review  # noqa: E402


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db):
    shoes = Category(id=1, name="Shoes", description="Running and training shoes")
    bags = Category(id=2, name="Bags", description="Backpacks")
    db.add_all([shoes, bags])
    db.add_all([
        Product(id=1, name="Trail Runner", description="Grippy running shoe", price=1000,
                image="/img/1.jpg", category_id=1, rating=4.5, stock=5, featured=True),
        Product(id=2, name="City Sneaker", description="Everyday comfort", price=750,
                image="/img/2.jpg", category_id=1, rating=4.8, stock=10, featured=True),
        Product(id=3, name="Sport Backpack", description="Waterproof running bag", price=400,
                image="/img/3.jpg", category_id=2, rating=3.9, stock=0, featured=False),
    ])
    db.add_all([
        Review(id=1, author="Awa", rating=5, text="Great", date=datetime(2024, 3, 2), product_id=1),
        Review(id=2, author="Moussa", rating=4, text="Good", date=datetime(2024, 5, 10), product_id=1),
        Review(id=3, author="Lina", rating=3, text="Ok", date=datetime(2024, 1, 20), product_id=2),
    ])
    news = BlogCategory(id=1, name="News")
    running, gear = Tag(id=1, name="running"), Tag(id=2, name="gear")
    db.add_all([news, running, gear])
    db.add_all([
        BlogPost(id=1, title="Spring collection", excerpt="New arrivals", author="Team",
                 category_id=1, likes=3, comments_count=1, reading_time="3 min",
                 created_at=datetime(2024, 4, 1, 9, 30), tags=[running, gear]),
        BlogPost(id=2, title="Store opening", excerpt="We are open", author="Team",
                 created_at=datetime(2024, 6, 1, 18, 0)),
    ])
    db.commit()
    return db


@pytest.fixture
def client(seeded):
    with TestClient(app) as c:
        yield c
