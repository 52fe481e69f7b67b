from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional

from storefront.models.database import get_db
from storefront.models.product import Category, Product
from storefront.models.review import Review
from storefront.routers.products import parse_category_id, to_product_out, to_review_out
from storefront.schemas.product import CategoryOut, ProductOut
from storefront.schemas.review import ReviewOut


router = APIRouter()

SORT_ORDERS = {
    "price_asc": (Product.price.asc(),),
    "price_desc": (Product.price.desc(),),
    "rating": (Product.rating.desc(), Product.id),
    "name": (Product.name.asc(),),
}


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name).all()


@router.get("/reviews", response_model=List[ReviewOut])
def list_reviews(db: Session = Depends(get_db)):
    reviews = (
        db.query(Review)
        .options(joinedload(Review.product))
        .order_by(Review.date.desc(), Review.id.desc())
        .all()
    )
    return [to_review_out(r) for r in reviews]


@router.get("/reviews/{id}", response_model=ReviewOut)
def get_review(id: int, db: Session = Depends(get_db)):
    review = db.query(Review).options(joinedload(Review.product)).filter(Review.id == id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return to_review_out(review)


@router.get("/search/products", response_model=List[ProductOut])
def search_products(
    q: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    sort: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Keyword search over name and description with optional category/price filters."""
    query = db.query(Product).options(joinedload(Product.category))
    if q:
        pattern = f"%{q}%"
        query = query.filter(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
    category_id = parse_category_id(category)
    if category_id is not None:
        query = query.filter(Product.category_id == category_id)
    if min_price:
        query = query.filter(Product.price >= min_price)
    if max_price:
        query = query.filter(Product.price <= max_price)
    query = query.order_by(*SORT_ORDERS.get(sort, (Product.id,)))
    return [to_product_out(p) for p in query.all()]
