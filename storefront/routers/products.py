from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional

from storefront.models.database import get_db
from storefront.models.product import Product
from storefront.models.review import Review
from storefront.schemas.product import ProductOut
from storefront.schemas.review import ReviewOut


router = APIRouter()

# Helpers

def to_product_out(p: Product) -> ProductOut:
    return ProductOut(
        id=p.id,
        name=p.name,
        price=float(p.price or 0),
        description=p.description,
        image=p.image,
        category=p.category_id,
        category_name=p.category.name if p.category else None,
        rating=p.rating,
        stock=int(p.stock or 0),
        featured=bool(p.featured),
    )


def to_review_out(r: Review) -> ReviewOut:
    return ReviewOut(
        id=r.id,
        author=r.author,
        avatar=r.avatar,
        rating=r.rating,
        text=r.text,
        date=r.date.strftime("%d %b %Y") if r.date else None,
        product_id=r.product_id,
        product_name=r.product.name if r.product else None,
    )


def parse_category_id(category: Optional[str]) -> Optional[int]:
    """Empty or 'All' means no filter; anything else must be a category id."""
    if not category or category == "All":
        return None
    try:
        return int(category)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid category")


# Get All Products (with filters)
@router.get("", response_model=List[ProductOut])
def get_all_products(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    category: Optional[str] = None,
    featured: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List products ordered by id, paginated only when both page and limit are given."""
    query = db.query(Product).options(joinedload(Product.category))
    category_id = parse_category_id(category)
    if category_id is not None:
        query = query.filter(Product.category_id == category_id)
    if featured == "true":
        query = query.filter(Product.featured.is_(True))
    query = query.order_by(Product.id)
    if page and limit:
        query = query.offset((page - 1) * limit).limit(limit)
    return [to_product_out(p) for p in query.all()]


# Featured products (declared before /{id} so the literal path wins)
@router.get("/featured", response_model=List[ProductOut])
def get_featured_products(db: Session = Depends(get_db)):
    products = (
        db.query(Product)
        .options(joinedload(Product.category))
        .filter(Product.featured.is_(True))
        .order_by(Product.rating.desc(), Product.id)
        .all()
    )
    return [to_product_out(p) for p in products]


# Get Product by ID
@router.get("/{id}", response_model=ProductOut)
def get_product_by_id(id: int, db: Session = Depends(get_db)):
    product = db.query(Product).options(joinedload(Product.category)).filter(Product.id == id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return to_product_out(product)


# Reviews of one product
@router.get("/{id}/reviews", response_model=List[ReviewOut])
def get_product_reviews(id: int, db: Session = Depends(get_db)):
    reviews = (
        db.query(Review)
        .options(joinedload(Review.product))
        .filter(Review.product_id == id)
        .order_by(Review.date.desc(), Review.id.desc())
        .all()
    )
    return [to_review_out(r) for r in reviews]
