from pydantic import BaseModel
from typing import Optional


class ReviewOut(BaseModel):
    id: int
    author: str
    avatar: Optional[str] = None
    rating: Optional[float] = None
    text: Optional[str] = None
    date: Optional[str] = None  # "DD Mon YYYY"
    product_id: Optional[int] = None
    product_name: Optional[str] = None
