from pydantic import BaseModel, ConfigDict
from typing import Optional


class CategoryOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    description: Optional[str] = None
    image: Optional[str] = None
    # Category id; the display name travels alongside
    category: Optional[int] = None
    category_name: Optional[str] = None
    rating: Optional[float] = 0.0
    stock: int = 0
    featured: bool = False
