from pydantic import BaseModel, Field
from typing import List, Optional


class CartLineItem(BaseModel):
    productId: int
    name: str
    image: Optional[str] = None
    category: Optional[str] = None
    price: float = Field(ge=0)
    # Maximum allowed quantity, taken from the product when it was added
    stock: int = Field(ge=0)
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class CartSnapshot(BaseModel):
    """Persisted cart layout: ``{"items": [...]}``."""

    items: List[CartLineItem] = Field(default_factory=list)
