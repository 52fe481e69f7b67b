from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from storefront.models.database import Base


class Review(Base):
    __tablename__ = "review"

    id = Column(Integer, primary_key=True, index=True)
    author = Column(String(255), nullable=False)
    avatar = Column(String(500))
    rating = Column(Float, default=0.0)
    text = Column(Text)
    date = Column(DateTime, default=datetime.utcnow, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=True, index=True)

    product = relationship("Product", back_populates="reviews")
