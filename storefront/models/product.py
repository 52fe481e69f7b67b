from sqlalchemy import Column, Integer, String, Float, Numeric, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship
from storefront.models.database import Base


class Category(Base):
    __tablename__ = "category"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text)

    products = relationship("Product", back_populates="category")


class Product(Base):
    __tablename__ = "product"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(500))
    category_id = Column(Integer, ForeignKey("category.id"), index=True)
    rating = Column(Float, default=0.0)
    stock = Column(Integer, default=0)
    featured = Column(Boolean, default=False, index=True)

    category = relationship("Category", back_populates="products")
    reviews = relationship("Review", back_populates="product")
