from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Table
from sqlalchemy.orm import relationship
from datetime import datetime
from storefront.models.database import Base


post_tags = Table(
    "post_tag",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("blog_post.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)


class BlogCategory(Base):
    __tablename__ = "blog_category"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)


class Tag(Base):
    __tablename__ = "tag"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)


class BlogPost(Base):
    __tablename__ = "blog_post"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    excerpt = Column(Text)
    content = Column(Text)
    image = Column(String(500))
    image_caption = Column(String(255))
    author = Column(String(255))
    category_id = Column(Integer, ForeignKey("blog_category.id"), nullable=True)
    likes = Column(Integer, default=0)
    comments_count = Column(Integer, default=0)
    reading_time = Column(String(50))
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    category = relationship("BlogCategory")
    tags = relationship("Tag", secondary=post_tags, order_by="Tag.name")
