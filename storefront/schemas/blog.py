from pydantic import BaseModel
from typing import List, Optional


class BlogPostOut(BaseModel):
    id: int
    title: str
    excerpt: Optional[str] = None
    date: Optional[str] = None  # "DD Mon YYYY HH:MM"
    image: Optional[str] = None
    imageCaption: Optional[str] = None
    author: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    likes: int = 0
    comments: int = 0
    readingTime: Optional[str] = None
    tags: List[str] = []
