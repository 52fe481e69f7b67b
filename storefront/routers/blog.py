from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload, selectinload
from typing import List

from storefront.models.blog import BlogPost
from storefront.models.database import get_db
from storefront.schemas.blog import BlogPostOut


router = APIRouter()


def to_blog_post_out(post: BlogPost) -> BlogPostOut:
    return BlogPostOut(
        id=post.id,
        title=post.title,
        excerpt=post.excerpt,
        date=post.created_at.strftime("%d %b %Y %H:%M") if post.created_at else None,
        image=post.image,
        imageCaption=post.image_caption,
        author=post.author,
        content=post.content,
        category=post.category.name if post.category else None,
        likes=post.likes or 0,
        comments=post.comments_count or 0,
        readingTime=post.reading_time,
        tags=[t.name for t in post.tags],
    )


def _posts_query(db: Session):
    return db.query(BlogPost).options(joinedload(BlogPost.category), selectinload(BlogPost.tags))


@router.get("", response_model=List[BlogPostOut])
def list_blog_posts(db: Session = Depends(get_db)):
    posts = _posts_query(db).order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()
    return [to_blog_post_out(p) for p in posts]


@router.get("/{id}", response_model=BlogPostOut)
def get_blog_post(id: int, db: Session = Depends(get_db)):
    post = _posts_query(db).filter(BlogPost.id == id).first()
    if not post:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return to_blog_post_out(post)
