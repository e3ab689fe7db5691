from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


class PostMetadata(BaseModel):
    title: str = "Untitled"
    date: str
    author: str
    readTime: str
    tags: List[str] = Field(default_factory=list)
    difficulty: Difficulty = "Beginner"
    series: Optional[str] = None
    excerpt: str = ""
    slug: str
    seoTitle: Optional[str] = None
    seoDescription: Optional[str] = None
    datePublished: Optional[str] = None
    cuid: Optional[str] = None
    cover: Optional[str] = None


class Post(BaseModel):
    content: str  # Markdown body without frontmatter
    metadata: PostMetadata


class PostDetail(Post):
    html: str


class RemotePost(BaseModel):
    slug: str
    content: str
    path: Optional[str] = None
    lastModified: str
