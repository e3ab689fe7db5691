from typing import List, Optional

from pydantic import BaseModel, Field


class OpenGraphImage(BaseModel):
    url: str
    width: int = 1200
    height: int = 630
    alt: Optional[str] = None


class OpenGraph(BaseModel):
    title: str
    description: str
    type: str = "website"
    publishedTime: Optional[str] = None
    authors: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    images: List[OpenGraphImage] = Field(default_factory=list)


class TwitterCard(BaseModel):
    card: str = "summary_large_image"
    title: Optional[str] = None
    description: Optional[str] = None
    site: Optional[str] = None
    creator: Optional[str] = None
    images: List[str] = Field(default_factory=list)


class SEOMetadata(BaseModel):
    title: str
    description: str
    canonical: Optional[str] = None
    openGraph: OpenGraph
    twitter: TwitterCard


class SitemapEntry(BaseModel):
    url: str
    lastModified: str
    changeFrequency: str
    priority: float


class AdminLink(BaseModel):
    slug: str
    title: str
    cleanTitle: str
    emoji: Optional[str] = None
    editUrl: str
    viewUrl: str


class AdminDashboard(BaseModel):
    repositoryUrl: str
    newPostUrl: str
    posts: List[AdminLink] = Field(default_factory=list)


class AboutInfo(BaseModel):
    name: str
    title: str
    description: str
    twitter: Optional[str] = None
    github: str
