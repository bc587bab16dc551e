"""Type definitions shared by the blog interaction core."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


ALL_CATEGORIES = "all"

# Marker placed in PageWindow.page_numbers where a run of pages is elided
ELLIPSIS = "..."

EXCERPT_LENGTH = 150


class Priority(str, Enum):
    """Live region politeness level."""
    POLITE = "polite"
    ASSERTIVE = "assertive"


def make_excerpt(content: str) -> str:
    """First 150 characters of the content followed by an ellipsis."""
    return content[:EXCERPT_LENGTH] + "..."


class Post(BaseModel):
    """A published blog post."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str
    category: str
    publish_date: date
    image: Optional[str] = None  # data URL
    image_alt: str = ""
    excerpt: str = ""

    def paragraphs(self) -> list[str]:
        return [p for p in self.content.split("\n\n") if p.strip()]


class PostDraft(BaseModel):
    """User supplied fields of a post that has not been stored yet."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    content: str = ""
    category: str = ""
    image: Optional[str] = None
    image_alt: str = ""


class QueryState(BaseModel):
    model_config = ConfigDict(frozen=True)

    term: str = ""
    category: str = ALL_CATEGORIES


class FilterResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: Tuple[Post, ...] = ()
    count: int = 0
    announcement: str = ""


PageEntry = Union[int, str]


class PageWindow(BaseModel):
    """Everything a renderer needs to draw one page of results and its navigation."""

    model_config = ConfigDict(frozen=True)

    current_page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    total_items: int = Field(ge=0)
    visible_range: Tuple[int, int]
    page_numbers: Tuple[PageEntry, ...] = ()
    has_prev: bool = False
    has_next: bool = False

    @property
    def is_degenerate(self) -> bool:
        """No navigation should be rendered for zero or one page."""
        return self.total_pages <= 1

    @property
    def summary(self) -> str:
        return f"Page {self.current_page} of {self.total_pages} ({self.total_items} total posts)"


class PageChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int
    announcement: str


class Announcement(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    priority: Priority = Priority.POLITE
