"""Glue between the post store, search pipeline and paginator for one reader."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .announcer import Announcer
from .logging_setup import get_logger
from .pagination import Paginator
from .search import SearchFilterPipeline
from .store import PostStore
from .types import ALL_CATEGORIES, FilterResult, PageWindow, Post, Priority, QueryState

log = get_logger(__name__)


class BlogView(BaseModel):
    """What the render layer shows for the post list."""

    model_config = ConfigDict(frozen=True)

    query: QueryState
    result: FilterResult
    window: PageWindow
    posts: Tuple[Post, ...]


class BlogSession:
    """Reader state: current query, its filtered posts and the current page.

    Any query change goes back to page 1, even when the old page would still
    exist in the new result set.
    """

    def __init__(self, store: PostStore, announcer: Announcer, page_size: int = 6):
        self.store = store
        self.announcer = announcer
        self.pipeline = SearchFilterPipeline(announcer)
        self.paginator = Paginator(announcer, page_size=page_size)
        self._result = FilterResult(items=store.list(), count=len(store))
        # None until the first search has run
        self._store_version = None
        self.paginator.update(self._result.count)

    @property
    def query(self) -> QueryState:
        return self.pipeline.query

    @property
    def is_stale(self) -> bool:
        """True when the store changed since the current result was computed."""
        return self._store_version != self.store.version

    def search(self, term: str = "", category: str = ALL_CATEGORIES) -> BlogView:
        self._result = self.pipeline.filter(self.store.list(), term, category)
        self._store_version = self.store.version
        self.paginator.update(self._result.count)
        return self.view()

    def clear_search(self) -> BlogView:
        self._result = self.pipeline.clear(self.store.list())
        self._store_version = self.store.version
        self.paginator.update(self._result.count)
        return self.view()

    def refresh(self) -> BlogView:
        """Re-run the current query, e.g. after the store gained a post."""
        query = self.pipeline.query
        return self.search(query.term, query.category)

    def go_to_page(self, page: int) -> BlogView:
        self.paginator.change_page(page)
        return self.view()

    def view(self) -> BlogView:
        return BlogView(
            query=self.pipeline.query,
            result=self._result,
            window=self.paginator.window(),
            posts=tuple(self.paginator.slice(self._result.items)),
        )

    def categories(self) -> List[str]:
        return self.pipeline.categories(self.store.list())

    def open_post(self, post_id: str) -> Optional[Post]:
        post = self.store.get(post_id)
        if post is None:
            log.info("post_not_found", post_id=post_id)
            return None
        self.announcer.announce(f"Viewing post: {post.title}", Priority.POLITE)
        return post

    def related_posts(self, post: Post, limit: int = 3) -> List[Post]:
        """Other posts in the same category, in store order."""
        related = [p for p in self.store.list() if p.id != post.id and p.category == post.category]
        return related[:limit]

    def return_to_list(self) -> None:
        self.announcer.announce("Returning to blog list", Priority.POLITE)
