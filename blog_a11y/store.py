"""Post collection and the data sources that fill it."""

from __future__ import annotations

import abc
import asyncio
import time
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from .logging_setup import get_logger
from .metrics import posts_in_store
from .types import Post, PostDraft, make_excerpt


log = get_logger(__name__)


DEFAULT_POSTS: Tuple[Post, ...] = (
    Post(
        id="1",
        title="Getting Started with Web Accessibility",
        content=(
            "Web accessibility ensures that websites and applications are usable by everyone, "
            "including people with disabilities. This involves creating content that can be "
            "perceived, understood, navigated, and interacted with by users of all abilities.\n\n"
            "Key principles include providing alternative text for images, ensuring proper color "
            "contrast, using semantic HTML elements, and making sure all functionality is keyboard "
            "accessible. Screen readers and other assistive technologies rely on well-structured "
            "markup to convey information to users.\n\n"
            "Implementing accessibility from the start is much easier than retrofitting it later. "
            "Consider it an essential part of the development process, not an afterthought."
        ),
        publish_date=date(2025, 9, 15),
        category="Accessibility",
        excerpt=(
            "Learn the fundamentals of web accessibility and why it matters for creating "
            "inclusive digital experiences."
        ),
    ),
    Post(
        id="2",
        title="Building Semantic HTML",
        content=(
            "Semantic HTML provides meaning to web content beyond just presentation. Using elements "
            "like article, section, nav, and proper heading hierarchy creates a logical document "
            "structure that assistive technologies can understand.\n\n"
            "Instead of using div elements for everything, choose HTML elements that best describe "
            "your content. Use headings (h1-h6) in logical order, employ lists for grouped items, "
            "and utilize landmarks like main, aside, and footer.\n\n"
            "Semantic markup improves SEO, accessibility, and code maintainability. It makes your "
            "content more meaningful to both humans and machines."
        ),
        publish_date=date(2025, 9, 10),
        category="Development",
        excerpt=(
            "Discover how semantic HTML elements create better structure and accessibility for "
            "your web content."
        ),
    ),
    Post(
        id="3",
        title="ARIA Best Practices",
        content=(
            "ARIA (Accessible Rich Internet Applications) attributes provide semantic information "
            "about elements to assistive technologies. They should be used to enhance, not replace, "
            "semantic HTML.\n\n"
            "Common ARIA attributes include aria-label for accessible names, aria-describedby for "
            "additional descriptions, and aria-live for dynamic content updates. Use roles sparingly "
            "and only when semantic HTML is insufficient.\n\n"
            "Remember: the first rule of ARIA is don't use ARIA if you can accomplish the same thing "
            "with semantic HTML. Always test with actual screen readers to ensure your ARIA "
            "implementation works as expected."
        ),
        publish_date=date(2025, 9, 5),
        category="Accessibility",
        excerpt=(
            "Master ARIA attributes to enhance accessibility for complex web applications and "
            "dynamic content."
        ),
    ),
)


class PostSource(abc.ABC):
    """Asynchronous provider of the initial post collection."""

    @abc.abstractmethod
    async def fetch_posts(self) -> List[Post]:
        ...


class MockPostSource(PostSource):
    """In-memory source that waits ``delay`` seconds, imitating a remote fetch."""

    def __init__(self, posts: Sequence[Post] = DEFAULT_POSTS, delay: float = 1.0):
        self.posts = list(posts)
        self.delay = delay

    async def fetch_posts(self) -> List[Post]:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return list(self.posts)


class PostStore:
    """Owns the canonical post collection, newest first."""

    def __init__(
        self,
        source: Optional[PostSource] = None,
        clock: Callable[[], float] = time.time,
        today: Callable[[], date] = date.today,
    ):
        self.source = source
        self._clock = clock
        self._today = today
        self._posts: List[Post] = []
        self._last_id = 0
        self.version = 0
        self.loading = False
        self.loaded = False

    async def load(self) -> Tuple[Post, ...]:
        """Fetch posts from the source once; later calls return the current collection."""
        if self.loaded or self.source is None:
            return self.list()

        self.loading = True
        try:
            posts = await self.source.fetch_posts()
        finally:
            self.loading = False

        self._posts = list(posts)
        self.loaded = True
        self.version += 1
        posts_in_store.set(len(self._posts))
        log.info("posts_loaded", count=len(self._posts))
        return self.list()

    def add(self, draft: PostDraft) -> Post:
        post = Post(
            id=self._next_id(),
            title=draft.title,
            content=draft.content,
            category=draft.category,
            publish_date=self._today(),
            image=draft.image,
            image_alt=draft.image_alt,
            excerpt=make_excerpt(draft.content),
        )
        self._posts.insert(0, post)
        self.version += 1
        posts_in_store.set(len(self._posts))
        log.info("post_added", post_id=post.id, category=post.category)
        return post

    def get(self, post_id: str) -> Optional[Post]:
        for post in self._posts:
            if post.id == post_id:
                return post
        return None

    def list(self) -> Tuple[Post, ...]:
        return tuple(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def _next_id(self) -> str:
        # Millisecond timestamp, bumped so two posts in the same millisecond stay distinct
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)
