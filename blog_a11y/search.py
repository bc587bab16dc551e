"""Search and category filtering for the post list."""

from typing import Dict, List, Optional, Sequence, Tuple

from .announcer import Announcer
from .logging_setup import get_logger
from .metrics import search_results, searches_total
from .types import ALL_CATEGORIES, FilterResult, Post, Priority, QueryState

log = get_logger(__name__)

CLEARED_ANNOUNCEMENT = "Search cleared. Showing all posts."


def build_announcement(count: int, term: str = "", category: str = ALL_CATEGORIES) -> str:
    """Result count sentence read to screen reader users after every search.

    The wording is relied upon by users, keep it stable.
    """
    noun = "post" if count == 1 else "posts"
    message = f"Search updated. {count} {noun} found"
    if term:
        message += f' for "{term}"'
    if category != ALL_CATEGORIES:
        message += f" in {category}"
    return message + "."


def matches_term(post: Post, term: str) -> bool:
    """Case-insensitive substring match on title or content. ``term`` must be lower-cased."""
    return term in post.title.lower() or term in post.content.lower()


def filter_posts(corpus: Sequence[Post], term: str, category: str = ALL_CATEGORIES) -> Tuple[Post, ...]:
    """Stable filter of ``corpus`` by search term and exact category."""
    term = term.strip()
    filtered: Sequence[Post] = corpus

    if term:
        needle = term.lower()
        filtered = [post for post in filtered if matches_term(post, needle)]

    if category != ALL_CATEGORIES:
        filtered = [post for post in filtered if post.category == category]

    return tuple(filtered)


def list_categories(corpus: Sequence[Post]) -> List[str]:
    """``all`` followed by every category in order of first appearance."""
    categories = [ALL_CATEGORIES]
    for post in corpus:
        if post.category not in categories:
            categories.append(post.category)
    return categories


class SearchFilterPipeline:
    """Derives the visible post set from a query and announces the outcome."""

    def __init__(self, announcer: Announcer):
        self.announcer = announcer
        self.query = QueryState()
        self._last_corpus: Tuple[Post, ...] = ()

        # Statistics
        self.total_searches = 0
        self.empty_results = 0
        self.clears = 0

    def filter(self, corpus: Sequence[Post], term: str = "", category: str = ALL_CATEGORIES) -> FilterResult:
        """Filter ``corpus`` and announce the result count politely."""
        term = term.strip()
        result = self._evaluate(corpus, QueryState(term=term, category=category))
        result = result.model_copy(
            update={"announcement": build_announcement(result.count, term, category)}
        )
        self.announcer.announce(result.announcement, Priority.POLITE)
        log.info("search_updated", term=term, category=category, count=result.count)
        return result

    def clear(self, corpus: Optional[Sequence[Post]] = None) -> FilterResult:
        """Reset to the identity query; uses the last corpus seen if none is given."""
        source = self._last_corpus if corpus is None else corpus
        result = self._evaluate(source, QueryState())
        result = result.model_copy(update={"announcement": CLEARED_ANNOUNCEMENT})
        self.clears += 1
        self.announcer.announce(CLEARED_ANNOUNCEMENT, Priority.POLITE)
        log.info("search_cleared", count=result.count)
        return result

    def categories(self, corpus: Optional[Sequence[Post]] = None) -> List[str]:
        return list_categories(self._last_corpus if corpus is None else corpus)

    def _evaluate(self, corpus: Sequence[Post], query: QueryState) -> FilterResult:
        self._last_corpus = tuple(corpus)
        self.query = query
        items = filter_posts(self._last_corpus, query.term, query.category)

        self.total_searches += 1
        if not items:
            self.empty_results += 1
        searches_total.inc()
        search_results.set(len(items))

        return FilterResult(items=items, count=len(items))

    def get_stats(self) -> Dict[str, int]:
        """Get search statistics."""
        return {
            "total_searches": self.total_searches,
            "empty_results": self.empty_results,
            "clears": self.clears,
        }

    def reset_stats(self) -> None:
        self.total_searches = 0
        self.empty_results = 0
        self.clears = 0
