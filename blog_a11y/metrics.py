from __future__ import annotations

from prometheus_client import Counter, Gauge


announcements_total = Counter(
    "blog_announcements_total",
    "Announcements sent to live regions",
    ["priority"],
)

announcement_clears_total = Counter(
    "blog_announcement_clears_total",
    "Live region auto-clears that were applied",
    ["priority"],
)

searches_total = Counter(
    "blog_searches_total",
    "Search/filter evaluations",
)

search_results = Gauge(
    "blog_search_results",
    "Number of posts matched by the latest search",
)

page_changes_total = Counter(
    "blog_page_changes_total",
    "Pagination page changes",
)

posts_created_total = Counter(
    "blog_posts_created_total",
    "Posts added through the post form",
)

form_errors_total = Counter(
    "blog_form_errors_total",
    "Post form submissions rejected by validation",
)

posts_in_store = Gauge(
    "blog_posts_in_store",
    "Posts currently held by the post store",
)
