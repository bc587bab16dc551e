import asyncio

import pytest

from blog_a11y.session import BlogSession
from blog_a11y.store import MockPostSource, PostStore
from blog_a11y.types import PostDraft


@pytest.fixture
def store(corpus):
    store = PostStore(MockPostSource(posts=corpus, delay=0))
    asyncio.run(store.load())
    return store


@pytest.fixture
def session(store, announcer):
    return BlogSession(store, announcer, page_size=3)


class TestBlogSession:
    def test_search_resets_to_first_page(self, session):
        session.search()
        session.go_to_page(3)
        assert session.view().window.current_page == 3

        # Page 3 still exists for the new result set, yet the new query starts at the top
        view = session.search("", "all")
        assert view.window.current_page == 1
        assert [p.id for p in view.posts] == ["1", "2", "3"]

        view = session.search("", "Dev")
        assert [p.id for p in view.posts] == ["2", "4", "6"]

    def test_view_slices_current_page(self, session):
        session.search()
        view = session.go_to_page(2)
        assert [p.id for p in view.posts] == ["4", "5", "6"]
        assert view.window.visible_range == (3, 6)
        assert view.window.page_numbers == (1, 2, 3)

    def test_search_announcement_then_page_announcement(self, session, announcer):
        session.search("access")
        assert announcer.text("polite") == 'Search updated. 2 posts found for "access".'
        session.go_to_page(1)
        assert announcer.text("polite") == "Moved to page 1"

    def test_clear_search(self, session, announcer):
        session.search("access", "News")
        view = session.clear_search()
        assert view.result.count == 7
        assert view.query.term == ""
        assert announcer.text("polite") == "Search cleared. Showing all posts."

    def test_refresh_sees_new_posts(self, session, store):
        session.search("", "Dev")
        store.add(PostDraft(title="New", content="Fresh content", category="Dev"))
        assert session.is_stale

        view = session.refresh()
        assert view.result.count == 4
        assert view.posts[0].title == "New"
        assert not session.is_stale

    def test_open_post_announces_title(self, session, announcer):
        post = session.open_post("2")
        assert post.title == "Python tips"
        assert announcer.text("polite") == "Viewing post: Python tips"

    def test_open_missing_post(self, session, announcer):
        assert session.open_post("nope") is None
        assert announcer.text("polite") == ""

    def test_related_posts_same_category_in_store_order(self, session, store):
        post = store.get("2")
        assert [p.id for p in session.related_posts(post)] == ["4", "6"]
        assert [p.id for p in session.related_posts(post, limit=1)] == ["4"]
        assert session.related_posts(store.get("1")) == [store.get("5")]

    def test_related_posts_capped_at_three(self, session, store):
        for i in range(3):
            store.add(PostDraft(title=f"Extra {i}", content="c", category="Dev"))
        related = session.related_posts(store.get("2"))
        assert len(related) == 3
        assert all(p.category == "Dev" and p.id != "2" for p in related)
        assert [p.title for p in related] == ["Extra 2", "Extra 1", "Extra 0"]

    def test_return_to_list_announces(self, session, announcer):
        session.return_to_list()
        assert announcer.text("polite") == "Returning to blog list"

    def test_categories(self, session):
        assert session.categories() == ["all", "Design", "Dev", "News"]
