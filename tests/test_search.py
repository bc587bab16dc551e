import pytest

from blog_a11y.search import (
    CLEARED_ANNOUNCEMENT,
    SearchFilterPipeline,
    build_announcement,
    filter_posts,
    list_categories,
)


@pytest.fixture
def pipeline(announcer):
    return SearchFilterPipeline(announcer)


class TestFilter:
    def test_identity_filter_returns_corpus_in_order(self, pipeline, corpus):
        result = pipeline.filter(corpus, "", "all")
        assert result.items == corpus
        assert result.count == 7

    def test_term_matches_title_or_content_case_insensitively(self, pipeline, corpus):
        result = pipeline.filter(corpus, "access", "all")
        assert [p.id for p in result.items] == ["1", "3"]
        assert result.count == 2
        assert result.announcement == 'Search updated. 2 posts found for "access".'

    def test_category_only(self, pipeline, corpus):
        result = pipeline.filter(corpus, "", "Dev")
        assert [p.id for p in result.items] == ["2", "4", "6"]
        assert result.announcement == "Search updated. 3 posts found in Dev."

    def test_term_and_category_are_combined(self, pipeline, corpus):
        result = pipeline.filter(corpus, "ACCESS", "News")
        assert [p.id for p in result.items] == ["3"]
        assert result.announcement == 'Search updated. 1 post found for "ACCESS" in News.'

    def test_category_match_is_case_sensitive(self, pipeline, corpus):
        assert pipeline.filter(corpus, "", "dev").count == 0

    def test_unknown_category_gives_empty_result(self, pipeline, corpus):
        result = pipeline.filter(corpus, "", "Gardening")
        assert result.items == ()
        assert result.announcement == "Search updated. 0 posts found in Gardening."

    def test_whitespace_term_is_no_term(self, pipeline, corpus):
        result = pipeline.filter(corpus, "   ", "all")
        assert result.items == corpus
        assert result.announcement == "Search updated. 7 posts found."

    def test_term_is_trimmed(self, pipeline, corpus):
        result = pipeline.filter(corpus, "  tips ", "all")
        assert [p.id for p in result.items] == ["2"]
        assert result.announcement == 'Search updated. 1 post found for "tips".'

    def test_empty_corpus_still_announces(self, pipeline, announcer):
        result = pipeline.filter((), "anything", "all")
        assert result.count == 0
        assert announcer.text("polite") == 'Search updated. 0 posts found for "anything".'

    def test_every_filter_announces_politely(self, pipeline, corpus, announcer):
        pipeline.filter(corpus, "", "Dev")
        assert announcer.snapshot() == {
            "polite": "Search updated. 3 posts found in Dev.",
            "assertive": "",
        }

    def test_filter_is_idempotent(self, pipeline, corpus):
        first = pipeline.filter(corpus, "e", "Dev")
        second = pipeline.filter(first.items, "e", "Dev")
        assert second.items == first.items

    def test_count_matches_items_and_predicates(self, pipeline, corpus):
        for term in ("", "a", "the", "zzz"):
            for category in ("all", "Dev", "Design", "News"):
                result = pipeline.filter(corpus, term, category)
                assert result.count == len(result.items)
                for post in result.items:
                    if term:
                        assert term in post.title.lower() or term in post.content.lower()
                    if category != "all":
                        assert post.category == category

    def test_query_state_replaced(self, pipeline, corpus):
        pipeline.filter(corpus, " tips ", "Dev")
        assert pipeline.query.term == "tips"
        assert pipeline.query.category == "Dev"


class TestClear:
    def test_clear_resets_and_uses_fixed_announcement(self, pipeline, corpus, announcer):
        pipeline.filter(corpus, "access", "Design")
        result = pipeline.clear()

        assert result.items == corpus
        assert result.announcement == CLEARED_ANNOUNCEMENT
        assert announcer.text("polite") == "Search cleared. Showing all posts."
        assert pipeline.query.term == ""
        assert pipeline.query.category == "all"

    def test_clear_with_explicit_corpus(self, pipeline, corpus):
        result = pipeline.clear(corpus[:2])
        assert result.count == 2


class TestHelpers:
    @pytest.mark.parametrize(
        "count,term,category,expected",
        [
            (0, "", "all", "Search updated. 0 posts found."),
            (1, "", "all", "Search updated. 1 post found."),
            (2, "x", "all", 'Search updated. 2 posts found for "x".'),
            (5, "", "Dev", "Search updated. 5 posts found in Dev."),
            (1, "aria", "Accessibility", 'Search updated. 1 post found for "aria" in Accessibility.'),
        ],
    )
    def test_build_announcement(self, count, term, category, expected):
        assert build_announcement(count, term, category) == expected

    def test_filter_posts_does_not_announce(self, corpus, announcer):
        filter_posts(corpus, "tips")
        assert announcer.text("polite") == ""

    def test_list_categories_in_first_seen_order(self, corpus):
        assert list_categories(corpus) == ["all", "Design", "Dev", "News"]

    def test_stats(self, pipeline, corpus):
        pipeline.filter(corpus, "zzz")
        pipeline.filter(corpus, "tips")
        pipeline.clear()
        assert pipeline.get_stats() == {"total_searches": 3, "empty_results": 1, "clears": 1}
        pipeline.reset_stats()
        assert pipeline.get_stats()["total_searches"] == 0
