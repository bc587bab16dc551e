"""Shared fixtures for the blog core tests."""

from datetime import date

import pytest

from blog_a11y.announcer import Announcer
from blog_a11y.types import Post


class FakeHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Just enough of an event loop for ``call_later`` with a manual clock.

    With ``honor_cancel=False`` cancelled handles still fire, which models a
    timer callback that was already queued when it got superseded.
    """

    def __init__(self, honor_cancel=True):
        self.now = 0.0
        self.handles = []
        self.honor_cancel = honor_cancel

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, seconds):
        self.now += seconds
        due = sorted((h for h in self.handles if h.when <= self.now), key=lambda h: h.when)
        for handle in due:
            self.handles.remove(handle)
            if handle.cancelled and self.honor_cancel:
                continue
            handle.callback(*handle.args)

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]


@pytest.fixture
def fake_loop():
    return FakeLoop()


@pytest.fixture
def announcer(fake_loop):
    return Announcer(clear_delay=1.0, loop=fake_loop)


def make_post(post_id, title, content, category, day=1):
    return Post(
        id=post_id,
        title=title,
        content=content,
        category=category,
        publish_date=date(2025, 9, day),
    )


@pytest.fixture
def corpus():
    """Seven posts: three in Dev, two mentioning "access"."""
    return (
        make_post("1", "Accessibility basics", "Start with semantic markup.", "Design", 1),
        make_post("2", "Python tips", "Use list comprehensions.", "Dev", 2),
        make_post("3", "Release notes", "We shipped keyboard ACCESS shortcuts.", "News", 3),
        make_post("4", "Testing async code", "Event loops and timers.", "Dev", 4),
        make_post("5", "Colour palettes", "Contrast ratios matter.", "Design", 5),
        make_post("6", "Deploy checklist", "Back up the database first.", "Dev", 6),
        make_post("7", "Community meetup", "Join us on Friday.", "News", 7),
    )


@pytest.fixture
def post_factory():
    return make_post


@pytest.fixture
def loop_factory():
    return FakeLoop
