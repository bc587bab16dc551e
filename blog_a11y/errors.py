from __future__ import annotations

from typing import Dict


class BlogError(Exception):
    """Base class for errors raised by the blog service."""


class DraftValidationError(BlogError):
    """A post draft failed form validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"post draft has {len(self.errors)} invalid field(s): {', '.join(self.errors)}")
