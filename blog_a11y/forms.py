"""Validation and submission of the new post form."""

from typing import Dict

from .announcer import Announcer
from .errors import DraftValidationError
from .logging_setup import get_logger
from .metrics import form_errors_total, posts_created_total
from .store import PostStore
from .types import Post, PostDraft, Priority

log = get_logger(__name__)

POST_ADDED = "Post added successfully!"
POST_ADD_FAILED = "Error adding post. Please try again."
IMAGE_REMOVED = "Image removed"


def validate_draft(draft: PostDraft) -> Dict[str, str]:
    """Field name -> message for every invalid field; empty when the draft is valid."""
    errors: Dict[str, str] = {}

    if not draft.title.strip():
        errors["title"] = "Title is required"

    if not draft.content.strip():
        errors["content"] = "Content is required"

    if not draft.category.strip():
        errors["category"] = "Category is required"

    if draft.image and not draft.image_alt.strip():
        errors["image_alt"] = "Alt text is required when image is provided"

    return errors


def error_summary(error_count: int) -> str:
    suffix = "s" if error_count > 1 else ""
    return f"Form has {error_count} error{suffix}. Please correct and try again."


class PostForm:
    """Submits drafts to the store, telling screen reader users how it went."""

    def __init__(self, store: PostStore, announcer: Announcer):
        self.store = store
        self.announcer = announcer

    def submit(self, draft: PostDraft) -> Post:
        errors = validate_draft(draft)
        if errors:
            form_errors_total.inc()
            self.announcer.announce(error_summary(len(errors)), Priority.ASSERTIVE)
            log.info("post_form_invalid", fields=sorted(errors))
            raise DraftValidationError(errors)

        try:
            post = self.store.add(draft)
        except Exception as e:
            log.error("post_add_failed", error=str(e))
            self.announcer.announce(POST_ADD_FAILED, Priority.ASSERTIVE)
            raise

        posts_created_total.inc()
        self.announcer.announce(POST_ADDED, Priority.POLITE)
        return post

    def remove_image(self, draft: PostDraft) -> PostDraft:
        self.announcer.announce(IMAGE_REMOVED, Priority.POLITE)
        return draft.model_copy(update={"image": None, "image_alt": ""})
