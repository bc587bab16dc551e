"""HTTP surface for the render layer, plus health and metrics endpoints."""

from typing import Optional

from fastapi import FastAPI, Query, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .announcer import Announcer
from .errors import DraftValidationError
from .forms import PostForm
from .logging_setup import get_logger
from .session import BlogSession
from .types import ALL_CATEGORIES, PostDraft, QueryState

logger = get_logger(__name__)


class BlogApi:
    """FastAPI application exposing one reader session."""

    def __init__(
        self,
        session: BlogSession,
        form: PostForm,
        announcer: Announcer,
        service_name: str = "accessible-blog",
        metrics_enabled: bool = True,
    ):
        self.session = session
        self.form = form
        self.announcer = announcer
        self.service_name = service_name
        self.metrics_enabled = metrics_enabled
        self.app = FastAPI(
            title="Accessible Blog",
            description="Post listing, search, pagination and live region state",
            version="1.0.0",
        )

        self._setup_routes()

    def _setup_routes(self) -> None:
        """Setup routes."""

        # Handlers must stay async: announcer clears are scheduled on the running loop

        @self.app.get("/posts")
        async def list_posts(
            q: str = "",
            category: str = ALL_CATEGORIES,
            page: Optional[int] = Query(default=None),
        ):
            session = self.session
            query = QueryState(term=q.strip(), category=category)
            if query != session.query or session.is_stale:
                # A new query always starts on page 1; ``page`` only applies within a query
                session.search(q, category)
            elif page is not None:
                session.go_to_page(page)

            view = session.view()
            return {
                **view.model_dump(mode="json"),
                "summary": view.window.summary,
                "show_navigation": not view.window.is_degenerate,
                "loading": session.store.loading,
            }

        @self.app.post("/search/clear")
        async def clear_search():
            view = self.session.clear_search()
            return view.model_dump(mode="json")

        @self.app.get("/categories")
        async def categories():
            return {"categories": self.session.categories()}

        @self.app.get("/posts/{post_id}")
        async def get_post(post_id: str):
            post = self.session.open_post(post_id)
            if post is None:
                return JSONResponse(content={"error": "post not found", "id": post_id}, status_code=404)
            return {
                **post.model_dump(mode="json"),
                "paragraphs": post.paragraphs(),
                "related": [p.model_dump(mode="json") for p in self.session.related_posts(post)],
            }

        @self.app.post("/posts/back")
        async def back_to_list():
            self.session.return_to_list()
            return {"status": "ok"}

        @self.app.post("/posts", status_code=201)
        async def create_post(draft: PostDraft):
            try:
                post = self.form.submit(draft)
            except DraftValidationError as e:
                return JSONResponse(content={"errors": e.errors}, status_code=422)
            return post.model_dump(mode="json")

        @self.app.get("/announcements")
        async def announcements():
            return self.announcer.snapshot()

        @self.app.get("/health")
        async def health_check():
            return {"status": "healthy", "service": self.service_name}

        @self.app.get("/ready")
        async def readiness_check():
            is_ready = self.session.store.loaded
            return JSONResponse(
                content={
                    "status": "ready" if is_ready else "not_ready",
                    "service": self.service_name,
                },
                status_code=200 if is_ready else 503,
            )

        @self.app.get("/metrics")
        async def metrics():
            if not self.metrics_enabled:
                return JSONResponse(content={"error": "metrics disabled"}, status_code=404)
            try:
                return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
            except Exception as e:
                logger.error("metrics_endpoint_failed", error=str(e))
                return JSONResponse(content={"error": str(e)}, status_code=500)


def create_api(session: BlogSession, form: PostForm, announcer: Announcer, **kwargs) -> FastAPI:
    return BlogApi(session, form, announcer, **kwargs).app
