import asyncio
import signal
from typing import Optional

import uvicorn

from .announcer import Announcer
from .api import create_api
from .config import Settings, settings
from .forms import PostForm
from .logging_setup import configure_logging, get_logger
from .session import BlogSession
from .store import MockPostSource, PostSource, PostStore


log = get_logger(__name__)


class Service:
    """Owns the application lifecycle.

    The single Announcer is created here, before anything can announce, and
    closed on shutdown. Every other component receives it by reference.
    """

    def __init__(self, config: Optional[Settings] = None, source: Optional[PostSource] = None) -> None:
        self.config = config or settings
        log.info("service_start", service=self.config.service_name)

        self.announcer = Announcer(clear_delay=self.config.announce_clear_seconds)
        self.store = PostStore(source or MockPostSource(delay=self.config.load_delay_seconds))
        self.session = BlogSession(self.store, self.announcer, page_size=self.config.page_size)
        self.form = PostForm(self.store, self.announcer)

        app = create_api(
            self.session,
            self.form,
            self.announcer,
            service_name=self.config.service_name,
            metrics_enabled=self.config.metrics_enabled,
        )
        server_config = uvicorn.Config(
            app,
            host=self.config.http_host,
            port=self.config.http_port,
            log_level=self.config.log_level.lower(),
            access_log=False,
        )
        self.server = uvicorn.Server(server_config)

        # Lifecycle primitives
        self.stop_event = asyncio.Event()
        self._tasks: list[asyncio.Task] = []

    async def start(self) -> None:
        """Start serving and load posts in the background."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self._handle_signal)

        self._tasks = [
            asyncio.create_task(self._run_server()),
            asyncio.create_task(self._load_posts()),
        ]

    def _handle_signal(self) -> None:
        self.stop_event.set()

    async def _run_server(self) -> None:
        await self.server.serve()

    async def _load_posts(self) -> None:
        try:
            await self.store.load()
        except Exception as e:
            log.error("posts_load_failed", error=str(e))

    async def run(self) -> None:
        """Start the service and wait until stop signal; then perform a graceful shutdown."""
        await self.start()

        # uvicorn may capture the signal itself, in which case its task finishes first
        stop_waiter = asyncio.create_task(self.stop_event.wait())
        await asyncio.wait({stop_waiter, self._tasks[0]}, return_when=asyncio.FIRST_COMPLETED)
        stop_waiter.cancel()

        self.server.should_exit = True
        # The server drains on should_exit; background tasks are cancelled
        for t in self._tasks[1:]:
            t.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)

        self.announcer.close()
        log.info("service_stop")


def main() -> None:
    configure_logging(settings.log_level, settings.log_format)
    asyncio.run(_main())


async def _main() -> None:
    service = Service()
    await service.run()
