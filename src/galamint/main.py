"""Main entry point - runs the API server."""

import asyncio
import logging
import signal
from pathlib import Path

import uvicorn
from sqlalchemy.engine import make_url

from galamint.api.app import create_app
from galamint.config import get_settings
from galamint.records.database import close_db, init_db

logger = logging.getLogger(__name__)


def ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


class Application:
    """Main application wrapping the API server."""

    def __init__(self):
        self.settings = get_settings()
        self._shutdown_event = asyncio.Event()

    async def start(self):
        """Start the API server and wait for a shutdown signal."""
        # Configure logging
        log_level = logging.DEBUG if self.settings.debug else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        logger.info("Starting Galamint...")
        logger.info(f"Environment: {self.settings.environment}")
        logger.info(f"GalaChain gateway: {self.settings.galachain_api}")

        ensure_sqlite_directory(self.settings.database_url)
        await init_db()
        logger.info("Database initialized")

        task = asyncio.create_task(self._run_api())
        logger.info("API task created")

        # Server exit also ends the application
        task.add_done_callback(lambda _: self._shutdown_event.set())
        await self._shutdown_event.wait()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

        await self._cleanup()

    async def _run_api(self):
        """Run the FastAPI server."""
        try:
            app = create_app()
            config = uvicorn.Config(
                app,
                host=self.settings.api_host,
                port=self.settings.api_port,
                log_level="debug" if self.settings.debug else "info",
            )
            server = uvicorn.Server(config)
            logger.info(f"Starting API server on {self.settings.api_host}:{self.settings.api_port}")
            await server.serve()
        except asyncio.CancelledError:
            logger.info("API server cancelled")
        except Exception as e:
            logger.error(f"API error: {e}")
            raise

    async def _cleanup(self):
        """Cleanup resources."""
        logger.info("Cleaning up...")
        await close_db()
        logger.info("Cleanup complete")

    def shutdown(self):
        """Signal shutdown."""
        logger.info("Shutdown requested")
        self._shutdown_event.set()


def main():
    """Main entry point."""
    app = Application()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, app.shutdown)

    try:
        loop.run_until_complete(app.start())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        loop.close()


if __name__ == "__main__":
    main()
