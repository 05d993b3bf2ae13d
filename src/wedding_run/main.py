"""
Main entry point for Wedding Run.

Reads the environment from settings and launches either the desktop
simulator or a windowless loop.
"""

import asyncio
import logging
import sys
import time

from wedding_run.app import WeddingRunApp
from wedding_run.config.settings import Settings, get_settings
from wedding_run.core.events import EventType


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the desktop simulator."""
    from wedding_run.simulator.window import SimulatorWindow

    app = WeddingRunApp(settings)
    window = SimulatorWindow(app)
    await window.run()


async def run_headless(settings: Settings) -> None:
    """Drive frames without a window until SHUTDOWN is emitted."""
    app = WeddingRunApp(settings)
    await app.prepare()

    running = True

    def on_shutdown(event) -> None:
        nonlocal running
        running = False

    app.event_bus.subscribe(EventType.SHUTDOWN, on_shutdown)
    frame_s = 1.0 / settings.fps
    start = time.monotonic()

    try:
        while running:
            await app.frame((time.monotonic() - start) * 1000.0)
            await asyncio.sleep(frame_s)
    finally:
        await app.shutdown()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Wedding Run starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running headless")
            asyncio.run(run_headless(settings))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Wedding Run stopped")


if __name__ == "__main__":
    main()
