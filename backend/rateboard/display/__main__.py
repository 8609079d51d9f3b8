"""Run a display session until interrupted: ``python -m rateboard.display``."""

from __future__ import annotations

import asyncio
import logging

from rateboard.core.logging import log_event, setup_logging
from .rotation import DisplaySnapshot, ShowingMedia
from .session import DisplaySession

logger = logging.getLogger("rateboard.display")


def _log_snapshot(snapshot: DisplaySnapshot) -> None:
    log_event(
        "display_render",
        log=logger,
        view="media" if isinstance(snapshot.state, ShowingMedia) else "rates",
        media=snapshot.media.url if snapshot.media else None,
        promo=snapshot.promo.url if snapshot.promo else None,
        transition=snapshot.promo.transition_effect if snapshot.promo else None,
    )


async def _run() -> None:
    session = DisplaySession(on_change=_log_snapshot)
    await session.start()
    try:
        await asyncio.Event().wait()
    finally:
        session.close()


def main() -> None:
    setup_logging()
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        logger.info("Display stopped")


if __name__ == "__main__":
    main()
