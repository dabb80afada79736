import datetime
import logging

logger = logging.getLogger(__name__)


def today() -> str:
    """Local calendar date as YYYY-MM-DD (not UTC)."""
    return datetime.date.today().isoformat()


def sync_date(game, current: str = "") -> bool:
    """Re-open `game` for today if the calendar day has moved on.

    Called from the periodic check and on every rerun; a no-op while the date
    is unchanged.
    """
    latest = current or today()
    if latest == game.date:
        return False

    logger.info("Day rolled over from %s to %s", game.date, latest)
    game.roll_over(latest)
    return True
