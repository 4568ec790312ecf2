"""Refresher app - keeps today's daily stats row up to date."""

import logging
import time
from typing import Optional

import requests

from configs import settings

# Logging configuration
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

REQUEST_TIMEOUT_SECONDS = 30


def update_daily_stats(day: Optional[str] = None) -> requests.models.Response:
    """
    Ask the backend to recompute and store the stats of a day.

    Args:
        day (str): ISO date (YYYY-MM-DD) to refresh. Today when omitted.

    Returns:
        requests.models.Response: The response from the backend.
    """
    url = f"http://{settings.BACKEND_HOST}/api/admin/update-daily-stats"
    params = {"date": day} if day else None
    return requests.post(url, params=params, timeout=REQUEST_TIMEOUT_SECONDS)


def refresh_once(day: Optional[str] = None) -> bool:
    """Run one refresh and report whether the backend accepted it."""
    try:
        response = update_daily_stats(day)
    except requests.RequestException as exc:
        logging.warning("Daily stats refresh failed: %s", exc)
        return False

    if response.status_code != 200:
        logging.warning(
            "Daily stats refresh rejected with status %d", response.status_code
        )
        return False

    stats = response.json()
    logging.info(
        "Daily stats for %s refreshed: %s calls, %s wins",
        stats.get("date"),
        stats.get("total_calls"),
        stats.get("total_wins"),
    )
    return True


def refresher(interval_seconds: int = settings.STATS_REFRESH_SECONDS) -> None:
    """Refresh today's stats forever, every ``interval_seconds``."""
    logging.info("Starting daily stats refresher every %d seconds.", interval_seconds)
    while True:
        refresh_once()
        time.sleep(interval_seconds)


if __name__ == "__main__":
    refresher()
