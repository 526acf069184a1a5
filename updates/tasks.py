"""
Celery tasks for background processing.

Periodic refresh of the cached update check.
"""
import logging

from LicenseLifecycleClient.celery import app

logger = logging.getLogger(__name__)


@app.task
def refresh_update_check():
    """
    Refresh the cached update check.

    Returns:
        Available version, or None when up to date or unlicensed
    """
    from LicenseLifecycleClient.services import build_update_checker

    checker = build_update_checker()
    checker.update_cache.invalidate()
    update = checker.check_for_updates()
    if update is None:
        logger.info("No update available for %s", checker.plugin_slug)
        return None
    return update.version
