"""Scheduled sweep: removes schedules left behind by deleted trips."""

import logging
from typing import Any

from core.services import get_itinerary_service

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    result = get_itinerary_service().sweep_orphaned_schedules()

    logger.info(
        "Orphan sweep complete: %d trips checked, %d orphaned, %d schedules deleted",
        result["checked"],
        result["orphaned_trips"],
        result["deleted"],
    )

    return {
        "statusCode": 200,
        "body": f"Orphan sweep: {result['checked']} checked, {result['deleted']} deleted",
    }
