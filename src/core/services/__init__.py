"""
Business services for the trip itinerary store.

- itinerary.py: validated trip/schedule operations, cascade delete, orphan sweep
"""

from core.services.itinerary import ItineraryService, get_itinerary_service

__all__ = ["ItineraryService", "get_itinerary_service"]
