"""
Core package for the trip itinerary store.

Validation, DynamoDB repositories and the itinerary service live here.
Lambda handlers in src/handlers/ are thin wrappers that call into core/.
"""

__all__: list[str] = []
