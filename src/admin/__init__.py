"""
Admin Module

Read-only aggregates for the ANGONI Adventure back office:

- Dashboard snapshot: total bookings, paid revenue, distinct customers and
  available vehicles, recomputed on every request
- Analytics replay: usage events within a look-back window, optionally
  filtered by event type
"""

from . import router, schemas, aggregation_service

__all__ = [
    "router",
    "schemas",
    "aggregation_service"
]
