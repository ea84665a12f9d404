"""
Catalog Module

Browse and maintain what ANGONI Adventure sells: safari packages, rental
vehicles, shuttle routes and destinations. Browse endpoints record usage
events as a side channel.
"""

from .router import router
from .service import CatalogService

__all__ = ["router", "CatalogService"]
