"""League configuration for free agency."""

from .free_agency_settings import FreeAgencySettings

__all__ = ["FreeAgencySettings"]
