"""
Pydantic schemas for API validation and data contracts.
"""

from .listing import (
    RawListingSchema,
    OptimizedListingSchema,
    OptimizeRequest,
    SaveRequest,
    ProcessRequest,
)

__all__ = [
    'RawListingSchema',
    'OptimizedListingSchema',
    'OptimizeRequest',
    'SaveRequest',
    'ProcessRequest',
]
