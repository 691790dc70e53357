"""
Database models for the listings API.
Includes User, Property, and Inquiry models with ownership relationships.
"""

from estate_api.models.user import User
from estate_api.models.property import Property
from estate_api.models.inquiry import Inquiry

__all__ = [
    "User",
    "Property",
    "Inquiry",
]
