"""
Armenian property listings API.
Public listing feed, property inquiries and owner dashboards over a relational store.
"""

__version__ = "1.0.0"
