"""
Models package
Lookup result data model
"""

from .ip_record import IPRecord, ATTRIBUTION, FIELD_ORDER

__all__ = ['IPRecord', 'ATTRIBUTION', 'FIELD_ORDER']
