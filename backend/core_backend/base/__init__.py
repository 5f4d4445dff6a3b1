"""
Core backend base components.

Foundational classes shared by every app's API layer.
"""

from .viewsets import BaseViewSet, ReadOnlyBaseViewSet

__all__ = [
    'BaseViewSet',
    'ReadOnlyBaseViewSet',
]
