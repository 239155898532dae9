"""Repository contract shared by the product and order stores.

Services receive a concrete repository through their constructor and
only call what is declared here or on the per-aggregate interface that
extends it.  Look-ups by id never raise for an unknown or malformed id:
they answer ``None`` / ``False`` and the service decides what that means.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

from django.db import models

M = TypeVar("M", bound=models.Model)


class IRepository(ABC, Generic[M]):
    """Persistence port for one aggregate root ``M``."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[M]:
        """The row with primary key ``id``, or ``None``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[M]:
        """Lazy queryset, narrowed by the ORM look-ups in ``filters``."""

    @abstractmethod
    def save(self, entity: M) -> M:
        """Insert or update ``entity`` and return it."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Hard delete; ``False`` when nothing matched ``id``."""
