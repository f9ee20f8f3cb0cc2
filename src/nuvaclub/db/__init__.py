"""Local persistence layer."""

from .models import Base
from .sqlite import Database

__all__ = ["Base", "Database"]
