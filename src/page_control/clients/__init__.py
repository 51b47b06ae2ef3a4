from .base import BaseClient
from .page_controls import PageControlClient

__all__ = ["BaseClient", "PageControlClient"]
