"""Builder routes."""

from . import actions
from . import templates

__all__ = ["actions", "templates"]
