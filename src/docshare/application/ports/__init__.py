"""Application ports - interfaces for external adapters."""

from docshare.application.ports.content_store import ContentStore
from docshare.application.ports.notifier import Notifier
from docshare.application.ports.password_hasher import PasswordHasher
from docshare.application.ports.token_service import TokenService
from docshare.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "ContentStore",
    "Notifier",
    "PasswordHasher",
    "TokenService",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
