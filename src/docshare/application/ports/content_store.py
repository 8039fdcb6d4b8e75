"""Content store port - external blob storage."""

from typing import Protocol

from docshare.domain.entities import ContentRef


class ContentStore(Protocol):
    """Port for storing uploaded files. Failures raise StorageError."""

    async def upload(self, data: bytes, filename: str, content_type: str | None) -> ContentRef: ...

    async def delete(self, storage_key: str) -> None: ...
