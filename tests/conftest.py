"""Pytest fixtures for DocShare tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from copy import deepcopy
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from docshare.application.services.otp_manager import OtpManager
from docshare.domain.entities import ContentRef, Document, ShareEntry, User
from docshare.domain.exceptions import EmailAlreadyRegistered, NotificationError, StorageError
from docshare.domain.value_objects import AccessLevel, DocumentType, PendingCode
from docshare.infrastructure.security.jwt_token_service import JwtTokenService


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository. Returns copies, like rows read from a database."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}

    async def get_by_id(self, user_id: UUID) -> User | None:
        user = self._by_id.get(user_id)
        return deepcopy(user) if user else None

    async def get_by_email(self, email: str) -> User | None:
        for user in self._by_id.values():
            if user.email == email:
                return deepcopy(user)
        return None

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]:
        return {uid: deepcopy(self._by_id[uid]) for uid in user_ids if uid in self._by_id}

    async def create(self, user: User) -> User:
        if any(u.email == user.email for u in self._by_id.values()):
            raise EmailAlreadyRegistered()
        self._by_id[user.id] = deepcopy(user)
        return user

    async def set_pending_code(self, user_id: UUID, code: PendingCode) -> bool:
        user = self._by_id.get(user_id)
        if user is None or user.is_verified:
            return False
        user.pending_code = code
        return True

    async def consume_pending_code(self, user_id: UUID, code_value: str) -> User | None:
        user = self._by_id.get(user_id)
        if (
            user is None
            or user.is_verified
            or user.pending_code is None
            or user.pending_code.value != code_value
        ):
            return None
        user.is_verified = True
        user.pending_code = None
        return deepcopy(user)

    async def update_name(self, user_id: UUID, name: str, updated_at: datetime) -> None:
        self._by_id[user_id].name = name
        self._by_id[user_id].updated_at = updated_at

    async def update_password_hash(
        self, user_id: UUID, password_hash: str, updated_at: datetime
    ) -> None:
        self._by_id[user_id].password_hash = password_hash
        self._by_id[user_id].updated_at = updated_at

    def stored(self, user_id: UUID) -> User:
        return self._by_id[user_id]


class FakeShareRepository:
    """In-memory share entries keyed by document, insertion ordered."""

    def __init__(self) -> None:
        self._by_document: dict[UUID, list[ShareEntry]] = {}

    async def add(self, document_id: UUID, entry: ShareEntry) -> bool:
        entries = self._by_document.setdefault(document_id, [])
        if any(e.user_id == entry.user_id for e in entries):
            return False
        entries.append(deepcopy(entry))
        return True

    async def update_access_level(
        self, document_id: UUID, user_id: UUID, access_level: AccessLevel
    ) -> bool:
        for e in self._by_document.get(document_id, []):
            if e.user_id == user_id:
                e.access_level = access_level
                return True
        return False

    async def remove(self, document_id: UUID, user_id: UUID) -> bool:
        entries = self._by_document.get(document_id, [])
        kept = [e for e in entries if e.user_id != user_id]
        self._by_document[document_id] = kept
        return len(kept) != len(entries)

    def drop_document(self, document_id: UUID) -> None:
        self._by_document.pop(document_id, None)


class FakeDocumentRepository:
    """In-memory document repository; shares come from the share repository."""

    def __init__(self, shares: FakeShareRepository) -> None:
        self._by_id: dict[UUID, Document] = {}
        self._shares = shares
        self.fail_create = False

    def _load(self, doc: Document) -> Document:
        loaded = deepcopy(doc)
        loaded.shared_with = deepcopy(self._shares._by_document.get(doc.id, []))
        return loaded

    async def get_by_id(self, document_id: UUID, *, for_update: bool = False) -> Document | None:
        doc = self._by_id.get(document_id)
        return self._load(doc) if doc else None

    async def list_by_owner(self, owner_id: UUID) -> list[Document]:
        docs = [d for d in self._by_id.values() if d.owner_id == owner_id]
        docs.sort(key=lambda d: d.created_at, reverse=True)
        return [self._load(d) for d in docs]

    async def list_shared_with(self, user_id: UUID) -> list[Document]:
        docs = [
            d
            for d in self._by_id.values()
            if any(e.user_id == user_id for e in self._shares._by_document.get(d.id, []))
        ]
        docs.sort(key=lambda d: d.created_at, reverse=True)
        return [self._load(d) for d in docs]

    async def create(self, document: Document) -> Document:
        if self.fail_create:
            raise RuntimeError("database unavailable")
        self._by_id[document.id] = replace(deepcopy(document), shared_with=[])
        return document

    async def update_fields(self, document: Document) -> Document:
        stored = self._by_id[document.id]
        stored.title = document.title
        stored.description = document.description
        stored.document_type = document.document_type
        stored.updated_at = document.updated_at
        return document

    async def touch(self, document_id: UUID, updated_at: datetime) -> None:
        self._by_id[document_id].updated_at = updated_at

    async def delete(self, document_id: UUID) -> bool:
        if self._by_id.pop(document_id, None) is None:
            return False
        self._shares.drop_document(document_id)
        return True

    def stored(self, document_id: UUID) -> Document | None:
        doc = self._by_id.get(document_id)
        return self._load(doc) if doc else None


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.shares = FakeShareRepository()
        self.documents = FakeDocumentRepository(self.shares)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork, so state persists across calls."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


# --- Fake collaborators ---


class FakePasswordHasher:
    """Reversible stand-in for bcrypt; keeps tests fast."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{password}"


class FakeNotifier:
    """Records sent codes instead of mailing them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    async def send_otp(self, email: str, name: str, code: str, ttl_minutes: int) -> None:
        if self.fail:
            raise NotificationError()
        self.sent.append((email, code))

    def last_code(self, email: str) -> str:
        for sent_to, code in reversed(self.sent):
            if sent_to == email:
                return code
        raise AssertionError(f"no code sent to {email}")


class FakeContentStore:
    """In-memory blob store."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, data: bytes, filename: str, content_type: str | None) -> ContentRef:
        if self.fail_upload:
            raise StorageError()
        key = f"documents/{uuid4().hex}-{filename}"
        self.objects[key] = data
        return ContentRef(url=f"https://files.example.com/{key}", storage_key=key)

    async def delete(self, storage_key: str) -> None:
        if self.fail_delete:
            raise StorageError("Failed to delete file from cloud storage")
        self.objects.pop(storage_key, None)
        self.deleted.append(storage_key)


# --- Builders ---


def add_user(
    uow: FakeUnitOfWork,
    name: str,
    email: str,
    *,
    password: str = "secret123",
    verified: bool = True,
) -> User:
    """Insert a user straight into the fake store."""
    now = datetime.now(UTC)
    user = User(
        id=uuid4(),
        name=name,
        email=email,
        password_hash=FakePasswordHasher().hash(password),
        created_at=now,
        updated_at=now,
        is_verified=verified,
    )
    uow.users._by_id[user.id] = deepcopy(user)
    return user


def add_document(
    uow: FakeUnitOfWork,
    owner: User,
    *,
    title: str = "Passport scan",
    shares: list[tuple[User, AccessLevel]] | None = None,
) -> Document:
    """Insert a document (and optional share entries) straight into the fake store."""
    now = datetime.now(UTC)
    doc = Document(
        id=uuid4(),
        title=title,
        description="Scanned copy",
        document_type=DocumentType.PASSPORT,
        content_ref=ContentRef(url="https://files.example.com/documents/x.pdf", storage_key="documents/x.pdf"),
        owner_id=owner.id,
        created_at=now,
        updated_at=now,
    )
    uow.documents._by_id[doc.id] = deepcopy(doc)
    for user, level in shares or []:
        uow.shares._by_document.setdefault(doc.id, []).append(
            ShareEntry(user_id=user.id, access_level=level, shared_at=now)
        )
    return doc


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def content_store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(secret="test-secret", expire_minutes=60)


@pytest.fixture
def otp_manager(uow_factory) -> OtpManager:
    return OtpManager(unit_of_work_factory=uow_factory, code_length=6, ttl_minutes=10)
