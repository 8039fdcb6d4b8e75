"""Unit tests for PostgreSQL repositories and external adapters (no network)."""

import smtplib
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError
from psycopg.errors import UniqueViolation

from docshare.domain.entities import ShareEntry, User
from docshare.domain.exceptions import EmailAlreadyRegistered, NotificationError, StorageError
from docshare.domain.value_objects import AccessLevel, PendingCode
from docshare.infrastructure.notifications.smtp_notifier import SmtpNotifier, build_otp_message
from docshare.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from docshare.infrastructure.persistence.postgres.share_repository import PostgresShareRepository
from docshare.infrastructure.persistence.postgres.user_repository import PostgresUserRepository
from docshare.infrastructure.storage.s3_content_store import S3ContentStore


def _conn(*cursors) -> MagicMock:
    """Connection whose execute() returns the given cursors in order."""
    conn = MagicMock()
    conn.execute = AsyncMock(side_effect=list(cursors))
    return conn


def _cursor(one=None, many=None, rowcount=0) -> MagicMock:
    cur = MagicMock()
    cur.fetchone = AsyncMock(return_value=one)
    cur.fetchall = AsyncMock(return_value=many or [])
    cur.rowcount = rowcount
    return cur


class TestPostgresUserRepository:
    @pytest.mark.asyncio
    async def test_row_mapping_with_pending_code(self) -> None:
        uid = uuid4()
        now = datetime.now(UTC)
        row = (uid, "Alice", "alice@example.com", "h", False, "123456", now, now, now)
        repo = PostgresUserRepository(_conn(_cursor(one=row)))

        user = await repo.get_by_id(uid)

        assert user.email == "alice@example.com"
        assert user.pending_code.value == "123456"
        assert not user.is_verified

    @pytest.mark.asyncio
    async def test_consume_is_conditional_on_code(self) -> None:
        conn = _conn(_cursor(one=None))
        repo = PostgresUserRepository(conn)

        assert await repo.consume_pending_code(uuid4(), "123456") is None
        sql = conn.execute.call_args.args[0]
        assert "otp_code = %s" in sql
        assert "is_verified = FALSE" in sql

    @pytest.mark.asyncio
    async def test_set_pending_code_skips_verified_accounts(self) -> None:
        conn = _conn(_cursor(rowcount=0))
        repo = PostgresUserRepository(conn)
        code = PendingCode(value="654321", expires_at=datetime.now(UTC))

        assert await repo.set_pending_code(uuid4(), code) is False
        assert "is_verified = FALSE" in conn.execute.call_args.args[0]

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_domain_error(self) -> None:
        conn = MagicMock()
        conn.execute = AsyncMock(side_effect=UniqueViolation("duplicate key"))
        now = datetime.now(UTC)
        user = User(
            id=uuid4(),
            name="A",
            email="a@example.com",
            password_hash="h",
            created_at=now,
            updated_at=now,
        )
        with pytest.raises(EmailAlreadyRegistered):
            await PostgresUserRepository(conn).create(user)


class TestPostgresDocumentRepository:
    @pytest.mark.asyncio
    async def test_get_for_update_locks_and_loads_shares(self) -> None:
        doc_id, owner, bob = uuid4(), uuid4(), uuid4()
        now = datetime.now(UTC)
        doc_row = (doc_id, "T", "D", "Passport", "https://u", "k", owner, now, now)
        share_row = (doc_id, bob, "edit", now)
        conn = _conn(_cursor(one=doc_row), _cursor(many=[share_row]))

        doc = await PostgresDocumentRepository(conn).get_by_id(doc_id, for_update=True)

        assert conn.execute.call_args_list[0].args[0].endswith("FOR UPDATE")
        assert doc.content_ref.storage_key == "k"
        assert [(e.user_id, e.access_level) for e in doc.shared_with] == [
            (bob, AccessLevel.EDIT)
        ]

    @pytest.mark.asyncio
    async def test_missing_document(self) -> None:
        repo = PostgresDocumentRepository(_conn(_cursor(one=None)))
        assert await repo.get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_empty_list_skips_share_query(self) -> None:
        conn = _conn(_cursor(many=[]))
        assert await PostgresDocumentRepository(conn).list_by_owner(uuid4()) == []
        assert conn.execute.call_count == 1


class TestPostgresShareRepository:
    @pytest.mark.asyncio
    async def test_add_conflict_returns_false(self) -> None:
        conn = _conn(_cursor(one=None))
        entry = ShareEntry(user_id=uuid4(), access_level=AccessLevel.VIEW, shared_at=datetime.now(UTC))

        assert not await PostgresShareRepository(conn).add(uuid4(), entry)
        assert "ON CONFLICT (document_id, user_id) DO NOTHING" in conn.execute.call_args.args[0]

    @pytest.mark.asyncio
    async def test_update_and_remove_report_rowcount(self) -> None:
        repo = PostgresShareRepository(_conn(_cursor(rowcount=1), _cursor(rowcount=0)))
        assert await repo.update_access_level(uuid4(), uuid4(), AccessLevel.EDIT)
        assert not await repo.remove(uuid4(), uuid4())


class _FakeS3Client:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def put_object(self, **kwargs):
        if self.error:
            raise self.error
        self.calls.append(kwargs)

    async def delete_object(self, **kwargs):
        if self.error:
            raise self.error
        self.calls.append(kwargs)


def _store(client: _FakeS3Client, **kwargs) -> S3ContentStore:
    store = S3ContentStore("vault", region="eu-west-1", **kwargs)
    store._session = MagicMock()
    store._session.client.return_value = client
    return store


class TestS3ContentStore:
    @pytest.mark.asyncio
    async def test_upload_returns_ref(self) -> None:
        client = _FakeS3Client()
        ref = await _store(client).upload(b"data", "Scan.PDF", None)

        assert ref.storage_key.startswith("documents/")
        assert ref.storage_key.endswith(".pdf")
        assert ref.url == f"https://vault.s3.eu-west-1.amazonaws.com/{ref.storage_key}"
        assert client.calls[0]["ContentType"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_public_base_url(self) -> None:
        ref = await _store(_FakeS3Client(), public_base_url="https://cdn.example.com/").upload(
            b"data", "a.png", "image/png"
        )
        assert ref.url == f"https://cdn.example.com/{ref.storage_key}"

    @pytest.mark.asyncio
    async def test_client_error_is_storage_error(self) -> None:
        error = ClientError({"Error": {"Code": "500", "Message": "boom"}}, "PutObject")
        with pytest.raises(StorageError):
            await _store(_FakeS3Client(error)).upload(b"data", "a.pdf", None)
        with pytest.raises(StorageError):
            await _store(_FakeS3Client(error)).delete("documents/a.pdf")


class TestSmtpNotifier:
    def test_message_contains_code(self) -> None:
        msg = build_otp_message("from@example.com", "to@example.com", "Alice", "123456", 10)
        assert msg["To"] == "to@example.com"
        assert "123456" in msg.as_string()

    def test_html_part_escapes_name(self) -> None:
        msg = build_otp_message(
            "from@example.com", "to@example.com", "<a href=\"x\">Eve</a>", "123456", 10
        )
        plain, rich = msg.get_payload()
        body = rich.get_payload(decode=True).decode()
        assert "<a href" not in body
        assert "&lt;a href=&quot;x&quot;&gt;Eve&lt;/a&gt;" in body
        assert "<a href=\"x\">Eve</a>" in plain.get_payload(decode=True).decode()

    @pytest.mark.asyncio
    async def test_smtp_failure_is_notification_error(self, monkeypatch) -> None:
        def refuse(*args, **kwargs):
            raise ConnectionRefusedError("no server")

        monkeypatch.setattr(smtplib, "SMTP", refuse)
        with pytest.raises(NotificationError):
            await SmtpNotifier("localhost", 2525).send_otp("a@example.com", "A", "123456", 10)

    @pytest.mark.asyncio
    async def test_sends_through_smtp(self, monkeypatch) -> None:
        server = MagicMock()
        smtp = MagicMock()
        smtp.return_value.__enter__.return_value = server
        monkeypatch.setattr(smtplib, "SMTP", smtp)

        await SmtpNotifier("mail.example.com", username="u", password="p").send_otp(
            "a@example.com", "A", "123456", 10
        )

        server.starttls.assert_called_once()
        server.login.assert_called_once_with("u", "p")
        server.send_message.assert_called_once()
