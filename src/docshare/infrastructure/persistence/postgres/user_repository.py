"""PostgreSQL user repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from docshare.domain.entities import User
from docshare.domain.exceptions import EmailAlreadyRegistered
from docshare.domain.value_objects import PendingCode

_COLUMNS = (
    "id, name, email, password_hash, is_verified, otp_code, otp_expires_at, "
    "created_at, updated_at"
)


def _row_to_user(r: tuple) -> User:
    pending = PendingCode(value=r[5], expires_at=r[6]) if r[5] and r[6] else None
    return User(
        id=r[0],
        name=r[1],
        email=r[2],
        password_hash=r[3],
        is_verified=r[4],
        pending_code=pending,
        created_at=r[7],
        updated_at=r[8],
    )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s", (user_id,)
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def get_by_email(self, email: str) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE email = %s", (email,)
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]:
        """Get users by ids; missing ids are absent from the result."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = ANY(%s)", (list(user_ids),)
        )
        rows = await cur.fetchall()
        return {r[0]: _row_to_user(r) for r in rows}

    async def create(self, user: User) -> User:
        """Create user. The unique email index turns a racing duplicate into an error."""
        pending = user.pending_code
        try:
            await self._conn.execute(
                f"INSERT INTO app_user ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    user.id,
                    user.name,
                    user.email,
                    user.password_hash,
                    user.is_verified,
                    pending.value if pending else None,
                    pending.expires_at if pending else None,
                    user.created_at,
                    user.updated_at,
                ),
            )
        except UniqueViolation as e:
            raise EmailAlreadyRegistered() from e
        return user

    async def set_pending_code(self, user_id: UUID, code: PendingCode) -> bool:
        """Replace the pending code of an unverified account. False if already verified."""
        cur = await self._conn.execute(
            "UPDATE app_user SET otp_code = %s, otp_expires_at = %s, updated_at = NOW() "
            "WHERE id = %s AND is_verified = FALSE",
            (code.value, code.expires_at, user_id),
        )
        return cur.rowcount > 0

    async def consume_pending_code(self, user_id: UUID, code_value: str) -> User | None:
        """Verify and clear the code in one conditional statement."""
        cur = await self._conn.execute(
            "UPDATE app_user SET is_verified = TRUE, otp_code = NULL, otp_expires_at = NULL, "
            "updated_at = NOW() "
            "WHERE id = %s AND otp_code = %s AND is_verified = FALSE "
            f"RETURNING {_COLUMNS}",
            (user_id, code_value),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def update_name(self, user_id: UUID, name: str, updated_at: datetime) -> None:
        await self._conn.execute(
            "UPDATE app_user SET name = %s, updated_at = %s WHERE id = %s",
            (name, updated_at, user_id),
        )

    async def update_password_hash(
        self, user_id: UUID, password_hash: str, updated_at: datetime
    ) -> None:
        await self._conn.execute(
            "UPDATE app_user SET password_hash = %s, updated_at = %s WHERE id = %s",
            (password_hash, updated_at, user_id),
        )
