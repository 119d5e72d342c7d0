"""User Store — SQLAlchemy implementation of UserStore.

Invariants:
    - Returned UserRecord never carries the password hash
    - Handle/email uniqueness violations surface as ConflictError, not IntegrityError
    - search is case-insensitive on name and handle, with LIKE wildcards escaped
"""

import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialgraph.core.domain_types import Credentials, UserId, UserRecord
from socialgraph.core.errors import ConflictError, ResourceNotFoundError
from socialgraph.models import User

logger = logging.getLogger(__name__)

_DUPLICATE_MESSAGE = "Handle or email already in use"


def to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=UserId(user.id),
        name=user.name,
        handle=user.handle,
        email=user.email,
        created_at=user.created_at,
    )


class SqlUserStore:
    """Users table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Credentials | None:
        row = (await self.db.execute(
            select(User.id, User.password_hash).where(User.email == email),
        )).one_or_none()
        if row is None:
            return None
        return Credentials(user_id=UserId(row.id), password_hash=row.password_hash)

    async def find_by_id(self, user_id: UserId) -> UserRecord:
        return to_user_record(await self._get_or_404(user_id))

    async def search(self, name_or_handle: str) -> list[UserRecord]:
        term = name_or_handle.strip()
        query = select(User).order_by(User.id)
        if term:
            query = query.where(or_(
                User.name.icontains(term, autoescape=True),
                User.handle.icontains(term, autoescape=True),
            ))
        result = await self.db.execute(query)
        return [to_user_record(u) for u in result.scalars().all()]

    async def create(
        self, name: str, handle: str, email: str, password_hash: str,
    ) -> UserRecord:
        user = User(
            name=name, handle=handle, email=email, password_hash=password_hash,
        )
        self.db.add(user)
        await self._commit_unique()
        return to_user_record(user)

    async def update(
        self, user_id: UserId, name: str, handle: str, email: str,
    ) -> UserRecord:
        user = await self._get_or_404(user_id)
        user.name = name
        user.handle = handle
        user.email = email
        await self._commit_unique()
        return to_user_record(user)

    async def delete(self, user_id: UserId) -> None:
        result = await self.db.execute(
            delete(User).where(User.id == user_id)
            .execution_options(synchronize_session=False),
        )
        if not result.rowcount:
            raise ResourceNotFoundError("User", str(user_id))
        await self.db.commit()

    async def find_password_hash(self, user_id: UserId) -> str:
        password_hash = await self.db.scalar(
            select(User.password_hash).where(User.id == user_id),
        )
        if password_hash is None:
            raise ResourceNotFoundError("User", str(user_id))
        return password_hash

    async def update_password_hash(
        self, user_id: UserId, password_hash: str,
    ) -> None:
        user = await self._get_or_404(user_id)
        user.password_hash = password_hash
        await self.db.commit()

    async def handles_for(self, user_ids: set[UserId]) -> dict[UserId, str]:
        if not user_ids:
            return {}
        result = await self.db.execute(
            select(User.id, User.handle).where(User.id.in_(user_ids)),
        )
        return {UserId(row.id): row.handle for row in result}

    async def _get_or_404(self, user_id: UserId) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def _commit_unique(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(f"Unique constraint rejected user write: {e.orig!r}")
            raise ConflictError(_DUPLICATE_MESSAGE)
