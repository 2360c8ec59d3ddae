"""User repository for database operations."""

from uuid import UUID

from sqlalchemy import Text, Update, func, literal, select, update

from blogapp.errors.database import RecordNotFoundError
from blogapp.models import UserDB
from blogapp.repositories.base import BaseRepository
from blogapp.utils.helpers import utc_now


class UserRepository(BaseRepository[UserDB]):
    """Repository for User entities and their owned-blog lists."""

    model = UserDB

    async def create(self, name: str, email: str, password_hash: str) -> UserDB:
        """
        Create a new user with an empty blog list.

        Args:
            name: Display name
            email: Normalized email address
            password_hash: Hashed password

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If the email is already registered
        """
        user = UserDB(name=name, email=email, password_hash=password_hash, blog_ids=[])
        return await self._add_and_refresh(user)

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Normalized email address

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(UserDB.email == email),
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[UserDB]:
        """
        Get every user, oldest first.

        Returns:
            list[UserDB]: All users
        """
        result = await self.session.execute(select(UserDB).order_by(UserDB.created_at))
        return list(result.scalars().all())

    async def add_blog(self, user_id: UUID, blog_id: UUID) -> None:
        """
        Append a blog ID to the user's blog list.

        The list is updated in SQL so concurrent posts by one user are not lost.

        Args:
            user_id: Owner UUID
            blog_id: New blog UUID

        Raises:
            RecordNotFoundError: If the user no longer exists
        """
        entry = func.jsonb_build_array(literal(str(blog_id), Text))
        statement = (
            update(UserDB)
            .where(UserDB.id == user_id)
            .values(
                blog_ids=UserDB.blog_ids.op("||")(entry),
                updated_at=utc_now(),
            )
            .returning(UserDB.id)
            .execution_options(synchronize_session=False)
        )
        await self._update_owner(statement, user_id)

    async def remove_blog(self, user_id: UUID, blog_id: UUID) -> None:
        """
        Remove a blog ID from the user's blog list.

        Args:
            user_id: Owner UUID
            blog_id: Deleted blog UUID

        Raises:
            RecordNotFoundError: If the user no longer exists
        """
        statement = (
            update(UserDB)
            .where(UserDB.id == user_id)
            .values(
                blog_ids=UserDB.blog_ids.op("-")(literal(str(blog_id), Text)),
                updated_at=utc_now(),
            )
            .returning(UserDB.id)
            .execution_options(synchronize_session=False)
        )
        await self._update_owner(statement, user_id)

    async def _update_owner(self, statement: Update, user_id: UUID) -> None:
        result = await self.session.execute(statement)
        if result.scalar_one_or_none() is None:
            raise RecordNotFoundError(detail=f"User {user_id} not found")

    async def update_password_hash(self, user: UserDB, password_hash: str) -> UserDB:
        """
        Store a re-hashed password for a user.

        Args:
            user: Loaded user entity
            password_hash: New hash

        Returns:
            UserDB: Updated user
        """
        user.password_hash = password_hash
        user.updated_at = utc_now()
        return await self._add_and_refresh(user)
