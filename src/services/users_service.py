"""
Users service - business logic for user management
"""

import logging
from typing import Dict, Any, Optional

from services.base_service import BaseService, ServiceResult
from services.user_store import UserStore

logger = logging.getLogger(__name__)

class UsersService(BaseService):
    """Service for user management operations"""

    def __init__(self, store: UserStore):
        super().__init__("users")
        self.store = store

    async def list_users(self) -> ServiceResult:
        """
        Get every persisted user

        Returns:
            ServiceResult with users in creation order
        """
        return await self._many("List", self.store.list_users())

    async def get_user_by_id(self, user_id: str) -> ServiceResult:
        """
        Get a user by its ID

        Args:
            user_id: UUID of the user (malformed ids are treated as unknown)

        Returns:
            ServiceResult with user data
        """
        return await self._one("Read", self.store.get_user(user_id), user_id)

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        description: Optional[str] = None
    ) -> ServiceResult:
        """
        Create a new user

        Args:
            name: Display name of the user
            email: Email address of the user
            password: Password, stored as provided
            description: Free-form description (optional)

        Returns:
            ServiceResult with created user data
        """
        user_data = {
            "name": name,
            "email": email,
            "password": password,
            "description": description
        }

        logger.info(f"Creating new user: {email}")
        return await self._one("Create", self.store.create_user(user_data))

    async def update_user(self, user_id: str, updates: Dict[str, Any]) -> ServiceResult:
        """
        Merge the supplied fields into an existing user

        Args:
            user_id: UUID of the user
            updates: Field values to change

        Returns:
            ServiceResult with updated user data
        """
        logger.info(f"Updating user {user_id} fields: {sorted(updates)}")
        return await self._one("Update", self.store.update_user(user_id, updates), user_id)

    async def delete_user(self, user_id: str) -> ServiceResult:
        """
        Delete a user

        Args:
            user_id: UUID of the user

        Returns:
            ServiceResult with the user as it was before deletion
        """
        logger.info(f"Deleting user {user_id}")
        return await self._one("Delete", self.store.delete_user(user_id), user_id)

    async def ping(self) -> bool:
        return await self.store.ping()
