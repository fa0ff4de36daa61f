"""Casdoor user and group operations."""
from __future__ import annotations

import logging
from typing import List, Optional

from casdoor_sdk.models import GetUserArgs, QueryUserSet, SetPasswordArgs, User, UserGroup

from .client import CasdoorClient
from .exceptions import InvalidArgumentError
from .models import QueryResult, UserGroupQueryArgs, UserQueryArgs

logger = logging.getLogger(__name__)

# GetUserArgs field -> get-user query parameter
_USER_SELECTORS = {"user_id": "userId", "name": "id", "email": "email", "phone": "phone"}


class UserService:
    """Service for managing Casdoor users."""

    def __init__(self, client: CasdoorClient):
        """Initialize user service.

        Args:
            client: Casdoor client
        """
        self.client = client

    async def get_users(self, query_args: Optional[UserQueryArgs] = None) -> QueryResult[User]:
        """Return one page of the organization's users and the total count."""
        return await self.client.get_models(User, query_args=query_args or UserQueryArgs())

    async def get_user_count(self, is_online: QueryUserSet = QueryUserSet.ALL) -> int:
        """Count users, optionally only online or offline ones."""
        path = self.client.url_path("get-user-count", True, [("isOnline", str(is_online))])
        resp = await self.client.request("GET", path)
        return int(resp.into_data_default(int))

    async def get_user(self, args: GetUserArgs) -> Optional[User]:
        """Look up a user by exactly one of user id, name, email or phone.

        Returns:
            The user, or None if Casdoor has no match

        Raises:
            InvalidArgumentError: If zero or several selectors are set
        """
        selectors = args.selectors()
        if len(selectors) != 1:
            raise InvalidArgumentError(
                "get_user needs exactly one of user_id, name, email or phone "
                f"(got {', '.join(selectors) or 'none'})"
            )
        ((key, value),) = selectors.items()
        if key == "name":
            path = self.client.url_path("get-user", False, [("id", self.client.config.id(value))])
        else:
            path = self.client.url_path("get-user", True, [(_USER_SELECTORS[key], value)])
        resp = await self.client.request("GET", path, data_type=User)
        return resp.into_data()

    async def get_user_by_name(self, name: str) -> Optional[User]:
        return await self.get_user(GetUserArgs(name=name))

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.get_user(GetUserArgs(email=email))

    async def get_user_by_phone(self, phone: str) -> Optional[User]:
        return await self.get_user(GetUserArgs(phone=phone))

    async def get_user_by_user_id(self, user_id: str) -> Optional[User]:
        return await self.get_user(GetUserArgs(user_id=user_id))

    async def set_user_password(self, args: SetPasswordArgs) -> bool:
        """Change a user's password (form POST to ``/api/set-password``).

        ``user_owner`` defaults to the configured organization.
        """
        form = args.to_form()
        form.setdefault("userOwner", self.client.config.org_name)
        resp = await self.client.request("POST", self.client.url_path("set-password", False), form=form)
        resp.into_result()
        logger.info("Password updated for %s/%s", form["userOwner"], args.user_name)
        return True

    async def add_user(self, user: User) -> bool:
        return await self.client.add_model(user)

    async def update_user(self, user: User, columns: Optional[List[str]] = None) -> bool:
        """Update a user; ``columns`` restricts the update to those wire fields."""
        return await self.client.update_model(user, columns)

    async def delete_user(self, user: User) -> bool:
        return await self.client.delete_model(user)


class GroupService:
    """Service for reading Casdoor user groups."""

    def __init__(self, client: CasdoorClient):
        self.client = client

    async def get_groups(self, query_args: Optional[UserGroupQueryArgs] = None) -> QueryResult[UserGroup]:
        return await self.client.get_models(UserGroup, query_args=query_args or UserGroupQueryArgs())

    async def get_group(self, name: str) -> Optional[UserGroup]:
        return await self.client.get_model_by_name(UserGroup, name)
