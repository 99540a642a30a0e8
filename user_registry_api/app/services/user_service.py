"""
Business logic for users.

``UserService`` combines the MongoDB accessor with avatar enrichment.
It is built per request from the store and avatar client created at
startup, so it holds no state of its own.
"""

import logging
from typing import Tuple

from fastapi import Depends

from ..core.db import UserNotFoundError, UserStore, get_store, new_user_id
from ..schemas.user import UserCreate, UserRead
from .avatar_service import AvatarClient, get_avatar_client


logger = logging.getLogger(__name__)


class UserService:
    """User registration and lookup.

    Creation is a check‑then‑insert sequence without a uniqueness
    constraint.  Store errors propagate to the caller unchanged.
    """

    def __init__(self, store: UserStore, avatars: AvatarClient) -> None:
        self.store = store
        self.avatars = avatars

    def create_user(self, data: UserCreate) -> Tuple[UserRead, bool]:
        """Return the user named ``data.name``, inserting it if absent.

        The boolean is ``True`` when a new document was written.  Any
        lookup failure other than a miss is re‑raised, as is an insert
        failure.
        """
        try:
            user = self.store.find_by_name(data.name)
            created = False
        except UserNotFoundError:
            user = UserRead(id=new_user_id(), name=data.name)
            self.store.insert(user)
            logger.info("Registered user %r with id %s", user.name, user.id)
            created = True
        return self._with_image(user), created

    def find_user(self, name: str) -> UserRead:
        """Return the user named ``name``.

        A miss raises ``UserNotFoundError`` like any other store error.
        """
        return self._with_image(self.store.find_by_name(name))

    def _with_image(self, user: UserRead) -> UserRead:
        return user.model_copy(update={"image": self.avatars.fetch_image_url()})


def get_user_service(
    store: UserStore = Depends(get_store),
    avatars: AvatarClient = Depends(get_avatar_client),
) -> UserService:
    """FastAPI dependency wiring the shared store and avatar client."""
    return UserService(store, avatars)
