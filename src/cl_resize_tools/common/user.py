from typing import Protocol


class UserLike(Protocol):
    """Anything returned by the host application's auth dependency."""

    id: str | None
