"""Splitting the global post list into the "all" and "following" views."""

from dataclasses import dataclass
from typing import Generic, Iterable, Protocol, Sequence, TypeVar


class Authored(Protocol):
    user_id: str


P = TypeVar("P", bound=Authored)


@dataclass(frozen=True)
class FeedViews(Generic[P]):
    all: list[P]
    following: list[P]


def following_view(posts: Sequence[P], following_ids: Iterable[str]) -> list[P]:
    """Posts whose author is followed, in the order given."""
    followed = set(following_ids)
    return [p for p in posts if p.user_id in followed]


def partition(posts: Sequence[P], following_ids: Iterable[str]) -> FeedViews[P]:
    return FeedViews(all=list(posts), following=following_view(posts, following_ids))
