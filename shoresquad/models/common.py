"""Common types and helpers shared across models."""

from enum import StrEnum


class FeedName(StrEnum):
    MULTI_DAY = "multiday"
    CURRENT = "current"


def cache_key_for(feed: FeedName) -> str:
    return f"forecast:{feed.value}"
