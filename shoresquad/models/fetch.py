"""Outcome values returned by the bounded fetcher."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias


class FailureReason(StrEnum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    EMPTY_DATA = "empty_data"


@dataclass(frozen=True)
class FetchSuccess:
    url: str
    payload: Any
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    url: str
    reason: FailureReason
    status_code: int | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False


FetchResult: TypeAlias = FetchSuccess | FetchFailure
