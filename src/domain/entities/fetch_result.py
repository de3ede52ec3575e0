"""
Tagged outcome of a single upstream price fetch.

Fetched:      the fetcher produced a value.
Unavailable:  the fetch completed but upstream had no usable data.
FetchFailed:  the fetch (or the processing after it) raised.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Fetched(Generic[T]):
    value: T


@dataclass(frozen=True)
class Unavailable:
    reason: str


@dataclass(frozen=True)
class FetchFailed:
    cause: BaseException


FetchResult = Union[Fetched[T], Unavailable, FetchFailed]
