# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable, Iterator
from typing import Protocol, runtime_checkable


class Field(Protocol):
    """A name-value pair representing a single HTTP header.

    Header names are case insensitive and case-variance must be treated as
    equivalent.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Append a value to a field."""
        ...

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        ...

    def as_string(self, delimiter: str = ", ") -> str:
        """Serialize the ``Field``'s values into a single line string."""
        ...

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        ...


class Fields(Protocol):
    """Case-insensitive collection of header fields keyed by name."""

    def set_field(self, field: Field) -> None:
        """Set entry using ``field.name`` as the key."""
        ...

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        ...

    def __contains__(self, name: str) -> bool: ...

    def __iter__(self) -> Iterator[Field]:
        """Allow iteration over entries."""
        ...

    def __len__(self) -> int:
        """Get total number of Field entries."""
        ...


class QueryParameters(Protocol):
    """Ordered, case-sensitive, multi-valued mapping of query parameters.

    Unlike header fields, ``Signature`` and ``signature`` are distinct names.
    """

    def set(self, name: str, value: str) -> None:
        """Replace every value of ``name`` with ``value``."""
        ...

    def add(self, name: str, value: str) -> None:
        """Append ``value`` to the values of ``name``."""
        ...

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get the first value of ``name``."""
        ...

    def get_all(self, name: str) -> list[str]:
        """Get every value of ``name`` in insertion order."""
        ...

    def encoded_pairs(self) -> list[str]:
        """Form-encode each value as a ``key=value`` string, keys in sorted order."""
        ...

    def encode(self) -> str:
        """Form-encode the collection into a query string."""
        ...


@runtime_checkable
class URI(Protocol):
    """Universal Resource Identifier, target location for a :py:class:`Request`."""

    scheme: str
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``sqs.us-east-1.amazonaws.com``."""

    port: int | None
    """An explicit port number."""

    path: str | None
    """Path component of the URI."""

    query: str | None
    """Query component of the URI as string."""

    def build(self) -> str:
        """Construct URI string representation."""
        ...

    @property
    def authority(self) -> str:
        """The host, followed by ``:{port}`` when a port is set."""
        ...


class Request(Protocol):
    """Protocol-agnostic representation of a request."""

    destination: URI
    method: str
    body: AsyncIterable[bytes] | Iterable[bytes] | None


class Response(Protocol):
    """An HTTP response with its body already read into memory."""

    status: int
    fields: Fields
    body: bytes
    reason: str | None
