# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import OrderedDict
from collections.abc import AsyncIterable, Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass, field
from functools import cached_property
from typing import TypedDict
from urllib.parse import parse_qsl, quote, quote_plus, unquote, urlparse, urlunparse

import aws_sigv2.interfaces.http as interfaces_http


class Field(interfaces_http.Field):
    """A name-value pair representing a single HTTP header."""

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_string(self, delimiter: str = ", ") -> str:
        return delimiter.join(self.values)

    def as_tuples(self) -> list[tuple[str, str]]:
        return [(self.name, val) for val in self.values]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, values={self.values!r})"


class Fields(interfaces_http.Fields):
    def __init__(self, initial: Iterable[interfaces_http.Field] | None = None):
        """Collection of header entries mapped by lowercased name.

        :param initial: Initial list of ``Field`` objects. Later entries with the same
        normalized name replace earlier ones.
        """
        self.entries: OrderedDict[str, interfaces_http.Field] = OrderedDict()
        for fld in initial or ():
            self.set_field(fld)

    def set_field(self, field: interfaces_http.Field) -> None:
        self.entries[field.name.lower()] = field

    def get(
        self, key: str, default: interfaces_http.Field | None = None
    ) -> interfaces_http.Field | None:
        return self.entries.get(key.lower(), default)

    def __getitem__(self, name: str) -> interfaces_http.Field:
        return self.entries[name.lower()]

    def __delitem__(self, name: str) -> None:
        del self.entries[name.lower()]

    def __contains__(self, name: str) -> bool:
        return name.lower() in self.entries

    def __iter__(self) -> Iterator[interfaces_http.Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"Fields({self.entries})"


def tuples_to_fields(tuples: Iterable[tuple[str, str]]) -> Fields:
    """Build a :py:class:`Fields` from ``(name, value)`` pairs, merging repeats."""
    fields = Fields()
    for name, value in tuples:
        if name in fields:
            fields[name].add(value)
        else:
            fields.set_field(Field(name=name, values=[value]))
    return fields


class QueryParameters(interfaces_http.QueryParameters):
    """Ordered, case-sensitive, multi-valued query parameter collection.

    Encoding follows standard form-encoding: every character other than
    ``A-Za-z0-9-_.~`` is percent-encoded and spaces become ``+``.
    """

    def __init__(
        self, initial: Iterable[tuple[str, str]] | dict[str, str] | None = None
    ) -> None:
        self.entries: dict[str, list[str]] = {}
        if isinstance(initial, dict):
            initial = initial.items()
        for name, value in initial or ():
            self.add(name, value)

    @classmethod
    def from_query(cls, query: str | None) -> QueryParameters:
        """Parse a raw query string, keeping blank values."""
        if not query:
            return cls()
        return cls(parse_qsl(query, keep_blank_values=True))

    def set(self, name: str, value: str) -> None:
        self.entries[name] = [value]

    def add(self, name: str, value: str) -> None:
        self.entries.setdefault(name, []).append(value)

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self.entries.get(name)
        return values[0] if values else default

    def get_all(self, name: str) -> list[str]:
        return list(self.entries.get(name, []))

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield ``(name, value)`` for every value, in insertion order."""
        for name, values in self.entries.items():
            for value in values:
                yield name, value

    def encoded_pairs(self) -> list[str]:
        pairs: list[str] = []
        for name in sorted(self.entries):
            key = quote_plus(name, safe="")
            pairs.extend(
                f"{key}={quote_plus(value, safe='')}" for value in self.entries[name]
            )
        return pairs

    def encode(self) -> str:
        return "&".join(self.encoded_pairs())

    def __getitem__(self, name: str) -> str:
        values = self.entries[name]
        if not values:
            raise KeyError(name)
        return values[0]

    def __delitem__(self, name: str) -> None:
        del self.entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParameters):
            return False
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"QueryParameters({self.entries!r})"


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Universal Resource Identifier, target location for an :py:class:`AWSRequest`."""

    scheme: str = "https"
    """For example ``http`` or ``https``."""

    username: str | None = None
    """Username part of the userinfo URI component."""

    password: str | None = None
    """Password part of the userinfo URI component."""

    host: str
    """The hostname, for example ``sqs.us-east-1.amazonaws.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI, unescaped."""

    query: str | None = None
    """Query component of the URI as string."""

    fragment: str | None = None
    """Part of the URI specification, but may not be transmitted by a client."""

    @classmethod
    def from_url(cls, url: str) -> URI:
        """Split an absolute URL into its components."""
        parts = urlparse(url)
        if not parts.hostname:
            raise ValueError(f"URL has no host: {url!r}")
        return cls(
            scheme=parts.scheme or "https",
            username=parts.username,
            password=parts.password,
            host=parts.hostname,
            port=parts.port,
            path=unquote(parts.path) or None,
            query=parts.query or None,
            fragment=parts.fragment or None,
        )

    @property
    def authority(self) -> str:
        """The host, followed by ``:{port}`` when an explicit port is set.

        This is the host component of the SigV2 string to sign. IPv6 literals are
        enclosed in brackets.
        """
        host = self.host
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        if self.port is None:
            return host
        return f"{host}:{self.port}"

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{username}:{password}@{host}:{port}``

        ``username``, ``password``, and ``port`` are only included if set. ``password``
        is ignored, unless ``username`` is also set.
        """
        return self._netloc

    # cached_property allows setting, so keep it behind a read-only property.
    @cached_property
    def _netloc(self) -> str:
        if self.username is not None:
            password = "" if self.password is None else f":{self.password}"
            userinfo = f"{self.username}{password}@"
        else:
            userinfo = ""
        return f"{userinfo}{self.authority}"

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form
        ``{scheme}://{username}:{password}@{host}:{port}{path}?{query}#{fragment}``
        """
        components = (
            self.scheme,
            self.netloc,
            quote(self.path or "", safe="/"),
            "",  # params
            self.query,
            self.fragment,
        )
        return urlunparse(components)

    def to_dict(self) -> URIParameters:
        return {
            "scheme": self.scheme,
            "host": self.host,
            "port": self.port,
            "path": self.path,
            "query": self.query,
            "username": self.username,
            "password": self.password,
            "fragment": self.fragment,
        }


class URIParameters(TypedDict):
    """The keyword arguments accepted by :py:class:`URI`.

    Kept in sync with ``URI.to_dict``.
    """

    scheme: str
    username: str | None
    password: str | None
    host: str
    port: int | None
    path: str | None
    query: str | None
    fragment: str | None


class AWSRequest(interfaces_http.Request):
    def __init__(
        self,
        *,
        destination: URI,
        method: str = "GET",
        body: AsyncIterable[bytes] | Iterable[bytes] | None = None,
        fields: Fields | None = None,
    ):
        self.destination = destination
        self.method = method
        self.body = body
        self.fields = fields if fields is not None else Fields()

    @property
    def query_params(self) -> QueryParameters:
        """A freshly parsed copy of the destination's query parameters."""
        return QueryParameters.from_query(self.destination.query)

    def with_query_params(self, params: QueryParameters) -> None:
        """Replace the destination's query with the encoded ``params``."""
        uri_dict = self.destination.to_dict()
        uri_dict["query"] = params.encode() or None
        self.destination = URI(**uri_dict)

    def __deepcopy__(self, memo: dict[int, AWSRequest] | None = None) -> AWSRequest:
        if memo is None:
            memo = {}

        if id(self) in memo:
            return memo[id(self)]

        # the destination is immutable and the body may be an iterator
        new_instance = self.__class__(
            destination=self.destination,
            body=self.body,
            method=self.method,
            fields=deepcopy(self.fields, memo),
        )
        memo[id(self)] = new_instance
        return new_instance

    def __repr__(self) -> str:
        return f"AWSRequest(method={self.method!r}, destination={self.destination!r})"


@dataclass(kw_only=True)
class HTTPResponse(interfaces_http.Response):
    """An HTTP response whose body has been fully read."""

    status: int
    fields: Fields = field(default_factory=Fields)
    body: bytes = b""
    reason: str | None = None
