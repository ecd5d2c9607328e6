# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable


class Field(Protocol):
    """A name-value pair representing a single header of a request.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names may be normalized but should be preserved for accuracy during
    transmission.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Append a value to a field."""
        ...

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        ...

    def as_string(self, delimiter: str = ",") -> str:
        """Serialize the ``Field``'s values into a single line string."""
        ...


class Fields(Protocol):
    """Case-insensitive, insertion ordered mapping of request header fields."""

    # Entries are keyed off the normalized name of a provided Field
    entries: OrderedDict[str, Field]

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        ...

    def __setitem__(self, name: str, field: Field) -> None:
        """Set entry for a Field name."""
        ...

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        ...

    def __delitem__(self, name: str) -> None:
        """Delete entry from collection."""
        ...

    def __contains__(self, name: str) -> bool:
        """Whether a field with the normalized ``name`` exists."""
        ...

    def __iter__(self) -> Iterator[Field]:
        """Allow iteration over entries."""
        ...

    def __len__(self) -> int:
        """Get total number of Field entries."""
        ...


class Request(Protocol):
    """Representation of an outbound request that can be signed."""

    method: str
    destination: URI
    fields: Fields
    body: Iterable[bytes] | None


@runtime_checkable
class URI(Protocol):
    """Universal Resource Identifier, target location for a :py:class:`Request`."""

    scheme: str
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``johnsmith.s3.amazonaws.com``.

    May be empty when only the :py:attr:`opaque` form has been populated.
    """

    port: int | None
    """An explicit port number."""

    path: str | None
    """Path component of the URI, kept in its raw (percent-encoded) form."""

    query: str | None
    """Raw query component of the URI as string."""

    opaque: str | None
    """Unparsed form of the target, for example ``//bucket.s3.amazonaws.com/key``.

    Consulted only when the structured host or path is missing.
    """

    def build(self) -> str:
        """Construct URI string representation."""
        ...

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``"""
        ...
