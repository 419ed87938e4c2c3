"""Caller identity resolution."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


class IdentityResolver(Protocol):
    """Interface for resolving the calling user's identifier."""

    def resolve(
        self, headers: Mapping[str, str], query: Mapping[str, str]
    ) -> str | None:
        """Return the caller's user id, if one can be determined."""


@dataclass
class TrustedHeaderIdentity(IdentityResolver):
    """Trust a caller-supplied id from a header or query parameter.

    There is no authentication behind this; swap it for a verifying resolver
    once sessions exist.
    """

    header_name: str = "x-user-id"
    query_param: str = "userId"

    def resolve(
        self, headers: Mapping[str, str], query: Mapping[str, str]
    ) -> str | None:
        """Return the id from the header, falling back to the query string."""
        value = headers.get(self.header_name) or query.get(self.query_param)
        if value is None:
            return None
        return value.strip() or None
