"""Domain filter configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tunnelsync.domain.types import DomainFilter

from .env import split_env_list

if TYPE_CHECKING:
    from collections.abc import Sequence


def get_domain_filter(
    *,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> DomainFilter:
    """Build the domain filter from explicit values or the environment.

    Explicit values win over ``TUNNELSYNC_DOMAIN_FILTER`` and
    ``TUNNELSYNC_EXCLUDE_DOMAINS``.
    """

    return DomainFilter(
        include=tuple(include) if include else split_env_list("TUNNELSYNC_DOMAIN_FILTER"),
        exclude=tuple(exclude) if exclude else split_env_list("TUNNELSYNC_EXCLUDE_DOMAINS"),
    )
