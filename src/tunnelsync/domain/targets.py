"""Extract a routable host from a tunnel service descriptor."""

from __future__ import annotations

import re
from typing import Final

from .errors import TargetExtractionError

# Dotted alphanumeric labels, or the bare ``localhost`` token.
TARGET_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?:[a-zA-Z0-9]+\.)+[a-zA-Z0-9]+|localhost")


def extract_target(service: str) -> str:
    """Return the first hostname or IPv4 token found in ``service``.

    ``https://foo.bar.com:443`` yields ``foo.bar.com`` and ``tcp://localhost:22``
    yields ``localhost``. When several hosts are embedded the leftmost wins.
    Raises :class:`TargetExtractionError` when the descriptor holds no host.
    """

    match = TARGET_PATTERN.search(service)
    if match is None:
        raise TargetExtractionError(service)
    return match.group(0)
