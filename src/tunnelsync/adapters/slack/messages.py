"""Render change batches as Slack message payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tunnelsync.domain.types import ChangeBatch

SUCCESS_BANNER: Final[str] = "*DNS Configured Successfully!*"
FAILURE_BANNER: Final[str] = "*DNS Configuration Failed.*"
SUCCESS_COLOR: Final[str] = "#36D399"
FAILURE_COLOR: Final[str] = "#a30200"


def change_lines(batch: ChangeBatch) -> list[str]:
    """Return one ``Create:``/``Delete:`` line per affected target.

    Updates are paired with the ``update_old`` record of the same name and
    reported as the targets added and removed between the two.
    """

    lines: list[str] = []
    for record in batch.create:
        lines.extend(_lines("Create", record.name, record.targets))

    previous = {record.name: record for record in batch.update_old}
    for desired in batch.update_new:
        current = previous.get(desired.name)
        current_targets = current.targets if current is not None else ()
        added = [t for t in _unique(desired.targets) if t not in current_targets]
        removed = [t for t in _unique(current_targets) if t not in desired.targets]
        lines.extend(_lines("Create", desired.name, added))
        lines.extend(_lines("Delete", desired.name, removed))

    for record in batch.delete:
        lines.extend(_lines("Delete", record.name, record.targets))
    return lines


def build_message(
    batch: ChangeBatch,
    *,
    channel: str,
    owner: str,
    succeeded: bool,
) -> dict[str, Any]:
    """Build the ``chat.postMessage`` body for ``batch``."""

    banner = SUCCESS_BANNER if succeeded else FAILURE_BANNER
    blocks: list[dict[str, Any]] = [_section(banner)]
    lines = change_lines(batch)
    if lines:
        blocks.append(_section("\n".join(lines)))
    blocks.append(_owner_block(owner))
    return {
        "channel": channel,
        "text": banner,
        "attachments": [
            {
                "color": SUCCESS_COLOR if succeeded else FAILURE_COLOR,
                "blocks": blocks,
            }
        ],
    }


def escape_mrkdwn(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _lines(action: str, name: str, targets: Iterable[str]) -> list[str]:
    return [f"{action}: {escape_mrkdwn(name)} -> {escape_mrkdwn(target)}" for target in targets]


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _section(text: str) -> dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _owner_block(owner: str) -> dict[str, Any]:
    return {
        "type": "rich_text",
        "block_id": "Owner",
        "elements": [
            {
                "type": "rich_text_section",
                "elements": [
                    {"type": "text", "text": "Owner", "style": {"bold": True}},
                    {"type": "text", "text": f": {owner}"},
                ],
            }
        ],
    }
