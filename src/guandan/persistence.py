"""
Match progress serialization for saving and restoring between sessions.

The engine keeps no files itself. Callers that want partnership levels and
the next leader to survive a restart export a ``MatchRecord`` to a
JSON-compatible dict (or string) and import it later.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from .match import MatchRecord
from .scoring import HandResult

SCHEMA_VERSION = 1


def _hand_to_dict(result: HandResult) -> Dict[str, Any]:
    return {
        "finishing_order": list(result.finishing_order),
        "leader_finisher": result.leader_finisher,
        "winning_partnership": result.winning_partnership,
        "partner_place": result.partner_place,
        "increment": result.increment,
        "levels_before": list(result.levels_before),
        "levels_after": list(result.levels_after),
        "failed_top_rank": result.failed_top_rank,
        "cleared_top_rank": result.cleared_top_rank,
    }


def _hand_from_dict(d: Dict[str, Any]) -> HandResult:
    before = d["levels_before"]
    after = d["levels_after"]
    return HandResult(
        finishing_order=tuple(int(s) for s in d["finishing_order"]),
        leader_finisher=int(d["leader_finisher"]),
        winning_partnership=int(d["winning_partnership"]),
        partner_place=int(d["partner_place"]),
        increment=int(d["increment"]),
        levels_before=(int(before[0]), int(before[1])),
        levels_after=(int(after[0]), int(after[1])),
        failed_top_rank=bool(d.get("failed_top_rank", False)),
        cleared_top_rank=bool(d.get("cleared_top_rank", False)),
    )


def match_to_dict(
    record: MatchRecord,
    *,
    metadata: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """
    Serialize a MatchRecord to a JSON-compatible dict.

    Args:
        record: The match to serialize.
        metadata: Optional extra metadata (e.g. player names, config snapshot).

    Returns:
        Dict with schema_version, exported_at, levels, next_leader, champion,
        hands and optional metadata.
    """
    result: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "levels": list(record.levels),
        "next_leader": record.next_leader,
        "champion": record.champion,
        "hands": [_hand_to_dict(h) for h in record.hands],
    }
    if metadata:
        result["metadata"] = metadata
    return result


def match_from_dict(d: Dict[str, Any]) -> MatchRecord:
    """
    Deserialize a MatchRecord from a dict produced by match_to_dict.

    Raises ValueError for a newer schema version than this code understands.
    """
    version = int(d.get("schema_version", SCHEMA_VERSION))
    if version > SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {version}")
    levels = d.get("levels", [2, 2])
    champion = d.get("champion")
    return MatchRecord(
        hands=[_hand_from_dict(h) for h in d.get("hands", [])],
        levels=(int(levels[0]), int(levels[1])),
        next_leader=int(d.get("next_leader", 0)),
        champion=int(champion) if champion is not None else None,
    )


def match_to_json(
    record: MatchRecord,
    *,
    metadata: Dict[str, Any] | None = None,
) -> str:
    """Serialize a MatchRecord to a JSON string."""
    return json.dumps(match_to_dict(record, metadata=metadata), indent=2)


def match_from_json(s: str) -> MatchRecord:
    """Deserialize a MatchRecord from a JSON string."""
    return match_from_dict(json.loads(s))


__all__ = [
    "match_to_dict",
    "match_from_dict",
    "match_to_json",
    "match_from_json",
    "SCHEMA_VERSION",
]
