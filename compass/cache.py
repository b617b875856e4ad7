"""In-memory analysis cache keyed by decision id and tree content hash."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from compass.models.tree import Decision


def hash_decision(decision: Decision) -> str:
    """MD5 over the parts of a decision that affect its analysis."""
    payload = decision.to_dict()
    canonical = json.dumps(
        {
            "factors": payload["factors"],
            "emotionalContext": payload.get("emotionalContext"),
        },
        sort_keys=True,
    )
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class CacheEntry:
    decision_id: str
    decision_hash: str
    analysis: dict[str, Any]
    recommendation: dict[str, Any]
    created_at: datetime
    expires_at: datetime
    hit_count: int = 0

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass
class AnalysisCache:
    """Stores serialized analyses so unchanged decisions skip the AI call.

    Only successful recommendations are cached; fallback responses are not.
    """

    ttl_seconds: int = 86400
    clock: Callable[[], datetime] = _utcnow
    _entries: dict[tuple[str, str], CacheEntry] = field(default_factory=dict, init=False, repr=False)

    def get(self, decision_id: str, decision_hash: str) -> Optional[CacheEntry]:
        """Return the live entry for this exact tree and count the hit."""
        self.purge_expired()
        entry = self._entries.get((decision_id, decision_hash))
        if entry is not None:
            entry.hit_count += 1
        return entry

    def latest(self, decision_id: str) -> Optional[CacheEntry]:
        """Newest live entry for a decision, regardless of tree hash."""
        self.purge_expired()
        entries = [e for e in self._entries.values() if e.decision_id == decision_id]
        return max(entries, key=lambda e: e.created_at, default=None)

    def put(
        self,
        decision_id: str,
        decision_hash: str,
        analysis: dict[str, Any],
        recommendation: dict[str, Any],
    ) -> CacheEntry:
        now = self.clock()
        entry = CacheEntry(
            decision_id=decision_id,
            decision_hash=decision_hash,
            analysis=analysis,
            recommendation=recommendation,
            created_at=now,
            expires_at=now + timedelta(seconds=self.ttl_seconds),
        )
        self._entries[(decision_id, decision_hash)] = entry
        return entry

    def clear(self, decision_id: str) -> int:
        """Drop every entry for a decision; returns how many were removed."""
        keys = [k for k in self._entries if k[0] == decision_id]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def purge_expired(self) -> int:
        now = self.clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
