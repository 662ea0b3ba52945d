from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import GramIOError

TERM_TRIE_SCHEMA_VERSION = "term_trie.v1"


@dataclass
class TermTrie:
    """Character trie mapping strings to integer values.

    Representation:
      - trie_next[state][char] -> next_state
      - values[state] -> value stored for the string ending at this state, or None

    State 0 is the root. Serialization keeps insertion order so the same
    sequence of puts always produces the same bytes.
    """

    trie_next: List[Dict[str, int]] = field(default_factory=lambda: [{}])
    values: List[Optional[int]] = field(default_factory=lambda: [None])
    size: int = 0

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: str) -> bool:
        return self._find(key) is not None

    def _find(self, key: str) -> Optional[int]:
        state = 0
        for ch in key:
            nxt = self.trie_next[state].get(ch)
            if nxt is None:
                return None
            state = nxt
        return self.values[state]

    def put(self, key: str, value: int) -> None:
        """Insert `key`, replacing any value already stored for it."""
        state = 0
        for ch in key:
            nxt = self.trie_next[state].get(ch)
            if nxt is None:
                nxt = len(self.trie_next)
                self.trie_next[state][ch] = nxt
                self.trie_next.append({})
                self.values.append(None)
            state = nxt
        if self.values[state] is None:
            self.size += 1
        self.values[state] = int(value)

    def get(self, key: str, default: int = -1) -> int:
        found = self._find(key)
        return default if found is None else found

    def items(self) -> Iterator[Tuple[str, int]]:
        """Yield (key, value) pairs in ascending key order."""
        stack: List[Tuple[int, str]] = [(0, "")]
        while stack:
            state, prefix = stack.pop()
            value = self.values[state]
            if value is not None:
                yield prefix, value
            for ch in sorted(self.trie_next[state], reverse=True):
                stack.append((self.trie_next[state][ch], prefix + ch))

    def to_bytes(self) -> bytes:
        payload = {
            "schema_version": TERM_TRIE_SCHEMA_VERSION,
            "size": self.size,
            "trie_next": self.trie_next,
            "values": self.values,
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    @staticmethod
    def from_bytes(data: bytes) -> "TermTrie":
        obj = json.loads(data.decode("utf-8"))
        schema = obj.get("schema_version")
        if schema != TERM_TRIE_SCHEMA_VERSION:
            raise ValueError(f"Unsupported term trie schema: {schema!r}")
        trie_next = [{str(k): int(v) for k, v in d.items()} for d in obj["trie_next"]]
        values = [None if v is None else int(v) for v in obj["values"]]
        if len(trie_next) != len(values):
            raise ValueError("Term trie state tables differ in length.")
        return TermTrie(trie_next=trie_next, values=values, size=int(obj["size"]))

    def save(self, path: str | Path) -> None:
        from ..artifacts.writer import write_artifact

        write_artifact(path, self.to_bytes())

    @staticmethod
    def load(path: str | Path) -> "TermTrie":
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise GramIOError(f"Unable to read term index ({exc.strerror})", path) from exc
        try:
            return TermTrie.from_bytes(data)
        except (ValueError, KeyError, TypeError) as exc:
            raise GramIOError(f"Corrupt term index ({exc})", path) from exc
