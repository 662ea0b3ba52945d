"""Trie and static hash table used by the artifact builders."""

from .static_hashtable import StaticHashTable
from .trie import TermTrie

__all__ = ["StaticHashTable", "TermTrie"]
