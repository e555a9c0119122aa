"""
Suggestion provider contract and session snapshot.
"""

from tagformula.suggestions.provider import (
    JsonFileSuggestionProvider,
    SnapshotState,
    StaticSuggestionProvider,
    SuggestionProvider,
    SuggestionSnapshot,
    find_by_name,
    parse_suggestions,
)

__all__ = [
    "SuggestionProvider",
    "StaticSuggestionProvider",
    "JsonFileSuggestionProvider",
    "SuggestionSnapshot",
    "SnapshotState",
    "find_by_name",
    "parse_suggestions",
]
