"""Keyword-based category suggestions for expense descriptions.

The keyword table maps lowercase words or phrases to a ``Category``.  Longer
keywords are tried first so that a phrase such as "bus fare" wins over the
single words it contains, and every keyword must match on word boundaries so
that "pen" is never found inside "spend".
"""

from __future__ import annotations

import re
from typing import List, Mapping, Optional, Pattern, Tuple

from .models import Category
from .storage import AppDataStore


def keyword_pattern(keyword: str) -> Pattern[str]:
    """Compile a whole-word/phrase pattern for ``keyword``.

    Lookarounds are used instead of ``\\b`` so keywords that start or end
    with punctuation (``t-shirt``, ``c++``) still need a non-word neighbour.
    """
    return re.compile(r'(?<!\w)' + re.escape(keyword.strip().lower()) + r'(?!\w)')


class KeywordCategorizer:
    """Classifies free text with a keyword table, longest keyword first."""

    def __init__(self, mapping: Mapping[str, Category]):
        """Initialize the categorizer.

        Args:
            mapping: Keyword or phrase to category. Keys are lowercased;
                blank keys are ignored.
        """
        rules: List[Tuple[str, Category]] = []
        for keyword, category in mapping.items():
            cleaned = str(keyword).strip().lower()
            if cleaned:
                rules.append((cleaned, Category.parse(category)))
        # sorted() is stable: equal lengths keep table order
        rules = sorted(rules, key=lambda rule: len(rule[0]), reverse=True)
        self._rules = [(keyword, category, keyword_pattern(keyword)) for keyword, category in rules]

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def keywords(self) -> List[str]:
        """Keywords in matching order."""
        return [keyword for keyword, _, _ in self._rules]

    def match(self, text: str) -> Optional[Tuple[str, Category]]:
        """Return the winning ``(keyword, category)`` for ``text``, if any."""
        if not text or not text.strip():
            return None
        lowered = text.lower()
        for keyword, category, pattern in self._rules:
            if pattern.search(lowered):
                return keyword, category
        return None

    def classify(self, text: str) -> Category:
        """Return the best category for ``text``; ``Category.OTHER`` if none."""
        found = self.match(text)
        return found[1] if found else Category.OTHER

    def suggest(self, text: str) -> Optional[Category]:
        """Live suggestion while the user types; ``None`` for blank input."""
        if not text or not text.strip():
            return None
        return self.classify(text)


def categorize(store: AppDataStore, text: str) -> Category:
    """Classify ``text`` with the keyword table held in ``store``."""
    return KeywordCategorizer(store.load().auto_category_map).classify(text)
