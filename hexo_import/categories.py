"""Tag to category classification for Hexo posts."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional, Tuple

INFRASTRUCTURE = "Infrastructure"
PROGRAMMING = "Programming"
DB = "DB"
CULTURE = "culture"
DATA_SCIENCE = "DataScience"
IOT = "IoT"

DEFAULT_CATEGORY = INFRASTRUCTURE
DEFAULT_TAG = PROGRAMMING

PROGRAMMING_LANGUAGES: FrozenSet[str] = frozenset(
    {"go", "golang", "python", "ruby", "r", "scala", "java", "c", "clang", "c++", "shell"}
)
DATABASE_TERMS: FrozenSet[str] = frozenset({"sql", "db", "rdb"})


class TagClassifier:
    """Map free-form tags onto the fixed category taxonomy."""

    def __init__(
        self,
        programming_languages: FrozenSet[str] = PROGRAMMING_LANGUAGES,
        database_terms: FrozenSet[str] = DATABASE_TERMS,
    ) -> None:
        self.programming_languages = frozenset(t.lower() for t in programming_languages)
        self.database_terms = frozenset(t.lower() for t in database_terms)

    def classify(self, tag: str) -> Optional[str]:
        """Return the category a tag names, or ``None`` if it names none."""
        key = tag.lower()
        if key == "infrastructure":
            return INFRASTRUCTURE
        if key == "programming" or key in self.programming_languages:
            return PROGRAMMING
        if key in self.database_terms:
            return DB
        if key == "culture":
            return CULTURE
        if key == "datascience":
            return DATA_SCIENCE
        if key == "iot":
            return IOT
        return None

    def categorize(self, tags: Iterable[str]) -> Tuple[str, List[str]]:
        """Pick the category for a post and return it with the remaining tags.

        A single tag gets ``Programming`` prepended first. Tags are examined in
        declaration order and the first one that names a category is consumed;
        any later matches stay in the tag list.
        """
        candidates = list(tags)
        if len(candidates) == 1:
            candidates.insert(0, DEFAULT_TAG)

        for index, tag in enumerate(candidates):
            category = self.classify(tag)
            if category is not None:
                return category, candidates[:index] + candidates[index + 1 :]
        return DEFAULT_CATEGORY, candidates
