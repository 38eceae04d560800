"""Inverted index and distinct-term search over food profiles."""

import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from foundation_foods.domain.foods import FoodProfile

NAME_HEAD_REPEAT = 4
SEARCH_FIELDS = ("code", "name", "category")

STOP_WORDS = frozenset(
    """
    a able about across after all almost also am among an and any are as at
    be because been but by can cannot could dear did do does either else ever
    every for from get got had has have he her hers him his how however i if
    in into is it its just least let like likely may me might most must my
    neither no nor not of off often on only or other our own rather said say
    says she should since so some than that the their them then there these
    they this tis to too twas us wants was we were what when where which
    while who whom why will with would yet you your
    """.split()
)

_SEPARATOR = re.compile(r"[\s\-]+")
_EDGE = re.compile(r"^\W+|\W+$")
_NON_WORD = re.compile(r"\W")


def tokenize(text: str) -> list[str]:
    """Split text into lower-case index terms."""
    tokens = []
    for chunk in _SEPARATOR.split(text.lower()):
        token = _EDGE.sub("", chunk)
        if token and token not in STOP_WORDS:
            tokens.append(token)
    return tokens


def boost_name(name: str) -> str:
    """Repeat the leading comma-delimited segment of a food name."""
    comma = name.find(",")
    if comma < 0:
        return name
    head = name[: comma + 1]
    return " ".join([head] * NAME_HEAD_REPEAT) + " " + name


def sanitize_query(query: str) -> str:
    """Replace non-word characters with spaces."""
    return _NON_WORD.sub(" ", query)


@dataclass(frozen=True)
class SearchIndex:
    """Read-only inverted index over the code, name and category of foods."""

    corpus: dict[str, FoodProfile]
    postings: dict[str, dict[str, int]]

    def term_frequency(self, term: str, code: str) -> int:
        """Return how often a term occurs in a food's indexed fields."""
        return self.postings.get(term, {}).get(code, 0)


def _document_terms(profile: FoodProfile) -> Counter[str]:
    terms: Counter[str] = Counter()
    terms[profile.code.lower()] += 1
    terms.update(tokenize(boost_name(profile.name)))
    terms.update(tokenize(profile.category))
    return terms


def build_index(profiles: Iterable[FoodProfile]) -> SearchIndex:
    """Index each profile's code, boosted name and category."""
    corpus: dict[str, FoodProfile] = {}
    postings: dict[str, dict[str, int]] = {}
    for profile in profiles:
        corpus[profile.code] = profile
        for term, count in _document_terms(profile).items():
            postings.setdefault(term, {})[profile.code] = count
    return SearchIndex(corpus=corpus, postings=postings)


def search(index: SearchIndex | None, query: str) -> list[FoodProfile]:
    """Return every food tied for the most distinct matched query terms."""
    if index is None:
        return []
    terms = set(tokenize(sanitize_query(query)))
    matched: Counter[str] = Counter()
    for term in terms:
        matched.update(index.postings.get(term, {}).keys())
    if not matched:
        return []
    best = max(matched.values())
    return [
        profile
        for code, profile in index.corpus.items()
        if matched.get(code) == best
    ]
