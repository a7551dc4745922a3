"""Best-effort English singularization of entity names.

This is a heuristic, not a full pluralizer: a few irregular words are looked
up, otherwise the first matching suffix rule is applied.
"""

import re

IRREGULAR_WORDS: dict[str, str] = {
    "children": "child",
}

SUFFIX_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"ies$"), "y"),
    (re.compile(r"es$"), ""),
    (re.compile(r"s$"), ""),
]


def singularize(word: str) -> str:
    """Return the singular form of ``word``.

    Args:
        word: Plural word, typically an entity name

    Returns:
        The singular form, or ``word`` unchanged when no rule applies
    """
    irregular = IRREGULAR_WORDS.get(word.lower())
    if irregular is not None:
        return irregular

    for pattern, replacement in SUFFIX_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)

    return word
