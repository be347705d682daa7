"""
String inflections used to build labels, input names and class names.

Plural and singular forms come from ``inflect``; only the last
underscore-separated word of a name is inflected, so ``author_id``
becomes ``author_ids`` and ``post_tags`` becomes ``post_tag``.
"""

import re
from typing import Callable

import inflect

_engine = inflect.engine()


def _split_last_word(word: str) -> tuple[str, str]:
    head, sep, tail = word.rpartition("_")
    return head + sep, tail


def singularize(word: str) -> str:
    head, tail = _split_last_word(word)
    if not tail:
        return word
    singular = _engine.singular_noun(tail)
    return head + (singular or tail)


def pluralize(word: str) -> str:
    head, tail = _split_last_word(word)
    if not tail:
        return word
    return head + _engine.plural_noun(tail)


def humanize(word: str) -> str:
    """``author_id`` -> ``Author``, ``published_at`` -> ``Published at``."""
    text = re.sub(r"_id$", "", str(word)).replace("_", " ").strip()
    return text[:1].upper() + text[1:].lower()


def titleize(word: str) -> str:
    return " ".join(part.capitalize() for part in humanize(underscore(word)).split(" "))


def underscore(word: str) -> str:
    """``BlogPost`` -> ``blog_post``."""
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", str(word))
    text = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", text)
    return text.replace("-", "_").lower()


def camelize(word: str) -> str:
    """``blog_post`` -> ``BlogPost``."""
    return "".join(part[:1].upper() + part[1:] for part in str(word).split("_"))


LABEL_STRATEGIES: dict[str, Callable[[str], str]] = {
    "humanize": humanize,
    "titleize": titleize,
    "verbatim": str,
}


def label_strategy(name: str) -> Callable[[str], str]:
    """Return the label transform registered under ``name``."""
    try:
        return LABEL_STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown label_str_method {name!r}; expected one of {sorted(LABEL_STRATEGIES)}"
        ) from None
