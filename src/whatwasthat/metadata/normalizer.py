"""Title normalization for widening TMDB search recall."""

import re
from typing import List

import structlog

logger = structlog.get_logger(__name__)

PARENTHESIZED_PATTERN = re.compile(r"\s*\([^)]*\)\s*")
DASH_SUFFIX_PATTERN = re.compile(r"\s*[—–-]\s*.*$")
TRAILING_YEAR_PATTERN = re.compile(r"\s*\(\d{4}\)\s*$")
LEADING_ARTICLE_PATTERN = re.compile(r"^the\s+", re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r"\s+")


def _strip_parentheses(title: str) -> str:
    # "Title (cast info) Sequel" -> "Title Sequel"
    return WHITESPACE_PATTERN.sub(" ", PARENTHESIZED_PATTERN.sub(" ", title)).strip()


def _strip_dash_suffix(title: str) -> str:
    return DASH_SUFFIX_PATTERN.sub("", title).strip()


def _strip_trailing_year(title: str) -> str:
    return TRAILING_YEAR_PATTERN.sub("", title).strip()


def _strip_leading_article(title: str) -> str:
    # Works on the parenthesis-free form so "The X (1999)" yields "X"
    return LEADING_ARTICLE_PATTERN.sub("", _strip_parentheses(title)).strip()


VARIANT_RULES = (
    _strip_parentheses,
    _strip_dash_suffix,
    _strip_trailing_year,
    _strip_leading_article,
)


def title_variants(raw_title: str) -> List[str]:
    """Generate ordered alternative spellings of a noisy title.

    The first element is always ``raw_title``. Each rule is applied to the
    raw title, never to another rule's output; results that are empty or
    already present are dropped, so at most five variants are returned.

    Example:
        >>> title_variants("The Matrix (1999)")
        ['The Matrix (1999)', 'The Matrix', 'Matrix']

    Args:
        raw_title: Title as guessed by the language model

    Returns:
        Ordered, de-duplicated list of search titles
    """
    variants = [raw_title]

    for rule in VARIANT_RULES:
        variant = rule(raw_title)
        if variant and variant not in variants:
            variants.append(variant)

    logger.debug("Generated title variants", title=raw_title, variants=variants)
    return variants
