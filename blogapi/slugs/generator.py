"""
Slug generation for posts.

``generate_slug`` turns a title into a URL-safe token. ``ensure_unique``
and ``ensure_unique_async`` probe ``base``, ``base-1``, ``base-2``, ...
until the caller's ``exists`` check reports a free candidate. The probe
is best effort: the unique index on ``posts.slug`` is what guarantees
uniqueness, and callers retry the insert when it reports a conflict.
"""

import re
from typing import Awaitable, Callable, Iterator

from blogapi.errors.exceptions import SlugGenerationExhausted, SlugValidationFailed
from blogapi.logging import get_logger

logger = get_logger(__name__)

MAX_ATTEMPTS = 1000
FALLBACK_SLUG = "post"

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_SUBSTITUTIONS = {
    "á": "a",
    "é": "e",
    "í": "i",
    "ó": "o",
    "ú": "u",
    "ñ": "n",
    "ü": "u",
    "&": "and",
}

_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def generate_slug(title: str) -> str:
    """
    Derive a slug from a title.

    Punctuation, hyphens included, is dropped before spaces become
    hyphens, so a slug fed back in is not always returned unchanged.

    Examples:
        >>> generate_slug("Hello, World!")
        'hello-world'
        >>> generate_slug("Café & Niño")
        'cafe-and-nino'
        >>> generate_slug("E-mail tips")
        'email-tips'
    """
    text = (title or "").lower()
    for source, target in _SUBSTITUTIONS.items():
        text = text.replace(source, target)

    text = "".join(ch for ch in text if ch.isalnum() or ch == " ")
    text = text.replace(" ", "-")
    text = _DISALLOWED.sub("", text)
    text = _HYPHEN_RUNS.sub("-", text)
    return text.strip("-")


def validate_slug(slug: str) -> bool:
    """Whether ``slug`` is lowercase alphanumeric runs joined by single hyphens."""
    return bool(slug) and SLUG_PATTERN.match(slug) is not None


def require_valid_slug(slug: str) -> str:
    """
    Return ``slug`` unchanged if it is well formed.

    Raises:
        SlugValidationFailed: If the slug has the wrong shape
    """
    if not validate_slug(slug):
        raise SlugValidationFailed(slug)
    return slug


def slug_candidates(base: str, max_attempts: int = MAX_ATTEMPTS) -> Iterator[str]:
    """
    Yield ``base`` followed by ``base-1``, ``base-2``, ...

    At most ``max_attempts`` candidates are produced.
    """
    if max_attempts < 1:
        return
    yield base
    for suffix in range(1, max_attempts):
        yield f"{base}-{suffix}"


def ensure_unique(
    base: str,
    exists: Callable[[str], bool],
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """
    Return the first candidate derived from ``base`` that is not taken.

    Args:
        base: Slug to start from
        exists: Returns True when a candidate is already used
        max_attempts: Number of candidates to try

    Raises:
        SlugGenerationExhausted: If every candidate is taken
    """
    for candidate in slug_candidates(base, max_attempts):
        if not exists(candidate):
            if candidate != base:
                logger.info("Slug %r is taken, using %r", base, candidate)
            return candidate
    logger.warning("No free slug for %r after %d attempts", base, max_attempts)
    raise SlugGenerationExhausted(base, max_attempts)


async def ensure_unique_async(
    base: str,
    exists: Callable[[str], Awaitable[bool]],
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """
    Async variant of ``ensure_unique`` for database backed checks.

    Raises:
        SlugGenerationExhausted: If every candidate is taken
    """
    for candidate in slug_candidates(base, max_attempts):
        if not await exists(candidate):
            if candidate != base:
                logger.info("Slug %r is taken, using %r", base, candidate)
            return candidate
    logger.warning("No free slug for %r after %d attempts", base, max_attempts)
    raise SlugGenerationExhausted(base, max_attempts)
