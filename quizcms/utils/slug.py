import re

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w-]+")
_DASHES = re.compile(r"-{2,}")
_YEAR_SEGMENT = re.compile(r"-\d{4}(?=-|$)")


def slugify(text: str) -> str:
    """URL-friendly slug: lowercase, spaces to dashes, non-word characters removed

    >>> slugify("  The Art of War! ")
    'the-art-of-war'
    """
    slug = _WHITESPACE.sub("-", str(text).lower().strip())
    slug = _NON_WORD.sub("", slug)
    slug = _DASHES.sub("-", slug)
    return slug.strip("-")


def generate_media_slug(title: str, creator: str, year: int | None = None) -> str:
    """Slug for a media item built from title, creator and year"""
    parts = [title, creator]
    if year:
        parts.append(str(year))
    sanitized = [re.sub(r"[^\w\s-]", "", part).strip() for part in parts]
    return slugify(" ".join(sanitized))


def strip_year(slug: str) -> str:
    """Slug with 4-digit year segments removed, used to spot year-only duplicates"""
    return _YEAR_SEGMENT.sub("", slug).strip("-")
