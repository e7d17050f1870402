"""Input validation utilities to prevent injection attacks."""

# Maximum lengths for common fields
MAX_SEARCH_LENGTH = 200


def sanitize_search(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Sanitize search input.

    Args:
        search: Raw search string
        max_length: Maximum allowed length

    Returns:
        Sanitized search string or None
    """
    if search is None:
        return None

    # Truncate to max length
    search = search[:max_length]

    # Remove any SQL-like patterns (roster search is done in memory, but the
    # same value is echoed back into logs)
    search = search.replace(";", "").replace("--", "")

    # Strip leading/trailing whitespace
    return search.strip() or None


def title_case(value: str | None) -> str:
    """Normalize a person name to title case (``jean DUPONT`` -> ``Jean Dupont``)."""
    if not value:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in value.strip().lower().split())
