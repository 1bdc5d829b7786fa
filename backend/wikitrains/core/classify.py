"""Article Classification: pure predicates deciding whether a candidate qualifies.

Invariants:
    - Pure functions: no IO, no async
    - A description qualifies only if non-empty and free of banned terms (case-insensitive)
    - An image qualifies only if the URL is non-empty
    - Views qualify when >= threshold; a threshold of 0 means "no view requirement"

Design Decisions:
    - Banned terms are substring matches, so "actors" and "Actress" are both caught
      (heuristic that keeps biographies of performers out of the trivia pool)
"""

BANNED_DESCRIPTION_TERMS = ("actor", "actress")


def meets_view_threshold(views: int, min_views: int) -> bool:
    return views >= min_views


def requires_view_check(min_views: int) -> bool:
    return min_views > 0


def has_image(image_url: str) -> bool:
    return bool(image_url)


def is_acceptable_description(description: str) -> bool:
    if not description:
        return False
    lowered = description.lower()
    return not any(term in lowered for term in BANNED_DESCRIPTION_TERMS)
