"""Candidate scoring and confidence estimation."""

from bs4 import Tag

from pagemd.dom import class_and_id, text_of, words_in

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Heuristic candidate weights
MAX_LENGTH_BONUS = 50
PARAGRAPH_WEIGHT = 3
HEADING_WEIGHT = 5
LINK_DENSITY_PENALTY = 100
CONTENT_HINT_BONUS = 25
CLUTTER_HINT_PENALTY = 25
TAG_BONUS = {"article": 30, "main": 25, "section": 10}

# Confidence steps: (words strictly above, points)
WORD_COUNT_STEPS: tuple[tuple[int, int], ...] = (
    (10, 10),
    (50, 15),
    (100, 15),
    (300, 10),
    (500, 10),
)
HEADING_CONFIDENCE = 20
PARAGRAPH_STEPS: tuple[tuple[int, int], ...] = ((1, 10), (3, 10))
TAG_CONFIDENCE = {"article": 30, "main": 25}
ROLE_CONFIDENCE = 20
CLASS_HINT_CONFIDENCE = 10


def score_candidate(element: Tag) -> float:
    """Score how much ``element`` looks like the main content block."""
    text_length = len(text_of(element))
    score = min(text_length / 100, MAX_LENGTH_BONUS)

    score += len(element.find_all("p")) * PARAGRAPH_WEIGHT
    score += len(element.find_all(HEADING_TAGS)) * HEADING_WEIGHT

    link_density = len(element.find_all("a")) / max(text_length, 1)
    score -= link_density * LINK_DENSITY_PENALTY

    hints = class_and_id(element)
    if "content" in hints or "article" in hints:
        score += CONTENT_HINT_BONUS
    if "sidebar" in hints or "nav" in hints:
        score -= CLUTTER_HINT_PENALTY

    score += TAG_BONUS.get(element.name, 0)
    return score


def pick_best_candidate(candidates: list[Tag]) -> Tag | None:
    """Return the highest scoring candidate; the earliest one wins ties."""
    best: Tag | None = None
    best_score = float("-inf")
    for candidate in candidates:
        score = score_candidate(candidate)
        if score > best_score:
            best, best_score = candidate, score
    return best


def calculate_confidence(element: Tag | None, word_count: int | None = None) -> int:
    """Estimate (0-100) how likely ``element`` is the page's real content."""
    if element is None:
        return 0
    if word_count is None:
        word_count = words_in(element)
    if word_count == 0:
        return 0

    confidence = sum(points for threshold, points in WORD_COUNT_STEPS if word_count > threshold)

    if element.find(HEADING_TAGS) is not None:
        confidence += HEADING_CONFIDENCE

    paragraphs = len(element.find_all("p"))
    confidence += sum(points for threshold, points in PARAGRAPH_STEPS if paragraphs > threshold)

    role = element.get("role")
    if element.name in TAG_CONFIDENCE:
        confidence += TAG_CONFIDENCE[element.name]
    elif role in ("main", "article"):
        confidence += ROLE_CONFIDENCE

    hints = class_and_id(element)
    if any(hint in hints for hint in ("content", "article", "main")):
        confidence += CLASS_HINT_CONFIDENCE

    return max(0, min(confidence, 100))
