"""text_match.py — answer canonicalisation and string distance.

Normalisation is for equality checks only, never for display. It does not
attempt numeric equivalence: "0.5" and "1/2" stay different here and are
left to the model for a mathematical-equivalence judgement.
"""
import re

_WHITESPACE_RE = re.compile(r"\s+")


def strip_whitespace(s: str) -> str:
    """Remove every whitespace character, inside and around the answer."""
    return _WHITESPACE_RE.sub("", s or "")


def normalize_answer(s: str) -> str:
    """Lowercase, whitespace-free form of an answer string."""
    return strip_whitespace(s).lower()


def answers_match(a: str, b: str) -> bool:
    return normalize_answer(a) == normalize_answer(b)


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance: insert, delete and substitute each cost 1.

    No discount for adjacent transpositions ("34" vs "43" is 2); swapped
    digits have their own check in the slip pipeline.
    """
    rows = len(b) + 1
    cols = len(a) + 1
    matrix = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,      # insertion
                    matrix[i - 1][j] + 1,      # deletion
                )

    return matrix[rows - 1][cols - 1]
