"""
Score extraction for free-text grading feedback.

The model is asked for "a score out of 100" but answers in prose, so the
score is pulled out with a pattern match. This is a heuristic, not a parser:
replies that phrase the score differently fall back to DEFAULT_SCORE.
"""

import re

DEFAULT_SCORE = 70

# 1-3 digits, any run of "/" or whitespace, then the literal "100" ("85/100", "85 / 100")
SCORE_PATTERN = re.compile(r"\b([0-9]{1,3})[/\s]*100")

# "out of 100: 42" on one line, tried only when SCORE_PATTERN finds nothing
OUT_OF_PATTERN = re.compile(r"\bout of 100[ \t]*:[ \t]*([0-9]{1,3})\b", re.IGNORECASE)


def extract_score(feedback: str) -> int | None:
    """
    Extract a numeric score from feedback text.

    The first match of SCORE_PATTERN wins. The value is not clamped, so
    "250/100" yields 250.

    Args:
        feedback: Feedback text returned by the model.

    Returns:
        The score, or None if the text contains no recognizable score.
    """
    match = SCORE_PATTERN.search(feedback)
    if match is None:
        match = OUT_OF_PATTERN.search(feedback)
    if match is None:
        return None
    return int(match.group(1))


def score_feedback(feedback: str) -> int:
    """Extract a score from feedback, falling back to DEFAULT_SCORE."""
    score = extract_score(feedback)
    return DEFAULT_SCORE if score is None else score
