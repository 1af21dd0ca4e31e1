#!/usr/bin/env python3
"""
Match Scoring

Heuristic relevance scoring for search results against a target
(podcast name, episode title) pair.

Scoring rules (case-insensitive):
- +100 exact title match
- +50 if either title contains the other
- +5 per target title word (longer than 3 chars) found in the candidate title
- +30 if either podcast name contains the other, on top of the title score
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from core.listen_notes_client import SearchCandidate

logger = logging.getLogger(__name__)

MIN_MATCH_SCORE = 10

EXACT_TITLE_SCORE = 100
PARTIAL_TITLE_SCORE = 50
SHARED_WORD_SCORE = 5
PODCAST_NAME_SCORE = 30
MIN_WORD_LENGTH = 4


@dataclass(frozen=True)
class MatchResult:
    candidate: SearchCandidate
    score: int


def score_candidate(podcast_name: str, episode_title: str, candidate: SearchCandidate) -> int:
    """
    Score a single search candidate

    Args:
        podcast_name: Target podcast name
        episode_title: Target episode title
        candidate: Search result to score

    Returns:
        Integer relevance score
    """
    target_title = episode_title.lower()
    target_podcast = podcast_name.lower()
    result_title = candidate.title_original.lower()
    result_podcast = candidate.podcast_title_original.lower()

    score = 0
    if result_title == target_title:
        score += EXACT_TITLE_SCORE
    elif target_title in result_title or result_title in target_title:
        score += PARTIAL_TITLE_SCORE
    else:
        target_words = [w for w in target_title.split() if len(w) >= MIN_WORD_LENGTH]
        score += SHARED_WORD_SCORE * sum(1 for w in target_words if w in result_title)

    if target_podcast in result_podcast or result_podcast in target_podcast:
        score += PODCAST_NAME_SCORE

    return score


def meets_threshold(score: int) -> bool:
    """Whether a best score is strong enough to count as a match"""
    return score >= MIN_MATCH_SCORE


def select_best_match(podcast_name: str, episode_title: str,
                      candidates: Sequence[SearchCandidate]) -> Optional[MatchResult]:
    """
    Pick the best-scoring candidate

    Ties go to the earliest candidate. A best score below MIN_MATCH_SCORE
    is reported as no match.

    Args:
        podcast_name: Target podcast name
        episode_title: Target episode title
        candidates: Search results in provider order

    Returns:
        MatchResult, or None when nothing clears the threshold
    """
    best: Optional[SearchCandidate] = None
    best_score = -1

    for candidate in candidates:
        score = score_candidate(podcast_name, episode_title, candidate)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or not meets_threshold(best_score):
        logger.debug(f"[match] No match for '{episode_title}' (best score: {best_score})")
        return None

    return MatchResult(candidate=best, score=best_score)
