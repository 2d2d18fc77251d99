"""
Simulated pitch analysis.

There is no model behind this: the score is a uniform random integer and the
strengths/weaknesses are drawn from fixed phrase pools, two of each, without
replacement. The result is generated once at submission time and stored.
"""

import random
from typing import Optional

from pitchscore.schemas.idea import Analysis

MIN_SCORE = 60
MAX_SCORE = 95
PICKS_PER_POOL = 2

# ── Phrase pools ──
STRENGTHS_POOL = [
    "Clear problem statement",
    "Concrete target users",
    "Technically feasible solution",
    "Scalable idea",
    "Easy to test",
]

WEAKNESSES_POOL = [
    "Unclear target audience",
    "Missing supporting data",
    "Needs more validation",
    "Potentially high cost",
    "Weak differentiation",
]

SUMMARY_TEMPLATE = 'Preliminary assessment of "{title}": promising, but needs further exploration.'


def _pick(pool: list, rng: random.Random) -> list:
    shuffled = list(pool)
    rng.shuffle(shuffled)
    return shuffled[:PICKS_PER_POOL]


def generate_analysis(title: str, content: str, rng: Optional[random.Random] = None) -> Analysis:
    """
    Produce a randomized Analysis for a pitch.
    ``content`` is accepted for symmetry with a real analyser but not inspected.
    Pass a seeded ``rng`` for reproducible output.
    """
    rng = rng or random.Random()
    return Analysis(
        score=rng.randint(MIN_SCORE, MAX_SCORE),
        strengths=_pick(STRENGTHS_POOL, rng),
        weaknesses=_pick(WEAKNESSES_POOL, rng),
        summary=SUMMARY_TEMPLATE.format(title=title),
    )
