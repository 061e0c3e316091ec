from __future__ import annotations

import random
from typing import Any

from app.schemas.analysis import AnalysisResult, Suggestion

MOCK_BASE_SCORE_MIN = 75
MOCK_BASE_SCORE_MAX = 94
MOCK_ATS_OFFSET = -5
MOCK_KEYWORDS_OFFSET = 3
MOCK_READABILITY_OFFSET = 7
MOCK_KEYWORD_COUNT = 5
MOCK_SUGGESTION_COUNT = 3

KEYWORD_POOL = ("React", "Node.js", "Python", "AWS")

SUGGESTION_POOL = (
    Suggestion(
        title="Add Quantifiable Achievements",
        description=(
            "Include specific metrics like 'Improved performance by 40%' or "
            "'Reduced costs by $50K' to demonstrate impact."
        ),
    ),
    Suggestion(
        title="Expand Technical Skills Section",
        description=(
            "Organize skills by category (Languages, Frameworks, Tools) and include "
            "current in-demand technologies."
        ),
    ),
    Suggestion(
        title="Include Project Links",
        description="Add GitHub repository links or live project URLs to provide tangible evidence of your work.",
    ),
    Suggestion(
        title="Optimize for ATS Systems",
        description=(
            "Use standard section headings and include relevant keywords from job "
            "descriptions you're targeting."
        ),
    ),
    Suggestion(
        title="Highlight Leadership Experience",
        description="Emphasize any team leadership, mentoring, or project management responsibilities.",
    ),
)

ANALYSIS_TEMPLATE = (
    "Analysis of {filename}: This resume demonstrates strong potential with clear professional "
    "experience and good structure. The content is well-organized and presents a compelling career "
    "narrative. Key strengths include relevant technical experience and clear project descriptions. "
    "Areas for enhancement: incorporating more quantifiable achievements to demonstrate impact, "
    "expanding the technical skills inventory with current market-demanded technologies, and "
    "potentially adding links to professional portfolios or GitHub repositories. Overall, this is a "
    "solid resume that effectively communicates your qualifications."
)


def _shuffled(items: tuple[Any, ...], rng: random.Random) -> list[Any]:
    pool = list(items)
    rng.shuffle(pool)
    return pool


def generate_mock_analysis(filename: str, *, rng: random.Random | None = None) -> dict[str, Any]:
    """Build a synthetic analysis result for ``filename``.

    Scores derive from one base draw, keywords and suggestions are shuffled
    subsets of fixed pools. Every call returns a new object.
    """
    source = rng or random.Random()
    base = source.randint(MOCK_BASE_SCORE_MIN, MOCK_BASE_SCORE_MAX)
    keywords = _shuffled(KEYWORD_POOL, source)[:MOCK_KEYWORD_COUNT]
    suggestions = _shuffled(SUGGESTION_POOL, source)[:MOCK_SUGGESTION_COUNT]

    result = AnalysisResult(
        overallScore=base,
        atsScore=base + MOCK_ATS_OFFSET,
        keywordsScore=base + MOCK_KEYWORDS_OFFSET,
        readabilityScore=base + MOCK_READABILITY_OFFSET,
        missingKeywords=keywords,
        suggestions=[item.model_copy() for item in suggestions],
        aiAnalysis=ANALYSIS_TEMPLATE.format(filename=filename),
    )
    return result.model_dump()
