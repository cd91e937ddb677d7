"""Template context for match reports.

Builds plain dictionaries from a BatchRunResult so templates never reach into
domain objects directly.
"""

from typing import Any, Dict, List, Optional

from jobmatch.domain.models import MatchedPosting
from jobmatch.pipeline.models import BatchRunResult
from jobmatch.utils.timestamps import format_timestamp


def build_posting_context(rank: int, matched: MatchedPosting, threshold: float) -> Dict[str, Any]:
    """Flatten one ranked result for the report template."""
    extra = matched.posting.extra_fields
    return {
        "rank": rank,
        "id": matched.id,
        "title": matched.title or "Untitled role",
        "company": matched.company or "Unknown company",
        "location": extra.get("location"),
        "url": extra.get("url"),
        "score": matched.match_score,
        "meets_threshold": matched.match_score >= threshold,
        "matched_skills": list(matched.matched_skills),
        "missing_skills": list(matched.missing_skills),
        "reasoning": matched.reasoning,
        "salary_match": matched.result.salary_match,
        "location_match": matched.result.location_match,
    }


def build_report_context(result: BatchRunResult, limit: Optional[int] = None) -> Dict[str, Any]:
    """
    Build the full report context for a batch run.

    Args:
        result: Completed batch run
        limit: Maximum ranked postings to include (None for all)

    Returns:
        Dictionary with keys: run_id, generated_at, total, processed,
        skipped, streamed, threshold, cancelled, fallbacks, duration_seconds,
        distribution (high/medium/low), postings, omitted
    """
    ranked = result.results if limit is None else result.results[:limit]
    postings: List[Dict[str, Any]] = [
        build_posting_context(rank, matched, result.threshold)
        for rank, matched in enumerate(ranked, 1)
    ]
    distribution = result.distribution

    return {
        "run_id": result.run_id,
        "generated_at": format_timestamp(result.run_finished_at),
        "total": result.total,
        "processed": result.processed_count,
        "skipped": result.skipped_count,
        "streamed": result.streamed_count,
        "threshold": f"{result.threshold:g}",
        "cancelled": result.cancelled,
        "fallbacks": result.fallback_count,
        "duration_seconds": round(result.total_duration_seconds, 2),
        "distribution": {
            "high": distribution.high,
            "medium": distribution.medium,
            "low": distribution.low,
        },
        "postings": postings,
        "omitted": len(result.results) - len(ranked),
    }
