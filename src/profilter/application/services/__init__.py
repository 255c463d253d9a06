"""Application services - aggregation and ranking."""

from profilter.application.services.aggregation_service import AggregationService
from profilter.application.services.rank_formatter import format_rank, rank

__all__ = ["AggregationService", "format_rank", "rank"]
