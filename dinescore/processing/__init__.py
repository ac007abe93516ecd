"""
Review aggregation, detail assembly, summarization and the restaurant pipeline.
"""
from .details_assembler import DetailsAssembler
from .restaurant_service import RestaurantService
from .review_aggregator import ReviewAggregator, fuse_ratings
from .summary_generator import SummaryGenerator, SummaryMode

__all__ = [
    'DetailsAssembler',
    'RestaurantService',
    'ReviewAggregator',
    'fuse_ratings',
    'SummaryGenerator',
    'SummaryMode',
]
