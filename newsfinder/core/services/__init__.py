"""Core search services: similarity, correction, matching, planning and orchestration."""

from .document_mapper import article_from_record, to_index_document
from .fuzzy_matcher import FuzzyMatch, LocalFuzzyMatcher
from .query_planner import PlannerConfig, QueryPlanner, StructuredQuery, parse_suggestions
from .search_service import CascadeState, SearchService, merge_results
from .similarity import edit_distance, similarity
from .typo_dictionary import TypoDictionary

__all__ = [
    "edit_distance",
    "similarity",
    "TypoDictionary",
    "FuzzyMatch",
    "LocalFuzzyMatcher",
    "article_from_record",
    "to_index_document",
    "PlannerConfig",
    "QueryPlanner",
    "StructuredQuery",
    "parse_suggestions",
    "CascadeState",
    "SearchService",
    "merge_results",
]
