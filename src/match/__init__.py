"""Classification, candidate scoring and per-category matching."""

from match.candidates import Candidate, scan_candidates, score_candidate, select_best
from match.classifier import classify
from match.matchers import (
    MatchContext,
    match_data_shape,
    match_enum_const,
    match_enum_type,
    match_field,
    match_function,
    match_interface,
    match_interface_method,
)
from match.scope import sibling_files

__all__ = [
    "Candidate",
    "MatchContext",
    "classify",
    "match_data_shape",
    "match_enum_const",
    "match_enum_type",
    "match_field",
    "match_function",
    "match_interface",
    "match_interface_method",
    "scan_candidates",
    "score_candidate",
    "select_best",
    "sibling_files",
]
