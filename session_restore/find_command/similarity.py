"""Similarity scoring between search terms and desktop file names.

Two measures:

- ``whole_string_similarity``: normalized Levenshtein similarity in [0, 1].
- ``partial_match_similarity``: section-wise matching for identifiers such as
  ``org.multimc.MultiMC`` vs ``net.lutris.multimc-2``, where vendor prefixes,
  delimiters and version suffixes differ between packaging systems.
"""

import math
from typing import Iterable, List, Sequence

from rapidfuzz.distance import Levenshtein

# Weight shift towards the prefix score when the haystack section starts with the term
EMBED_SIM_WEIGHT_OFFSET = 0.3
# Length corrected similarity at or below this counts as a failed match
MATCH_FAIL_THRESHOLD = 0.6
# Scale of the negative contribution of a failed match
MATCH_FAIL_SEVERITY = 0.05
# Sections this short (in bytes) are never scored
MIN_SECTION_LENGTH = 3


def _byte_len(s: str) -> int:
    # Section lengths are measured in UTF-8 bytes, not characters
    return len(s.encode("utf-8", "surrogateescape"))


def whole_string_similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity, 1.0 for identical strings."""
    return Levenshtein.normalized_similarity(a, b)


def search_term_matching_similarity(
    search_term: str,
    n_haystack_sections: int,
    haystack_section_ix: int,
    haystack_section: str,
) -> float:
    """Score one search term section against one haystack section.

    Args:
        search_term: Section of the search term
        n_haystack_sections: Number of sections the haystack was split into
        haystack_section_ix: Zero-based position of ``haystack_section``
        haystack_section: Section of the haystack

    Returns:
        Positive score for a match, a small negative penalty otherwise
    """
    hs_len = _byte_len(haystack_section)
    st_len = _byte_len(search_term)
    hs_pos = haystack_section_ix + 1

    if haystack_section.startswith(search_term):
        starts_with_sim = (hs_len - math.log(hs_len - st_len + 1)) / hs_len
    else:
        starts_with_sim = 0.0

    str_sim = whole_string_similarity(search_term, haystack_section)

    if starts_with_sim > 0.0:
        sim = (
            starts_with_sim * (1.0 + EMBED_SIM_WEIGHT_OFFSET)
            + str_sim * (1.0 - EMBED_SIM_WEIGHT_OFFSET)
        ) / 2.0
    else:
        sim = str_sim

    length_correction_factor = 1.0 - (1.0 / (st_len + hs_len))
    section_pos_correction_factor = (hs_pos / n_haystack_sections) ** 2

    length_corrected_sim = sim * length_correction_factor
    fully_corrected_sim = length_corrected_sim * section_pos_correction_factor

    if length_corrected_sim > MATCH_FAIL_THRESHOLD:
        return fully_corrected_sim
    return -MATCH_FAIL_SEVERITY * (1.0 - fully_corrected_sim)


def calculate_partial_fit_sum_similarity(
    search_term_sections: Iterable[str],
    haystack_sections: Sequence[str],
) -> float:
    """Aggregate pairwise scores over one haystack split.

    The sum of all pair scores is divided by the number of positive pairs, so
    strong hits are not diluted by irrelevant comparisons while failed pairs
    still drag the total down. Zero when no pair scored positive.
    """
    n_hs_sections = len(haystack_sections)
    unique_sections: List[str] = sorted(set(search_term_sections))

    count = 0
    sim_sum = 0.0

    for st in unique_sections:
        if _byte_len(st) <= MIN_SECTION_LENGTH:
            continue
        for hs_ix, hs in enumerate(haystack_sections):
            if _byte_len(hs) <= MIN_SECTION_LENGTH:
                continue
            sim = search_term_matching_similarity(st, n_hs_sections, hs_ix, hs)
            if sim > 0.0:
                count += 1
            sim_sum += sim

    if count > 0:
        return sim_sum / count
    return 0.0


def partial_match_similarity(search_term: str, haystack: str) -> float:
    """Section-wise similarity of ``search_term`` within ``haystack``.

    The search term is split on dots; the haystack is split both on dots and
    on dashes and the better of the two aggregates wins. Not symmetric.

    Examples:
        >>> partial_match_similarity("listen.tidal.com", "tidal") > 0.8
        True
        >>> partial_match_similarity("org.multimc.MultiMC", "a-b.c")
        0.0
    """
    st_dot_split = search_term.split(".")

    partial_dot_match = calculate_partial_fit_sum_similarity(st_dot_split, haystack.split("."))
    partial_mix_match = calculate_partial_fit_sum_similarity(st_dot_split, haystack.split("-"))

    return max(partial_dot_match, partial_mix_match)
