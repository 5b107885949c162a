"""
Catalog Loader

Reads the schools file (and optionally the combinations file) from a local
path or an HTTP(S) URL and normalizes raw JSON records into a Catalog.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO selection changes
- NO retries: a failed read raises LoadError immediately
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .contracts import Catalog, Combination, School
from .constants import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    FIELD_ADVANTAGEOUS,
    FIELD_COLOR,
    FIELD_DISADVANTAGEOUS,
    FIELD_ICON,
    FIELD_ID,
    FIELD_MAIN_GENRE,
    FIELD_SCORE,
    FIELD_SUB_GENRE,
    ScoringVariant,
)
from .errors import LoadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


# =============================================================================
# RAW READ
# =============================================================================

def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_json(source: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """
    Read and parse JSON from a path or URL.

    Raises:
        LoadError: source unreachable, non-success status, or invalid JSON
    """
    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
        except requests.RequestException as e:
            raise LoadError(f"Could not reach {source}: {e}", source=source) from e

        if not response.ok:
            raise LoadError(f"HTTP error {response.status_code} reading {source}", source=source)

        try:
            return response.json()
        except ValueError as e:
            raise LoadError(f"Invalid JSON from {source}: {e}", source=source) from e

    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(f"Could not read {source}: {e}", source=source) from e

    try:
        return json.loads(text)
    except ValueError as e:
        raise LoadError(f"Invalid JSON in {source}: {e}", source=source) from e


# =============================================================================
# NORMALIZATION
# =============================================================================

def _string_list(value: Any) -> List[str]:
    """Keep only string entries of a JSON list; anything else becomes empty."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _score_table(value: Any) -> Optional[Dict[str, int]]:
    """Keep integer entries of a JSON object; bools and floats are dropped."""
    if not isinstance(value, dict):
        return None
    table: Dict[str, int] = {}
    for target, score in value.items():
        if isinstance(score, bool) or not isinstance(score, int):
            logger.warning(f"Ignoring non-integer score {score!r} toward {target!r}")
            continue
        table[str(target)] = score
    return table


def _text_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def normalize_school(raw: Any) -> Optional[School]:
    """
    Build a School from a raw record.

    Missing color / icon fall back to fixed defaults. Returns None for records
    that are not objects or have no usable id.
    """
    if not isinstance(raw, dict):
        return None

    school_id = raw.get(FIELD_ID)
    if not isinstance(school_id, str) or not school_id:
        return None

    return School(
        id=school_id,
        color=_text_or_default(raw.get(FIELD_COLOR), DEFAULT_COLOR),
        icon=_text_or_default(raw.get(FIELD_ICON), DEFAULT_ICON),
        advantageous_matches=_string_list(raw.get(FIELD_ADVANTAGEOUS)),
        disadvantageous_matches=_string_list(raw.get(FIELD_DISADVANTAGEOUS)),
        score=_score_table(raw.get(FIELD_SCORE)),
    )


def normalize_combination(raw: Any) -> Optional[Combination]:
    if not isinstance(raw, dict):
        return None
    main_genre = raw.get(FIELD_MAIN_GENRE)
    sub_genre = raw.get(FIELD_SUB_GENRE)
    if not isinstance(main_genre, str) or not isinstance(sub_genre, str):
        return None
    return Combination(main_genre=main_genre, sub_genre=sub_genre)


def detect_variant(schools: List[School]) -> ScoringVariant:
    """Score tables win when any school carries one; otherwise matchup lists."""
    if any(school.score is not None for school in schools):
        return ScoringVariant.SCORE_TABLE
    return ScoringVariant.MATCHUP


def count_dangling_references(
    schools: List[School],
    combinations: List[Combination]
) -> int:
    """Count relation and combination targets that are not catalog ids."""
    known = {school.id for school in schools}
    dangling = 0
    for school in schools:
        targets = school.advantageous_matches + school.disadvantageous_matches
        targets += list((school.score or {}).keys())
        dangling += sum(1 for target in targets if target not in known)
    for combination in combinations:
        pair = (combination.main_genre, combination.sub_genre)
        dangling += sum(1 for target in pair if target not in known)
    return dangling


# =============================================================================
# ENTRY POINTS
# =============================================================================

def parse_schools(payload: Any, source: Optional[str] = None) -> List[School]:
    """
    Normalize a parsed schools payload.

    Raises:
        LoadError: payload is not a non-empty list or holds no usable record
    """
    if not isinstance(payload, list) or not payload:
        raise LoadError("School data is not a list or is empty", source=source)

    schools: List[School] = []
    seen = set()
    for index, raw in enumerate(payload):
        school = normalize_school(raw)
        if school is None:
            logger.warning(f"Skipping malformed school record #{index}")
            continue
        if school.id in seen:
            logger.warning(f"Skipping duplicate school id {school.id!r}")
            continue
        seen.add(school.id)
        schools.append(school)

    if not schools:
        raise LoadError("School data holds no usable records", source=source)
    return schools


def parse_combinations(payload: Any, source: Optional[str] = None) -> List[Combination]:
    """
    Normalize a parsed combinations payload. An empty list is allowed.

    Raises:
        LoadError: payload is not a list
    """
    if not isinstance(payload, list):
        raise LoadError("Combination data is not a list", source=source)

    combinations: List[Combination] = []
    for index, raw in enumerate(payload):
        combination = normalize_combination(raw)
        if combination is None:
            logger.warning(f"Skipping malformed combination #{index}")
            continue
        combinations.append(combination)
    return combinations


def load_catalog(
    source: str,
    combinations_source: Optional[str] = None,
    variant: Optional[ScoringVariant] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Catalog:
    """
    Main entry point: load the catalog once.

    Args:
        source: Path or URL of the schools file
        combinations_source: Optional path or URL of the combinations file
        variant: Force a scoring variant; detected from the records when None
        timeout: Request timeout for URL sources, in seconds

    Returns:
        Immutable Catalog

    Raises:
        LoadError: either source failed to load
    """
    schools = parse_schools(fetch_json(source, timeout=timeout), source=source)

    combinations: List[Combination] = []
    if combinations_source:
        combinations = parse_combinations(
            fetch_json(combinations_source, timeout=timeout),
            source=combinations_source,
        )

    resolved_variant = variant or detect_variant(schools)

    dangling = count_dangling_references(schools, combinations)
    if dangling:
        logger.warning(f"{dangling} relation(s) point at schools missing from the catalog; they score 0")

    logger.info(
        f"Loaded {len(schools)} schools and {len(combinations)} combinations "
        f"from {source} (variant={resolved_variant.value})"
    )

    return Catalog(
        schools=schools,
        combinations=combinations,
        variant=resolved_variant,
        source=source,
    )
