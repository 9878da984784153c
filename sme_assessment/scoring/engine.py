import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

NEEDS_IMPROVEMENT = "needs_improvement"
BELOW_AVERAGE = "below_average"
MODERATE = "moderate"
STRONG = "strong"

# (inclusive upper bound, band), checked in ascending order
BAND_THRESHOLDS = (
    (2.0, NEEDS_IMPROVEMENT),
    (3.0, BELOW_AVERAGE),
    (4.0, MODERATE),
)

SCALE_MIN = 1
SCALE_MAX = 5
DEFAULT_THEME_WEIGHT = 1.0
OUTPUT_PRECISION = 2


@dataclass(frozen=True)
class ThemeScoreResult:
    theme_id: Any
    mean_score: float
    percentage: float


@dataclass(frozen=True)
class ScoreSummary:
    composite_mean: Optional[float]
    composite_percentage: Optional[float]
    performance_band: Optional[str]


@dataclass(frozen=True)
class ScoringResult:
    theme_scores: List[ThemeScoreResult] = field(default_factory=list)
    summary: ScoreSummary = ScoreSummary(None, None, None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "theme_scores": [asdict(ts) for ts in self.theme_scores],
            "summary": asdict(self.summary),
        }


def theme_mean(scores: Optional[Sequence[float]]) -> Optional[float]:
    """Arithmetic mean of a theme's effective scores; None when there are none."""
    if not scores:
        return None
    return sum(scores) / len(scores)


def percentage(mean: Optional[float]) -> Optional[float]:
    """Map a mean on the 1-5 scale linearly onto 0-100."""
    if mean is None:
        return None
    return (mean - SCALE_MIN) / (SCALE_MAX - SCALE_MIN) * 100


def performance_band(mean: Optional[float]) -> Optional[str]:
    if mean is None:
        return None
    for upper, band in BAND_THRESHOLDS:
        if mean <= upper:
            return band
    return STRONG


def effective_score(raw_score: float, reverse_scored: bool) -> float:
    """Invert a 1-5 answer for reverse-scored questions."""
    if reverse_scored:
        return (SCALE_MIN + SCALE_MAX) - raw_score
    return raw_score


def _field(item: Any, name: str, default: Any = None) -> Any:
    # Accepts plain dicts/rows as well as ORM objects and dataclasses
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # "nan" and "inf" parse as floats but are not scores
    if not math.isfinite(number):
        return None
    return number


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _index_by_id(items: Iterable[Any]) -> Dict[Any, Any]:
    index = {}
    for item in items:
        key = _field(item, "id")
        if _is_hashable(key):
            index[key] = item
    return index


def _round(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return round(value, OUTPUT_PRECISION)


def calculate_scores(
    responses: Iterable[Any],
    questions: Iterable[Any],
    themes: Iterable[Any],
) -> ScoringResult:
    """
    Turn raw per-question responses into theme scores and a weighted composite.

    Responses need ``question_id`` and ``score``; questions need ``id``,
    ``theme_id`` and ``reverse_scored``; themes need ``id`` and ``weight``.
    Responses for unknown questions are skipped, themes without responses
    are omitted, and unknown or weightless themes count with weight 1.0.

    Only emitted values are rounded. The composite and its band are derived
    from the unrounded theme means.
    """
    question_map = _index_by_id(questions)
    theme_map = _index_by_id(themes)

    scores_by_theme: Dict[Any, List[float]] = {}
    for response in responses:
        question_id = _field(response, "question_id")
        if not _is_hashable(question_id):
            continue
        question = question_map.get(question_id)
        if question is None:
            continue
        theme_id = _field(question, "theme_id")
        if not _is_hashable(theme_id):
            continue
        raw_score = _as_number(_field(response, "score"))
        if raw_score is None:
            continue
        score = effective_score(raw_score, bool(_field(question, "reverse_scored", False)))
        scores_by_theme.setdefault(theme_id, []).append(score)

    theme_scores: List[ThemeScoreResult] = []
    weighted_sum = 0.0
    total_weight = 0.0

    for theme_id, scores in scores_by_theme.items():
        mean = theme_mean(scores)
        pct = percentage(mean)
        theme = theme_map.get(theme_id)
        weight = _as_number(_field(theme, "weight")) if theme is not None else None
        if not weight:
            weight = DEFAULT_THEME_WEIGHT

        weighted_sum += mean * weight
        total_weight += weight

        theme_scores.append(
            ThemeScoreResult(theme_id=theme_id, mean_score=_round(mean), percentage=_round(pct))
        )

    composite_mean = weighted_sum / total_weight if total_weight > 0 else None

    return ScoringResult(
        theme_scores=theme_scores,
        summary=ScoreSummary(
            composite_mean=_round(composite_mean),
            composite_percentage=_round(percentage(composite_mean)),
            performance_band=performance_band(composite_mean),
        ),
    )
