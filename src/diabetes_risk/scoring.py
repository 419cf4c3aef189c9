from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from diabetes_risk.constants import DEFAULT_RISK_THRESHOLD


class Prediction(str, Enum):
    """Enumeration of classification outcomes."""

    DIABETIC = "diabetic"
    NOT_DIABETIC = "not diabetic"


@dataclass(frozen=True)
class HealthProfile:
    """The eight measurements of one assessment, already parsed to numbers."""

    pregnancies: float
    glucose: float
    blood_pressure: float
    skin_thickness: float
    insulin: float
    bmi: float
    diabetes_pedigree: float
    age: float


@dataclass(frozen=True)
class Band:
    """Points awarded when a factor reaches ``lower_bound``."""

    lower_bound: float
    points: int
    label: str


@dataclass(frozen=True)
class FactorScore:
    """Contribution of one factor to the risk score."""

    factor: str
    value: float
    points: int
    band: str | None


@dataclass(frozen=True)
class RiskAssessment:
    """Outcome of scoring one profile."""

    score: int
    prediction: Prediction
    factors: tuple[FactorScore, ...]

    @property
    def is_diabetic(self) -> bool:
        return self.prediction is Prediction.DIABETIC


# Highest band first; only the first band a value reaches is applied.
SCORING_BANDS: dict[str, tuple[Band, ...]] = {
    "glucose": (
        Band(126, 3, "diabetic range"),
        Band(100, 2, "pre-diabetic range"),
    ),
    "blood_pressure": (
        Band(140, 2, "high"),
        Band(130, 1, "elevated"),
    ),
    "bmi": (
        Band(30, 2, "obese"),
        Band(25, 1, "overweight"),
    ),
    "age": (
        Band(65, 2, "65 and over"),
        Band(45, 1, "45 to 64"),
    ),
    "pregnancies": (Band(3, 1, "3 or more"),),
    "diabetes_pedigree": (
        Band(0.5, 2, "strong family history"),
        Band(0.3, 1, "moderate family history"),
    ),
}


def _match_band(value: float, bands: tuple[Band, ...]) -> Band | None:
    # NaN compares false against every bound, so it never matches.
    for band in bands:
        if value >= band.lower_bound:
            return band
    return None


def score_breakdown(profile: HealthProfile) -> list[FactorScore]:
    """Score each factor of the profile independently.

    Args:
        profile: Parsed health measurements.

    Returns:
        One entry per scored factor, in table order. Factors that match no
        band are included with zero points.
    """
    factors = []
    for factor, bands in SCORING_BANDS.items():
        value = getattr(profile, factor)
        band = _match_band(value, bands)
        points = band.points if band else 0
        logger.debug(f"{factor}={value} -> {points} point(s)")
        factors.append(FactorScore(factor, value, points, band.label if band else None))
    return factors


def compute_risk_score(profile: HealthProfile) -> int:
    """Sum the points of every factor band the profile reaches."""
    return sum(factor.points for factor in score_breakdown(profile))


def classify(score: int, threshold: int = DEFAULT_RISK_THRESHOLD) -> Prediction:
    """Map a risk score to a prediction, diabetic at or above ``threshold``."""
    return Prediction.DIABETIC if score >= threshold else Prediction.NOT_DIABETIC


def assess(profile: HealthProfile, threshold: int = DEFAULT_RISK_THRESHOLD) -> RiskAssessment:
    """Score and classify a profile.

    Args:
        profile: Parsed health measurements.
        threshold: Minimum score classified as diabetic.

    Returns:
        The score, the prediction and the per-factor breakdown.
    """
    factors = tuple(score_breakdown(profile))
    score = sum(factor.points for factor in factors)
    prediction = classify(score, threshold)
    logger.info(f"Risk assessment: score={score}, prediction={prediction.value}")
    return RiskAssessment(score=score, prediction=prediction, factors=factors)
