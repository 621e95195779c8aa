# jobmatch/ai/models.py
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from datetime import datetime

from jobmatch.models import JobListing
from jobmatch.ats.models import ATSJobScoreResult
from jobmatch.utils import to_number, clamp_round, round_half_up


NEUTRAL = 50


def _score(value: Any, default: int = NEUTRAL) -> int:
    """0-100 field from untrusted input; neutral default when missing or invalid"""
    number = to_number(value)
    if number is None:
        return default
    return clamp_round(number)


def _amount(value: Any, default: int = 0) -> int:
    """Non-negative salary figure (thousands)"""
    number = to_number(value)
    if number is None:
        return default
    return max(0, round_half_up(number))


def _strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class MarketComparison:
    percentile: int                # 0-100
    industry_average: int          # thousands

    def to_dict(self) -> Dict[str, int]:
        return {'percentile': self.percentile, 'industryAverage': self.industry_average}


@dataclass(frozen=True)
class SalaryPrediction:
    """Predicted salary band in thousands"""
    predicted_min: int
    predicted_median: int
    predicted_max: int
    confidence: int                # 0-100
    market_comparison: Optional[MarketComparison] = None
    factors: List[str] = field(default_factory=list)

    @classmethod
    def from_response(
        cls,
        data: Any,
        default_min: int = 0,
        default_max: int = 0
    ) -> 'SalaryPrediction':
        """
        Validate a salary object from the completion service

        Every number is clamped; missing figures fall back to the given
        defaults (usually the job's advertised range) and the median to
        the midpoint. An inverted band is swapped.
        """
        data = _mapping(data)

        low = _amount(data.get('predictedMin'), default_min)
        high = _amount(data.get('predictedMax'), default_max)
        if low > high:
            low, high = high, low

        median = _amount(data.get('predictedMedian'), round_half_up((low + high) / 2))
        median = int(min(max(median, low), high))

        comparison = None
        raw_comparison = data.get('marketComparison')
        if isinstance(raw_comparison, dict):
            comparison = MarketComparison(
                percentile=_score(raw_comparison.get('percentile')),
                industry_average=_amount(raw_comparison.get('industryAverage'), median)
            )

        return cls(
            predicted_min=low,
            predicted_median=median,
            predicted_max=high,
            confidence=_score(data.get('confidence')),
            market_comparison=comparison,
            factors=_strings(data.get('factors'))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'predictedMin': self.predicted_min,
            'predictedMedian': self.predicted_median,
            'predictedMax': self.predicted_max,
            'confidence': self.confidence,
            'marketComparison': self.market_comparison.to_dict() if self.market_comparison else None,
            'factors': list(self.factors),
        }


@dataclass(frozen=True)
class SuccessBreakdown:
    qualifications: int = NEUTRAL
    experience: int = NEUTRAL
    skills: int = NEUTRAL
    location: int = NEUTRAL

    def to_dict(self) -> Dict[str, int]:
        return {
            'qualifications': self.qualifications,
            'experience': self.experience,
            'skills': self.skills,
            'location': self.location,
        }


@dataclass(frozen=True)
class SuccessProbability:
    """Chance of landing the role, 0-100"""
    overall_probability: int = NEUTRAL
    breakdown: SuccessBreakdown = field(default_factory=SuccessBreakdown)
    risk_factors: List[str] = field(default_factory=list)
    improvement_suggestions: List[str] = field(default_factory=list)

    @property
    def level(self) -> str:
        if self.overall_probability >= 70:
            return "High"
        elif self.overall_probability >= 50:
            return "Medium"
        return "Low"

    @classmethod
    def from_response(cls, data: Any) -> 'SuccessProbability':
        """Validate a success object; neutral 50 for anything missing"""
        data = _mapping(data)
        breakdown = _mapping(data.get('breakdown'))

        return cls(
            overall_probability=_score(data.get('overallProbability')),
            breakdown=SuccessBreakdown(
                qualifications=_score(breakdown.get('qualifications')),
                experience=_score(breakdown.get('experience')),
                skills=_score(breakdown.get('skills')),
                location=_score(breakdown.get('location'))
            ),
            risk_factors=_strings(data.get('riskFactors')),
            improvement_suggestions=_strings(data.get('improvementSuggestions'))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overallProbability': self.overall_probability,
            'breakdown': self.breakdown.to_dict(),
            'riskFactors': list(self.risk_factors),
            'improvementSuggestions': list(self.improvement_suggestions),
        }


@dataclass(frozen=True)
class JobRecommendation:
    """One ranked job with AI-origin fields merged with the ATS engine"""
    job: JobListing
    match_score: int               # 0-100
    ats_score: int                 # 0-100
    confidence: int                # 0-100
    reasons: List[str]
    why_match: str
    salary_prediction: Optional[SalaryPrediction] = None
    success_probability: Optional[SuccessProbability] = None
    recommended_actions: List[str] = field(default_factory=list)
    ats_result: Optional[ATSJobScoreResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'job': self.job.to_dict(),
            'matchScore': self.match_score,
            'atsScore': self.ats_score,
            'confidence': self.confidence,
            'reasons': list(self.reasons),
            'whyMatch': self.why_match,
            'salaryPrediction': self.salary_prediction.to_dict() if self.salary_prediction else None,
            'successProbability': (
                self.success_probability.to_dict() if self.success_probability else None
            ),
            'recommendedActions': list(self.recommended_actions),
            'ats': self.ats_result.to_dict() if self.ats_result else None,
        }


@dataclass(frozen=True)
class AlertCriteria:
    keywords: List[str] = field(default_factory=list)
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    industry: Optional[str] = None
    experience_level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'keywords': list(self.keywords),
            'location': self.location,
            'salaryMin': self.salary_min,
            'salaryMax': self.salary_max,
            'industry': self.industry,
            'experienceLevel': self.experience_level,
        }


@dataclass(frozen=True)
class JobAlert:
    """Saved-search criteria suggested for a profile"""
    id: str
    criteria: AlertCriteria
    frequency: str                 # daily, weekly, realtime
    description: str = ""
    last_checked: datetime = field(default_factory=datetime.now)
    active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'criteria': self.criteria.to_dict(),
            'frequency': self.frequency,
            'description': self.description,
            'lastChecked': self.last_checked.isoformat(),
            'active': self.active,
        }
