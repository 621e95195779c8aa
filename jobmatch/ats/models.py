# jobmatch/ats/models.py
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple


@dataclass(frozen=True)
class MustHaveKeyword:
    """A phrase from a job posting that the resume should contain"""
    phrase: str
    weight: float = 1.0
    equivalents: Tuple[str, ...] = ()   # at most 2 alternative spellings

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'phrase': self.phrase, 'weight': self.weight}
        if self.equivalents:
            data['equivalents'] = list(self.equivalents)
        return data


@dataclass(frozen=True)
class KeywordDensityResult:
    """Pillar 1 output"""
    score: int                     # 0-100
    key_strengths: List[str]
    missing: List[str]
    matched_weight: float = 0.0
    total_weight: float = 0.0


@dataclass(frozen=True)
class TitleExperienceResult:
    """Pillar 2 output"""
    score: int                     # 0-100
    title_score: int
    tenure_score: int
    required_years: Optional[int]
    critical_issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GapPenaltyResult:
    """Pillar 4 output"""
    penalty: int                   # 0-40
    messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-pillar scores"""
    keyword_density: int           # 0-100
    title_and_experience: int      # 0-100
    formatting_integrity: int      # 0-100
    gap_penalty: int               # 0-40

    def to_dict(self) -> Dict[str, int]:
        return {
            'keywordDensity': self.keyword_density,
            'titleAndExperience': self.title_and_experience,
            'formattingIntegrity': self.formatting_integrity,
            'gapPenalty': self.gap_penalty,
        }


@dataclass(frozen=True)
class ATSJobScoreResult:
    """Complete ATS scoring result for one job"""
    ats_score: int                 # 0-100
    key_strengths: List[str]       # matched must-haves, max 10
    gaps: List[str]                # missing must-haves, location and tenure messages
    critical_match_issues: List[str]
    breakdown: ScoreBreakdown

    @property
    def grade(self) -> str:
        """Get letter grade"""
        if self.ats_score >= 90:
            return "A+"
        elif self.ats_score >= 85:
            return "A"
        elif self.ats_score >= 80:
            return "A-"
        elif self.ats_score >= 75:
            return "B+"
        elif self.ats_score >= 70:
            return "B"
        elif self.ats_score >= 65:
            return "B-"
        elif self.ats_score >= 60:
            return "C+"
        elif self.ats_score >= 55:
            return "C"
        else:
            return "F"

    @property
    def pass_threshold(self) -> bool:
        """Does resume likely pass ATS screening?"""
        return self.ats_score >= 65

    def to_dict(self) -> Dict[str, Any]:
        return {
            'atsScore': self.ats_score,
            'keyStrengths': list(self.key_strengths),
            'gaps': list(self.gaps),
            'criticalMatchIssues': list(self.critical_match_issues),
            'breakdown': self.breakdown.to_dict(),
        }
