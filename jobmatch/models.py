# jobmatch/models.py
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from jobmatch.exceptions import InvalidInputError
from jobmatch.utils import to_number


def _text(value: Any) -> str:
    """None-safe string coercion for loosely-typed payloads"""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class ExperienceEntry:
    """Work experience entry"""
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExperienceEntry':
        return cls(
            title=_text(data.get('title')),
            company=_text(data.get('company')),
            duration=_text(data.get('duration')),
            description=_text(data.get('description')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'company': self.company,
            'duration': self.duration,
            'description': self.description,
        }


@dataclass(frozen=True)
class EducationEntry:
    """Education entry"""
    degree: str = ""
    field: str = ""
    institution: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EducationEntry':
        return cls(
            degree=_text(data.get('degree')),
            field=_text(data.get('field')),
            institution=_text(data.get('institution')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'degree': self.degree,
            'field': self.field,
            'institution': self.institution,
        }


@dataclass(frozen=True)
class ResumeProfile:
    """Candidate profile as assembled by the profile store"""
    skills: List[str] = field(default_factory=list)
    experience: List[ExperienceEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    location: Optional[str] = None
    years_of_experience: float = 0
    industry: Optional[str] = None
    current_salary: Optional[float] = None

    @property
    def current_title(self) -> Optional[str]:
        """Most recent role title (first experience entry)"""
        if self.experience and self.experience[0].title:
            return self.experience[0].title
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResumeProfile':
        """Build from the camelCase JSON contract (snake_case also accepted)"""
        if not isinstance(data, dict):
            raise InvalidInputError("Profile payload must be an object")

        years = data.get('yearsOfExperience', data.get('years_of_experience'))
        salary = data.get('currentSalary', data.get('current_salary'))

        return cls(
            skills=[_text(s) for s in data.get('skills') or [] if s is not None],
            experience=[
                ExperienceEntry.from_dict(e)
                for e in data.get('experience') or [] if isinstance(e, dict)
            ],
            education=[
                EducationEntry.from_dict(e)
                for e in data.get('education') or [] if isinstance(e, dict)
            ],
            location=data.get('location') or None,
            years_of_experience=to_number(years) or 0,
            industry=data.get('industry') or None,
            current_salary=to_number(salary),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'skills': list(self.skills),
            'experience': [e.to_dict() for e in self.experience],
            'education': [e.to_dict() for e in self.education],
            'location': self.location,
            'yearsOfExperience': self.years_of_experience,
            'industry': self.industry,
            'currentSalary': self.current_salary,
        }

    def __repr__(self):
        return (
            f"<ResumeProfile: {self.current_title or 'no title'} | "
            f"{len(self.skills)} skills | {self.years_of_experience}y>"
        )


@dataclass(frozen=True)
class JobListing:
    """Job listing as supplied by the job search layer"""
    id: str
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    requirements: str = ""
    salary_range: Optional[str] = None
    posted_date: str = ""
    source: str = ""
    industry: Optional[str] = None
    experience_level: Optional[str] = None

    @property
    def full_text(self) -> str:
        """Title, requirements and description joined for scanning"""
        return f"{self.title} {self.requirements} {self.description}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JobListing':
        if not isinstance(data, dict):
            raise InvalidInputError("Job payload must be an object")

        job_id = data.get('id')
        if job_id is None or _text(job_id).strip() == "":
            raise InvalidInputError("Job listing is missing an id")

        description = data.get('description')
        if description is None:
            description = data.get('job_description')

        return cls(
            id=_text(job_id),
            title=_text(data.get('title')),
            company=_text(data.get('company')),
            location=_text(data.get('location')),
            description=_text(description),
            requirements=_text(data.get('requirements')),
            salary_range=_text(data.get('salaryRange', data.get('salary_range'))) or None,
            posted_date=_text(data.get('postedDate', data.get('posted_date'))),
            source=_text(data.get('source')),
            industry=data.get('industry') or None,
            experience_level=data.get('experienceLevel', data.get('experience_level')) or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'company': self.company,
            'location': self.location,
            'description': self.description,
            'requirements': self.requirements,
            'salaryRange': self.salary_range,
            'postedDate': self.posted_date,
            'source': self.source,
            'industry': self.industry,
            'experienceLevel': self.experience_level,
        }

    def __repr__(self):
        return f"<JobListing: {self.id} | {self.title} @ {self.company}>"
