import json
from typing import List, Optional

from jobmatch.ai.completion_client import CompletionRequest, CompletionResponse
from jobmatch.models import ResumeProfile, JobListing


class FakeCompletionService:
    """Records requests and replays canned content (or raises a canned error)"""

    def __init__(self, responses=None, error: Optional[Exception] = None):
        if responses is None:
            responses = []
        elif not isinstance(responses, list):
            responses = [responses]
        self.responses = [r if isinstance(r, str) else json.dumps(r) for r in responses]
        self.error = error
        self.requests: List[CompletionRequest] = []
        self.timeouts: List[Optional[float]] = []

    def complete(self, request: CompletionRequest, timeout: Optional[float] = None) -> CompletionResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        content = self.responses.pop(0) if self.responses else ""
        return CompletionResponse(content=content)


def make_profile(**overrides) -> ResumeProfile:
    data = {
        "skills": ["Python", "AWS", "PostgreSQL"],
        "experience": [
            {
                "title": "Backend Engineer",
                "company": "Acme",
                "duration": "2019-2024",
                "description": "Built Python services on AWS",
            }
        ],
        "education": [{"degree": "BSc", "field": "Computer Science", "institution": "TU Berlin"}],
        "location": "Berlin, Germany",
        "yearsOfExperience": 5,
        "industry": "Software",
    }
    data.update(overrides)
    return ResumeProfile.from_dict(data)


def make_job(job_id="job-1", **overrides) -> JobListing:
    data = {
        "id": job_id,
        "title": "Senior Backend Engineer",
        "company": "Globex",
        "location": "Remote",
        "description": "Build APIs for our platform.",
        "requirements": "5+ years of Python\nExperience with AWS",
        "salaryRange": "$90k - $140k",
    }
    data.update(overrides)
    return JobListing.from_dict(data)
