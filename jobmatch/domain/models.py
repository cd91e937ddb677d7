"""Core domain models for postings, profiles, and match results.

This module defines the data structures used throughout the application:
- Posting: a job posting supplied by an external job source
- Profile: the candidate profile a batch is scored against
- MatchResult: the classifier's verdict for one (posting, profile) pair
- MatchedPosting: posting fields merged with match result fields
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

NOT_SPECIFIED = "Not specified"
FALLBACK_REASONING = "Error analyzing job match"


def _unique(values: Iterable[str]) -> List[str]:
    """Strip, drop empties and de-duplicate while keeping first-seen order."""
    seen = []
    for value in values:
        if value is None:
            continue
        stripped = str(value).strip()
        if stripped and stripped not in seen:
            seen.append(stripped)
    return seen


class Posting(BaseModel):
    """Job posting as supplied by the posting source.

    Only title, company and description are read by the matcher. Any other
    display fields (location, url, source, salary...) are carried through
    untouched so they reappear on the MatchedPosting.
    """

    id: str = Field(..., description="Posting identifier from the source")
    title: str = Field("", description="Job title")
    company: str = Field("", description="Company name")
    description: str = Field("", description="Full job description text")

    model_config = {"extra": "allow", "frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """Accept numeric identifiers from sources that use them."""
        if v is None:
            raise ValueError("Posting id is required")
        return str(v)

    @field_validator("title", "company", "description", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        """Treat missing text fields as empty strings."""
        return "" if v is None else str(v)

    @property
    def extra_fields(self) -> Dict[str, Any]:
        """Display fields beyond the ones the matcher consumes."""
        return dict(self.model_extra or {})


class ExperienceEntry(BaseModel):
    """A single role from the candidate's work history."""

    title: Optional[str] = Field(None, description="Role title")
    company: Optional[str] = Field(None, description="Employer name")

    model_config = {"extra": "ignore"}

    @classmethod
    def from_raw(cls, data: Any) -> "ExperienceEntry":
        """Build from a mapping, accepting ``role`` as an alias for ``title``."""
        if isinstance(data, ExperienceEntry):
            return data
        if isinstance(data, str):
            return cls(title=data)
        if not isinstance(data, Mapping):
            raise ValueError(f"Experience entry must be a mapping, got {type(data).__name__}")
        return cls(title=data.get("title") or data.get("role"), company=data.get("company"))

    def describe(self) -> str:
        return f"{self.title or 'Unknown role'} at {self.company or 'Unknown company'}"


class Profile(BaseModel):
    """Candidate profile with every optional field defaulted at construction.

    Use ``Profile.from_raw`` at the system boundary; downstream code relies on
    the ``*_display`` properties instead of re-deriving defaults.
    """

    skills: List[str] = Field(default_factory=list)
    desired_roles: List[str] = Field(default_factory=list, alias="desiredRoles")
    years_of_experience: float = Field(0, ge=0, alias="yearsOfExperience")
    seniority_level: Optional[str] = Field(None, alias="seniorityLevel")
    current_role: Optional[str] = Field(None, alias="currentRole")
    experience: List[ExperienceEntry] = Field(default_factory=list)
    location: Optional[str] = None
    preferred_locations: List[str] = Field(default_factory=list, alias="preferredLocations")

    model_config = {"populate_by_name": True, "frozen": True, "extra": "ignore"}

    @field_validator("skills", "desired_roles", "preferred_locations", mode="before")
    @classmethod
    def normalize_terms(cls, v: Any) -> List[str]:
        """Accept None or a comma-separated string; strip and de-duplicate."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple, set, frozenset)):
            raise ValueError("Expected a list of strings")
        return _unique(v)

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def default_years(cls, v: Any) -> Any:
        return 0 if v in (None, "") else v

    @field_validator("seniority_level", "current_role", "location", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        stripped = str(v).strip()
        return stripped or None

    @field_validator("experience", mode="before")
    @classmethod
    def parse_experience(cls, v: Any) -> List[ExperienceEntry]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError("experience must be a list")
        return [ExperienceEntry.from_raw(item) for item in v]

    @classmethod
    def from_raw(cls, data: Any) -> "Profile":
        """Build a Profile from loosely-typed CV data.

        Unwraps the ``{"cvData": {...}}`` envelope some callers send.

        Raises:
            TypeError: If data is not a mapping or Profile
            pydantic.ValidationError: If a field has an unusable type
        """
        if isinstance(data, Profile):
            return data
        if not isinstance(data, Mapping):
            raise TypeError(f"Profile must be a mapping, got {type(data).__name__}")
        inner = data.get("cvData")
        if isinstance(inner, Mapping):
            data = inner
        return cls.model_validate(dict(data))

    @property
    def skills_display(self) -> str:
        return ", ".join(self.skills) if self.skills else NOT_SPECIFIED

    @property
    def desired_roles_display(self) -> str:
        return ", ".join(self.desired_roles) if self.desired_roles else NOT_SPECIFIED

    @property
    def years_display(self) -> str:
        if not self.years_of_experience:
            return NOT_SPECIFIED
        years = self.years_of_experience
        return str(int(years)) if float(years).is_integer() else str(years)

    @property
    def seniority_display(self) -> str:
        return self.seniority_level or NOT_SPECIFIED

    @property
    def current_role_display(self) -> str:
        return self.current_role or NOT_SPECIFIED

    def recent_experience_display(self, limit: int = 2) -> str:
        if not self.experience:
            return NOT_SPECIFIED
        return ", ".join(entry.describe() for entry in self.experience[:limit])


class MatchResult(BaseModel):
    """Classifier verdict for one posting against one profile.

    Field aliases are the camelCase names used on the wire, both in the
    classifier's JSON response and in notifications.
    """

    match_score: int = Field(..., ge=0, le=100, alias="matchScore")
    matched_skills: List[str] = Field(default_factory=list, alias="matchedSkills")
    missing_skills: List[str] = Field(default_factory=list, alias="missingSkills")
    reasoning: str = ""
    salary_match: Optional[str] = Field(None, alias="salaryMatch")
    location_match: Optional[str] = Field(None, alias="locationMatch")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def fallback(cls) -> "MatchResult":
        """Zero-score result substituted when classification fails."""
        return cls(
            match_score=0,
            matched_skills=[],
            missing_skills=[],
            reasoning=FALLBACK_REASONING,
        )

    @property
    def is_fallback(self) -> bool:
        return self.match_score == 0 and self.reasoning == FALLBACK_REASONING


class MatchedPosting(BaseModel):
    """A posting together with its match result.

    This is the unit returned to callers and streamed to observers.
    """

    posting: Posting
    result: MatchResult

    model_config = {"frozen": True}

    @classmethod
    def merge(cls, posting: Posting, result: MatchResult) -> "MatchedPosting":
        return cls(posting=posting, result=result)

    @property
    def id(self) -> str:
        return self.posting.id

    @property
    def title(self) -> str:
        return self.posting.title

    @property
    def company(self) -> str:
        return self.posting.company

    @property
    def match_score(self) -> int:
        return self.result.match_score

    @property
    def reasoning(self) -> str:
        return self.result.reasoning

    @property
    def matched_skills(self) -> List[str]:
        return self.result.matched_skills

    @property
    def missing_skills(self) -> List[str]:
        return self.result.missing_skills

    def to_payload(self) -> Dict[str, Any]:
        """Flatten into the single camelCase record observers receive.

        Result fields win over posting fields of the same name.
        """
        payload = self.posting.model_dump()
        payload.update(self.result.model_dump(by_alias=True, exclude_none=True))
        return payload
