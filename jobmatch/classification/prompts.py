"""Prompt construction for posting-versus-profile classification."""

from jobmatch.domain.models import Posting, Profile

DEFAULT_DESCRIPTION_LIMIT = 1500

MATCH_PROMPT_TEMPLATE = """Analyze how well this job matches the candidate's profile.

JOB POSTING:
Title: {title}
Company: {company}
Description: {description}

CANDIDATE PROFILE:
Skills: {skills}
Desired Roles: {desired_roles}
Years of Experience: {years}
Seniority Level: {seniority}
Current Role: {current_role}
Recent Experience: {experience}

ANALYSIS INSTRUCTIONS:
1. Calculate match score (0-100) based on:
   - Skills overlap (40% weight) - count how many candidate skills appear in job description
   - Role title match (30% weight) - does job title align with desired roles?
   - Experience level fit (20% weight) - is seniority appropriate?
   - Job description alignment (10% weight) - general fit

2. Be GENEROUS with scoring:
   - If candidate has 50%+ of required skills: score >= 60
   - If job title matches desired roles: add 20 points
   - If seniority matches: add 15 points

3. Identify:
   - Which candidate skills match job requirements
   - Which required skills candidate is missing
   - Overall fit reasoning

Respond ONLY with valid JSON (no markdown, no backticks):
{{
  "matchScore": 85,
  "matchedSkills": ["Node.js", "TypeScript", "React"],
  "missingSkills": ["Kubernetes", "GraphQL"],
  "reasoning": "Strong match - candidate has 8/10 required skills and relevant experience",
  "salaryMatch": "Competitive",
  "locationMatch": "Perfect"
}}"""


def truncate_description(description: str, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> str:
    """Return at most ``limit`` leading characters of a description."""
    if not description:
        return "No description available"
    return description[:limit]


def build_match_prompt(
    posting: Posting, profile: Profile, description_limit: int = DEFAULT_DESCRIPTION_LIMIT
) -> str:
    """Render the classification prompt for one posting and profile.

    Args:
        posting: Posting to score; its description is truncated
        profile: Candidate profile; defaults come from its display helpers
        description_limit: Maximum description characters sent out

    Returns:
        Prompt text ready for the classifier
    """
    return MATCH_PROMPT_TEMPLATE.format(
        title=posting.title,
        company=posting.company,
        description=truncate_description(posting.description, description_limit),
        skills=profile.skills_display,
        desired_roles=profile.desired_roles_display,
        years=profile.years_display,
        seniority=profile.seniority_display,
        current_role=profile.current_role_display,
        experience=profile.recent_experience_display(),
    )
