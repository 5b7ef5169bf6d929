"""
Email template rendering for RecruitDesk.

Templates use ``{{variable}}`` placeholders. Variables come from the
candidate, job and client, with bracketed defaults for anything unknown so
a rendered draft shows what still needs filling in.
"""

import re
from typing import Mapping, Optional

from recruitdesk.data.models import Candidate, Client, Job

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")

DEFAULT_EMAIL_VARIABLES: dict[str, str] = {
    "recruiterName": "HR Team",
    "recruiterEmail": "hr@company.com",
    "recruiterPhone": "+1 (555) 123-4567",
    "reviewDays": "5-7",
    "retentionPeriod": "6",
    "interviewDate": "[Interview Date]",
    "interviewTime": "[Interview Time]",
    "interviewLocation": "[Interview Location]",
    "startDate": "[Start Date]",
    "salary": "[Salary]",
    "benefits": "[Benefits]",
}


def replace_template_variables(template: str, variables: Mapping[str, Optional[str]]) -> str:
    """
    Substitute ``{{name}}`` placeholders.

    Placeholders with no value (missing or None) are left as they are.
    """

    def _sub(match: re.Match) -> str:
        value = variables.get(match.group(1))
        return match.group(0) if value is None else str(value)

    return _PLACEHOLDER.sub(_sub, template)


def find_template_variables(template: str) -> list[str]:
    """Placeholder names used in ``template``, in order of first use."""
    seen: dict[str, None] = {}
    for name in _PLACEHOLDER.findall(template):
        seen.setdefault(name, None)
    return list(seen)


def extract_email_variables(
    candidate: Candidate,
    job: Optional[Job] = None,
    client: Optional[Client] = None,
    custom: Optional[Mapping[str, str]] = None,
) -> dict[str, Optional[str]]:
    """Build the variable map for a candidate email."""
    variables: dict[str, Optional[str]] = {
        "firstName": candidate.first_name,
        "lastName": candidate.last_name,
        "email": candidate.email,
        "phone": candidate.phone,
        "jobTitle": job.title if job and job.title else "[Job Title]",
        "department": job.department if job and job.department else "[Department]",
        "companyName": client.company_name if client else "[Company Name]",
        **DEFAULT_EMAIL_VARIABLES,
    }

    if job and job.salary_range:
        variables["salary"] = job.salary_range.display_string

    if custom:
        variables.update(custom)
    return variables


def apply_email_template(
    subject: str,
    body: str,
    variables: Mapping[str, Optional[str]],
) -> tuple[str, str]:
    """Render subject and body with the same variables."""
    return (
        replace_template_variables(subject, variables),
        replace_template_variables(body, variables),
    )
