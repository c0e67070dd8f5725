"""Advisory checks shown next to the form. Nothing here blocks a submission."""

from uuid import UUID

from email_validator import EmailNotValidError, validate_email

from app.models.lead import LeadForm


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_uuid(value: str) -> bool:
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def form_warnings(form: LeadForm) -> list[str]:
    warnings = []
    if not is_valid_uuid(form.lead_channel):
        warnings.append(f"Endpoint ID '{form.lead_channel}' is not a valid UUID")
    if form.email and not is_valid_email(form.email):
        warnings.append(f"Email '{form.email}' does not look like an email address")
    for i, assignee in enumerate(form.assignees, start=1):
        if assignee.email and not is_valid_email(assignee.email):
            warnings.append(f"Assignee {i} email '{assignee.email}' does not look like an email address")
    return warnings
