"""
Payload builder: turns the sparse capture form into the minimal JSON bodies
the Rechat webhook, timeline and assignee endpoints accept.
Absent values (None, "", empty containers) never reach the wire.
"""

from typing import Any, Iterable

from app.models.activity import ActivityForm
from app.models.lead import Assignee, LeadForm


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (dict, list)) and not value)


def prune(value: Any) -> Any:
    """Recursively drop absent values. 0 and False count as present."""
    if isinstance(value, dict):
        pruned = {k: prune(v) for k, v in value.items()}
        return {k: v for k, v in pruned.items() if not _is_empty(v)}
    if isinstance(value, (list, tuple, set)):
        pruned = [prune(v) for v in value]
        return [v for v in pruned if not _is_empty(v)]
    return value


def build_assignees_payload(assignees: Iterable[Assignee]) -> list[dict]:
    """Keep assignees that name a person (name, email or phone); mls fields alone don't count."""
    return [prune(a.model_dump(mode="json")) for a in assignees if a.is_identifiable()]


def build_lead_payload(form: LeadForm) -> dict:
    """Webhook body for a lead. The channel ID travels in the URL, never in the body."""
    payload = {
        "first_name": form.first_name,
        "last_name": form.last_name,
        "email": form.email,
        "phone_number": form.phone_number,
        "tag": list(form.tags),
        "lead_source": form.lead_source,
        "note": form.note,
        "address": form.address.model_dump(mode="json") if form.address else None,
        "referer_url": form.referer_url,
        "assignees": build_assignees_payload(form.assignees),
        "listing": form.listing.model_dump(mode="json") if form.listing else None,
        "search": form.search.model_dump(mode="json") if form.search else None,
    }
    return prune(payload)


def build_activity_payload(activity: ActivityForm) -> dict:
    """Timeline body: listing/search details only travel with the actions that use them."""
    payload: dict[str, Any] = {"action": activity.action.value}

    if activity.requires_listing and activity.listing:
        listing = prune(activity.listing.model_dump(mode="json"))
        if listing:
            payload["listing"] = listing

    if activity.requires_search and activity.search:
        search = prune(activity.search.model_dump(mode="json"))
        if search:
            payload["search"] = search

    if activity.notes:
        payload["notes"] = activity.notes

    return payload
