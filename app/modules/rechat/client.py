"""
Rechat API client: lead webhook, timeline activities and assignee updates.
Every call is a single attempt; responses are normalized into SubmissionResult
and never raised to the caller.
"""

import json
import logging
from typing import Any, Iterable

import httpx

from app.config import get_settings
from app.models.activity import ActivityForm
from app.models.lead import Assignee, LeadForm
from app.models.result import SubmissionResult
from app.modules.leads.payload import (
    build_activity_payload,
    build_assignees_payload,
    build_lead_payload,
)

logger = logging.getLogger(__name__)


def webhook_url(channel_id: str) -> str:
    return f"{get_settings().rechat_api_base}/leads/channels/{channel_id}/webhook"


def timeline_url(lead_id: str) -> str:
    return f"{get_settings().rechat_api_base}/leads/{lead_id}/timeline"


def assignees_url(lead_id: str) -> str:
    return f"{get_settings().rechat_api_base}/leads/{lead_id}/assignees"


def _parse_body(text: str) -> Any:
    if not text:
        return {"message": "Empty response body"}
    try:
        return json.loads(text)
    except ValueError:
        return {"rawResponse": text}


def normalize_response(
    response: httpx.Response,
    operation: str,
    endpoint: str,
    payload: Any,
    success_message: str,
) -> SubmissionResult:
    """Map an HTTP response to a SubmissionResult (204, 2xx with body, or rejection)."""
    if response.status_code == 204:
        return SubmissionResult(
            success=True,
            message=success_message,
            status_code=204,
            endpoint=endpoint,
            payload=payload,
        )

    body = _parse_body(response.text)
    logger.info("%s response %s: %s", operation, response.status_code, response.text[:500])

    if response.is_success:
        return SubmissionResult(
            success=True,
            message=success_message,
            status_code=response.status_code,
            endpoint=endpoint,
            payload=payload,
            response=body,
        )

    detail = json.dumps(body, separators=(",", ":"), ensure_ascii=False)
    return SubmissionResult(
        success=False,
        error=f"{operation} failed with status {response.status_code}: {detail}",
        status_code=response.status_code,
        endpoint=endpoint,
        payload=payload,
        response=body,
    )


async def _send(
    method: str,
    endpoint: str,
    payload: Any,
    operation: str,
    success_message: str,
    client: httpx.AsyncClient | None = None,
) -> SubmissionResult:
    logger.info("%s: %s %s", operation, method, endpoint)
    logger.info("Payload: %s", json.dumps(payload, indent=2, ensure_ascii=False))

    try:
        if client is not None:
            response = await client.request(method, endpoint, json=payload)
        else:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.request(method, endpoint, json=payload)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.exception("%s error for %s", operation, endpoint)
        description = str(e) or e.__class__.__name__
        return SubmissionResult(
            success=False,
            error=f"{operation} failed: {description}",
            endpoint=endpoint,
            payload=payload,
            details={"endpoint": endpoint, "error": repr(e)},
        )

    return normalize_response(response, operation, endpoint, payload, success_message)


async def submit_lead(form: LeadForm, client: httpx.AsyncClient | None = None) -> SubmissionResult:
    """POST the filtered lead to the channel webhook."""
    return await _send(
        "POST",
        webhook_url(form.lead_channel),
        build_lead_payload(form),
        operation="Submission",
        success_message="Lead submitted successfully",
        client=client,
    )


async def post_activity(
    lead_id: str,
    activity: ActivityForm,
    client: httpx.AsyncClient | None = None,
) -> SubmissionResult:
    return await _send(
        "POST",
        timeline_url(lead_id),
        build_activity_payload(activity),
        operation="Activity",
        success_message="Activity posted successfully",
        client=client,
    )


async def update_assignees(
    lead_id: str,
    assignees: Iterable[Assignee],
    client: httpx.AsyncClient | None = None,
) -> SubmissionResult:
    """Replace the lead's assignees. An empty list clears them."""
    return await _send(
        "PUT",
        assignees_url(lead_id),
        build_assignees_payload(assignees),
        operation="Reassignment",
        success_message="Assignees updated successfully",
        client=client,
    )
