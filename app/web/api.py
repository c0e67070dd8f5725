"""
Lead capture API used by the form page: preview/submit leads, post timeline
activities, reassign agents, recent-leads history and form-state snapshots.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.models.activity import ActivityForm, activity_options
from app.models.history import HistoryEntry
from app.models.lead import Assignee, LeadForm
from app.models.result import SubmissionResult
from app.modules.leads.payload import build_lead_payload
from app.modules.leads.validation import form_warnings
from app.modules.rechat import client as rechat
from app.modules.session.fragment import form_from_fragment, form_to_fragment
from app.modules.session.history import JsonFileStore, LeadHistory

logger = logging.getLogger(__name__)

router = APIRouter()


def get_http_client() -> httpx.AsyncClient | None:
    """None lets the Rechat client open a connection per call."""
    return None


def get_history() -> LeadHistory:
    settings = get_settings()
    return LeadHistory(JsonFileStore(settings.history_file), limit=settings.history_limit)


def _result_response(result: SubmissionResult) -> JSONResponse:
    status_code = 200 if result.success else 502
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


# --- Leads ---

@router.post("/leads/preview")
async def preview_lead(form: LeadForm):
    """Show what would be sent, without sending it."""
    return {
        "endpoint": rechat.webhook_url(form.lead_channel),
        "payload": build_lead_payload(form),
        "warnings": form_warnings(form),
    }


@router.post("/leads")
async def submit_lead(
    form: LeadForm,
    client: httpx.AsyncClient | None = Depends(get_http_client),
    history: LeadHistory = Depends(get_history),
):
    result = await rechat.submit_lead(form, client=client)

    if result.success and result.lead_id:
        entry = HistoryEntry(
            id=result.lead_id,
            name=form.display_name,
            email=form.email,
            channel=form.lead_channel,
        )
        await run_in_threadpool(history.add, entry)
        logger.info("Lead %s captured on channel %s", result.lead_id, form.lead_channel)
    elif not result.success:
        logger.warning("Lead submission rejected: %s", result.error)

    return _result_response(result)


# --- Activities & assignees ---

@router.get("/activity-types")
async def list_activity_types():
    return activity_options()


@router.post("/leads/{lead_id}/activities")
async def post_activity(
    lead_id: str,
    activity: ActivityForm,
    client: httpx.AsyncClient | None = Depends(get_http_client),
):
    result = await rechat.post_activity(lead_id, activity, client=client)
    return _result_response(result)


@router.put("/leads/{lead_id}/assignees")
async def update_assignees(
    lead_id: str,
    assignees: list[Assignee],
    client: httpx.AsyncClient | None = Depends(get_http_client),
):
    result = await rechat.update_assignees(lead_id, assignees, client=client)
    return _result_response(result)


# --- History ---

@router.get("/history")
def list_history(history: LeadHistory = Depends(get_history)):
    return [entry.model_dump(mode="json") for entry in history.entries()]


@router.delete("/history")
def clear_history(history: LeadHistory = Depends(get_history)):
    history.clear()
    return {"status": "ok"}


# --- Form state snapshots ---

@router.post("/state/encode")
async def encode_form_state(form: LeadForm):
    return {"fragment": form_to_fragment(form)}


@router.get("/state/decode")
async def decode_form_state(fragment: str = Query("")):
    """Restore a form from a fragment; falls back to the default form."""
    form = form_from_fragment(fragment)
    restored = form is not None
    return {"restored": restored, "form": (form or LeadForm()).model_dump(mode="json")}
