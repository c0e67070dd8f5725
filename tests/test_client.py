import asyncio

import httpx

from app.models.activity import ActivityForm, ActivityListing, ActivityType
from app.models.lead import Assignee, LeadForm
from app.models.result import SubmissionResult
from app.modules.rechat import client as rechat

CHANNEL = "54a57918-ad9b-4adb-a35a-9232bf78d734"


def _submit(rechat_api, form):
    async def go():
        async with rechat_api.client() as client:
            return await rechat.submit_lead(form, client=client)
    return asyncio.run(go())


def test_submit_posts_filtered_payload_to_channel_webhook(rechat_api):
    form = LeadForm(lead_channel=CHANNEL, first_name="Jane", email="", tags=["Lead"])

    _submit(rechat_api, form)

    request = rechat_api.requests[-1]
    assert request.method == "POST"
    assert str(request.url) == f"https://api.rechat.com/leads/channels/{CHANNEL}/webhook"
    assert request.headers["content-type"] == "application/json"
    assert rechat_api.last_body == {"first_name": "Jane", "tag": ["Lead"], "lead_source": "real_estate_website"}


def test_204_reports_success_without_body(rechat_api):
    rechat_api.respond(204)

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is True
    assert result.status_code == 204
    assert result.response is None
    assert result.message == "Lead submitted successfully"
    assert result.lead_id is None


def test_2xx_json_body_is_parsed_and_lead_id_extracted(rechat_api):
    rechat_api.respond(200, json_body={"data": {"id": "lead-123", "type": "lead"}})

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is True
    assert result.response == {"data": {"id": "lead-123", "type": "lead"}}
    assert result.lead_id == "lead-123"


def test_2xx_plain_text_body_is_wrapped(rechat_api):
    rechat_api.respond(200, text="Accepted")

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is True
    assert result.response == {"rawResponse": "Accepted"}


def test_2xx_empty_body(rechat_api):
    rechat_api.respond(201)

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is True
    assert result.response == {"message": "Empty response body"}


def test_404_reports_failure_with_status_and_body(rechat_api):
    rechat_api.respond(404, json_body={"message": "not found"})

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is False
    assert result.status_code == 404
    assert "404" in result.error
    assert '{"message":"not found"}' in result.error
    assert result.error.startswith("Submission failed with status 404")


def test_non_json_rejection_keeps_raw_text(rechat_api):
    rechat_api.respond(500, text="Internal Server Error")

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is False
    assert result.response == {"rawResponse": "Internal Server Error"}
    assert "Internal Server Error" in result.error


def test_transport_failure_is_reported_not_raised(rechat_api):
    rechat_api.error = httpx.ConnectError("connection refused")

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.success is False
    assert result.status_code is None
    assert result.error == "Submission failed: connection refused"
    assert result.details["endpoint"].endswith(f"/leads/channels/{CHANNEL}/webhook")
    assert len(rechat_api.requests) == 1  # no retry


def test_post_activity_hits_timeline(rechat_api):
    rechat_api.respond(200, json_body={"ok": True})
    activity = ActivityForm(
        action=ActivityType.FAVORITED_LISTING,
        listing=ActivityListing(mls_number="5039447", mls="nneren"),
        notes="Loved the kitchen",
    )

    async def go():
        async with rechat_api.client() as client:
            return await rechat.post_activity("lead-123", activity, client=client)

    result = asyncio.run(go())

    request = rechat_api.requests[-1]
    assert request.method == "POST"
    assert request.url.path == "/leads/lead-123/timeline"
    assert rechat_api.last_body == {
        "action": "ContactFavoritedListing",
        "listing": {"mls_number": "5039447", "mls": "nneren"},
        "notes": "Loved the kitchen",
    }
    assert result.success is True
    assert result.message == "Activity posted successfully"


def test_activity_rejection_uses_activity_wording(rechat_api):
    rechat_api.respond(400, json_body={"message": "Invalid action"})

    async def go():
        async with rechat_api.client() as client:
            return await rechat.post_activity("lead-123", ActivityForm(action="ContactLoggedIn"), client=client)

    result = asyncio.run(go())

    assert result.success is False
    assert result.error.startswith("Activity failed with status 400")
    assert "Invalid action" in result.error


def test_update_assignees_puts_filtered_list(rechat_api):
    assignees = [
        Assignee(first_name="Sam", email="sam@example.com", mls_id="A1"),
        Assignee(),
    ]

    async def go():
        async with rechat_api.client() as client:
            return await rechat.update_assignees("lead-123", assignees, client=client)

    result = asyncio.run(go())

    request = rechat_api.requests[-1]
    assert request.method == "PUT"
    assert request.url.path == "/leads/lead-123/assignees"
    assert rechat_api.last_body == [{"first_name": "Sam", "email": "sam@example.com", "mls_id": "A1"}]
    assert result.success is True


def _result_with(body):
    return SubmissionResult(success=True, endpoint="x", response=body)


def test_lead_id_lookup_variants():
    assert _result_with({"id": "a"}).lead_id == "a"
    assert _result_with({"lead": {"id": "b"}}).lead_id == "b"
    assert _result_with({"rawResponse": "ok"}).lead_id is None
    assert _result_with(["not", "a", "dict"]).lead_id is None


def test_rejection_body_is_compact_and_keeps_unicode(rechat_api):
    rechat_api.respond(422, json_body={"message": "Canal inválido", "fields": ["email"]})

    result = _submit(rechat_api, LeadForm(lead_channel=CHANNEL))

    assert result.error == 'Submission failed with status 422: {"message":"Canal inválido","fields":["email"]}'
