"""Smoke tests for the capture_lead script."""

import asyncio
import json

from app.models.lead import LeadForm
from app.modules.session.fragment import form_from_fragment, form_to_fragment
from app.modules.session.history import JsonFileStore, LeadHistory
from scripts.capture_lead import main, parse_args, run

CHANNEL = "54a57918-ad9b-4adb-a35a-9232bf78d734"


def _run_with(rechat_api, argv):
    async def go():
        async with rechat_api.client() as client:
            return await run(parse_args(argv), client=client)
    return asyncio.run(go())


def test_dry_run_prints_payload(capsys, rechat_api):
    code = main([
        "--channel", CHANNEL,
        "--first-name", "Jane",
        "--tag", "Lead",
        "--tag", "Lead",
        "--address", "25 Oakledge Drive",
        "--dry-run",
    ])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["endpoint"].endswith(f"/leads/channels/{CHANNEL}/webhook")
    assert out["payload"]["first_name"] == "Jane"
    assert out["payload"]["tag"] == ["website_inquiry", "Lead"]
    assert out["payload"]["address"] == {"full": "25 Oakledge Drive"}
    assert rechat_api.requests == []


def test_state_is_restored_and_printed(capsys):
    snapshot = form_to_fragment(LeadForm(lead_channel=CHANNEL, first_name="Zoë", note="from the page"))

    code = main(["--state", snapshot, "--last-name", "Ng", "--print-state", "--dry-run"])

    assert code == 0
    fragment = capsys.readouterr().out.splitlines()[0]
    form = form_from_fragment(fragment)
    assert (form.first_name, form.last_name, form.note) == ("Zoë", "Ng", "from the page")


def test_submit_records_history_and_posts_activity(capsys, rechat_api, settings_env):
    rechat_api.respond(200, json_body={"data": {"id": "lead-9"}})

    code = _run_with(rechat_api, [
        "--channel", CHANNEL,
        "--email", "jane@example.com",
        "--activity", "ContactSignedUp",
        "--notes", "Signed up from the CLI",
    ])

    assert code == 0
    assert [r.url.path for r in rechat_api.requests] == [
        f"/leads/channels/{CHANNEL}/webhook",
        "/leads/lead-9/timeline",
    ]
    assert rechat_api.last_body == {"action": "ContactSignedUp", "notes": "Signed up from the CLI"}

    history = LeadHistory(JsonFileStore(settings_env.history_file))
    assert [e.id for e in history.entries()] == ["lead-9"]


def test_rejected_submission_exits_non_zero(capsys, rechat_api, settings_env):
    rechat_api.respond(403, json_body={"message": "Invalid channel"})

    code = _run_with(rechat_api, ["--channel", CHANNEL])

    assert code == 1
    out = json.loads(capsys.readouterr().out)
    assert out["success"] is False
    assert "Invalid channel" in out["error"]


def test_activity_without_lead_id_fails(capsys, rechat_api, settings_env):
    rechat_api.respond(204)

    code = _run_with(rechat_api, ["--channel", CHANNEL, "--activity", "ContactLoggedIn"])

    assert code == 1
    assert "No lead ID" in capsys.readouterr().err
