"""
Capture a lead from the command line, optionally followed by a timeline activity.
Run: python -m scripts.capture_lead --first-name Jane --email jane@example.com --tag Buyer

--state restores a form snapshot copied from the page's URL fragment;
--print-state prints the fragment for the final form so it can be opened in the page.
"""

import argparse
import asyncio
import json
import logging
import sys

import httpx
from dotenv import load_dotenv

from app.config import get_settings
from app.models.activity import ActivityForm, ActivityType
from app.models.history import HistoryEntry
from app.models.lead import Address, Assignee
from app.models.result import SubmissionResult
from app.modules.leads.payload import build_lead_payload
from app.modules.leads.validation import form_warnings
from app.modules.rechat import client as rechat
from app.modules.session.fragment import FormSession, InMemoryUrlState
from app.modules.session.history import JsonFileStore, LeadHistory

load_dotenv()

logger = logging.getLogger(__name__)

CONTACT_OPTIONS = ("first_name", "last_name", "email", "phone_number", "lead_source", "note", "referer_url")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a lead to a Rechat lead channel webhook")
    parser.add_argument("--channel", help="Lead channel (unique endpoint) ID")
    parser.add_argument("--state", default="", help="Form snapshot from a page URL fragment")
    for name in CONTACT_OPTIONS:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name)
    parser.add_argument("--address", help="Full property address")
    parser.add_argument("--tag", action="append", default=[], help="Tag to add (repeatable)")
    parser.add_argument("--assignee-email", help="Email of the agent to assign")
    parser.add_argument("--activity", choices=[a.value for a in ActivityType], help="Activity to post after capture")
    parser.add_argument("--notes", default="", help="Notes for the activity")
    parser.add_argument("--dry-run", action="store_true", help="Print the payload instead of sending it")
    parser.add_argument("--print-state", action="store_true", help="Print the URL fragment of the final form")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def _print_result(result: SubmissionResult) -> None:
    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))


async def run(args: argparse.Namespace, client: httpx.AsyncClient | None = None) -> int:
    session = FormSession(InMemoryUrlState(args.state))
    session.load()

    changes = {name: getattr(args, name) for name in CONTACT_OPTIONS if getattr(args, name) is not None}
    if args.channel:
        changes["lead_channel"] = args.channel
    if args.address:
        changes["address"] = Address(full=args.address)
    if args.assignee_email:
        changes["assignees"] = [Assignee(email=args.assignee_email)]
    form = session.update(**changes)
    for tag in args.tag:
        form.add_tag(tag)
    session.sync()

    for warning in form_warnings(form):
        logger.warning(warning)

    if args.print_state:
        print(session.url_state.get_fragment())

    if args.dry_run:
        print(json.dumps({
            "endpoint": rechat.webhook_url(form.lead_channel),
            "payload": build_lead_payload(form),
        }, indent=2, ensure_ascii=False))
        return 0

    result = await rechat.submit_lead(form, client=client)
    _print_result(result)
    if not result.success:
        return 1

    if result.lead_id:
        settings = get_settings()
        history = LeadHistory(JsonFileStore(settings.history_file), limit=settings.history_limit)
        history.add(HistoryEntry(id=result.lead_id, name=form.display_name, email=form.email, channel=form.lead_channel))

    if args.activity:
        if not result.lead_id:
            print("No lead ID in the response; cannot post activity", file=sys.stderr)
            return 1
        activity = ActivityForm(action=args.activity, notes=args.notes)
        activity_result = await rechat.post_activity(result.lead_id, activity, client=client)
        _print_result(activity_result)
        if not activity_result.success:
            return 1

    return 0


def main(argv: list[str] | None = None, client: httpx.AsyncClient | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    return asyncio.run(run(args, client=client))


if __name__ == "__main__":
    sys.exit(main())
