"""
Form <-> URL fragment synchronization.

The fragment is read once, at load time. After that every edit is written
back to it, so the current form can be bookmarked or shared.
"""

import logging
from typing import Protocol

from pydantic import ValidationError

from app.models.lead import LeadForm
from app.modules.session.codec import StateDecodeError, decode_state, encode_state

logger = logging.getLogger(__name__)


class UrlState(Protocol):
    """Where the page keeps its location fragment."""

    def get_fragment(self) -> str:
        ...

    def set_fragment(self, fragment: str) -> None:
        ...


class InMemoryUrlState:
    def __init__(self, fragment: str = ""):
        self.fragment = fragment

    def get_fragment(self) -> str:
        return self.fragment

    def set_fragment(self, fragment: str) -> None:
        self.fragment = fragment


def form_to_fragment(form: LeadForm) -> str:
    return encode_state(form.model_dump(mode="json"))


def form_from_fragment(fragment: str) -> LeadForm | None:
    """Decode a snapshot; returns None (and logs) when it can't be restored."""
    if not fragment.strip().lstrip("#"):
        return None
    try:
        return LeadForm.model_validate(decode_state(fragment))
    except (StateDecodeError, ValidationError) as e:
        logger.warning("Ignoring undecodable form state in URL fragment: %s", e)
        return None


class FormSession:
    def __init__(self, url_state: UrlState, form: LeadForm | None = None):
        self.url_state = url_state
        self.form = form or LeadForm()
        self.loaded = False

    def load(self) -> LeadForm:
        restored = form_from_fragment(self.url_state.get_fragment())
        if restored is not None:
            self.form = restored
        self.loaded = True
        return self.form

    def update(self, **changes) -> LeadForm:
        """Apply field changes, then mirror the form into the fragment."""
        self.form = LeadForm.model_validate({**self.form.model_dump(), **changes})
        self.sync()
        return self.form

    def sync(self) -> None:
        # Writing before load() would clobber the snapshot we are about to read
        if self.loaded:
            self.url_state.set_fragment(form_to_fragment(self.form))
