from pydantic import BaseModel, Field, field_validator

from app.config import get_settings


class Address(BaseModel):
    """Structured postal address, every part optional."""
    building: str | None = None
    house_num: str | None = None
    predir: str | None = None
    qual: str | None = None
    pretype: str | None = None
    name: str | None = None
    suftype: str | None = None
    sufdir: str | None = None
    ruralroute: str | None = None
    extra: str | None = None
    city: str | None = None
    state: str | None = None
    county: str | None = None
    country: str | None = None
    postcode: str | None = None
    box: str | None = None
    unit: str | None = None
    line1: str | None = None
    line2: str | None = None
    full: str | None = None


class Assignee(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    mls: str = ""  # MLS name, e.g. "nneren"
    mls_id: str = ""  # agent's ID within that MLS

    def is_identifiable(self) -> bool:
        return bool(self.first_name or self.last_name or self.email or self.phone_number)


class LeadListing(BaseModel):
    price: int | float | None = None
    mls_number: str | None = None
    mls: str | None = None
    url: str | None = None
    address: Address | None = None


class LeadSearch(BaseModel):
    location: str | None = None
    minimum_price: int | float | None = None
    maximum_price: int | float | None = None
    minimum_bedrooms: int | None = None
    maximum_bedrooms: int | None = None
    minimum_bathrooms: float | None = None
    maximum_bathrooms: float | None = None
    property_types: list[str] = Field(default_factory=list)


def _default_tags() -> list[str]:
    tag = get_settings().default_tag
    return [tag] if tag else []


class LeadForm(BaseModel):
    """In-progress capture form. Everything except the channel is optional."""
    lead_channel: str = Field(default_factory=lambda: get_settings().default_lead_channel)
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    tags: list[str] = Field(default_factory=_default_tags)
    lead_source: str = Field(default_factory=lambda: get_settings().default_lead_source)
    note: str = ""
    referer_url: str = ""
    address: Address | None = None
    assignees: list[Assignee] = Field(default_factory=list)
    listing: LeadListing | None = None
    search: LeadSearch | None = None

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, tags: list[str]) -> list[str]:
        unique: list[str] = []
        for tag in tags:
            tag = tag.strip()
            if tag and tag not in unique:
                unique.append(tag)
        return unique

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def add_tag(self, tag: str) -> None:
        tag = tag.strip()
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        tag = tag.strip()
        if tag in self.tags:
            self.tags.remove(tag)

    def clear_contact(self) -> None:
        """Reset per-contact fields; channel, tags, source and assignees stay."""
        self.first_name = ""
        self.last_name = ""
        self.email = ""
        self.phone_number = ""
        self.note = ""
        self.referer_url = ""
        self.address = None
        self.listing = None
        self.search = None
