from enum import Enum

from pydantic import BaseModel, Field


class ActivityType(str, Enum):
    VIEWED_LISTING = "ContactViewedListing"
    SHARED_LISTING = "ContactSharedListing"
    FAVORITED_LISTING = "ContactFavoritedListing"
    REMOVED_FAVORITE_LISTING = "ContactRemovedFavoriteListing"
    VALUED_LISTING = "ContactValuedListing"
    SIGNED_UP = "ContactSignedUp"
    LOGGED_IN = "ContactLoggedIn"
    CREATED_SEARCH = "ContactCreatedSearch"
    REMOVED_SEARCH = "ContactRemovedSearch"
    SEARCHED_LISTINGS = "ContactSearchedListings"


# (label, description) shown in the activity picker
ACTIVITY_LABELS = {
    ActivityType.VIEWED_LISTING: ("Viewed Listing", "Contact viewed a property listing"),
    ActivityType.SHARED_LISTING: ("Shared Listing", "Contact shared a property listing"),
    ActivityType.FAVORITED_LISTING: ("Favorited Listing", "Contact added a listing to favorites"),
    ActivityType.REMOVED_FAVORITE_LISTING: ("Removed Favorite", "Contact removed a listing from favorites"),
    ActivityType.VALUED_LISTING: ("Valued Home", "Contact used listing valuation tool"),
    ActivityType.SIGNED_UP: ("Signed Up", "Contact signed up for an account"),
    ActivityType.LOGGED_IN: ("Logged In", "Contact logged into their account"),
    ActivityType.CREATED_SEARCH: ("Created Search", "Contact created a saved search"),
    ActivityType.REMOVED_SEARCH: ("Removed Search", "Contact removed a saved search"),
    ActivityType.SEARCHED_LISTINGS: ("Searched Listings", "Contact performed a property search"),
}

LISTING_ACTIONS = {
    ActivityType.VIEWED_LISTING,
    ActivityType.SHARED_LISTING,
    ActivityType.FAVORITED_LISTING,
    ActivityType.REMOVED_FAVORITE_LISTING,
    ActivityType.VALUED_LISTING,
}

SEARCH_ACTIONS = {
    ActivityType.CREATED_SEARCH,
    ActivityType.REMOVED_SEARCH,
    ActivityType.SEARCHED_LISTINGS,
}


class ListingAddress(BaseModel):
    street_address: str | None = None


class ListingProperty(BaseModel):
    address: ListingAddress = Field(default_factory=ListingAddress)


class ActivityListing(BaseModel):
    url: str | None = None
    mls_number: str | None = None
    mls: str | None = None
    cover_image_url: str | None = None
    price: int | float | None = None
    property: ListingProperty | None = None


class ActivitySearch(BaseModel):
    query: str | None = None
    location: str | None = None
    min_price: int | float | None = None
    max_price: int | float | None = None
    bedrooms: int | None = None
    bathrooms: float | None = None


class ActivityForm(BaseModel):
    action: ActivityType
    listing: ActivityListing | None = None
    search: ActivitySearch | None = None
    notes: str = ""

    @property
    def requires_listing(self) -> bool:
        return self.action in LISTING_ACTIONS

    @property
    def requires_search(self) -> bool:
        return self.action in SEARCH_ACTIONS


def activity_options() -> list[dict]:
    """Picker entries in display order."""
    options = []
    for action, (label, description) in ACTIVITY_LABELS.items():
        if action in LISTING_ACTIONS:
            requires = "listing"
        elif action in SEARCH_ACTIONS:
            requires = "search"
        else:
            requires = None
        options.append({
            "value": action.value,
            "label": label,
            "description": description,
            "requires": requires,
        })
    return options
