"""Static directory content: city tabs, places and detail-page arguments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from discover.i18n import StringTable

GRID_BREAKPOINT_PX = 600


class City(Enum):
    DUBAI = "dubai"
    ABU_DHABI = "abu_dhabi"
    SHARJAH = "sharjah"

    @property
    def label_key(self) -> str:
        return self.value


CITY_TABS: Tuple[City, ...] = (City.DUBAI, City.ABU_DHABI, City.SHARJAH)


@dataclass(frozen=True)
class Place:
    title_key: str
    description_key: str
    image: str  # relative to the assets dir


_PLACES: Dict[City, Tuple[Place, ...]] = {
    City.DUBAI: (
        Place("burj_khalifa", "burj_khalifa_description",
              "christoph-schulz-7tb-b37yHx4-unsplash-opt.jpg"),
        Place("dubai_mall", "dubai_mall_description",
              "david-rodrigo-kZ1zThg6G40-unsplash-opt.jpg"),
        Place("palm_jumeirah", "palm_jumeirah_description",
              "garo-janboulian-qCSup4ARRg8-unsplash-opt.jpg"),
    ),
    City.ABU_DHABI: (),
    City.SHARJAH: (),
}


def places_for(city: City) -> Tuple[Place, ...]:
    return _PLACES[city]


def grid_columns(width: int) -> int:
    """Two-column grid on wide screens, single list otherwise."""
    return 2 if width > GRID_BREAKPOINT_PX else 1


@dataclass(frozen=True)
class DetailArgs:
    """
    Arguments for the detail page

    Title and description are looked up as string keys against whatever
    table is active when the page is drawn, so a language switch while
    the page is open re-labels it. A value that is not a key is shown as
    given. Missing values fall back to the no_title / empty_description
    placeholders; a missing image is reported by image_label().
    """

    title_key: Optional[str] = None
    description_key: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_place(cls, place: Place) -> "DetailArgs":
        return cls(place.title_key, place.description_key, place.image)

    @classmethod
    def from_mapping(cls, args: Optional[Mapping[str, str]]) -> "DetailArgs":
        args = args or {}
        return cls(args.get("title"), args.get("description"), args.get("image") or args.get("imageUrl"))

    @staticmethod
    def _text(strings: StringTable, value: Optional[str], placeholder: str) -> str:
        if not value:
            return strings.get(placeholder)
        try:
            return strings.get(value)
        except KeyError:
            return value

    def title(self, strings: StringTable) -> str:
        return self._text(strings, self.title_key, "no_title")

    def description(self, strings: StringTable) -> str:
        return self._text(strings, self.description_key, "empty_description")

    def image_label(self, strings: StringTable) -> Optional[str]:
        """Text drawn in place of the header image, None when there is an image."""
        return None if self.image else strings.no_image_found
