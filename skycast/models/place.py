"""Candidate place returned by the location search."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Place:
    place_id: str
    display_name: str

    def to_dict(self) -> dict:
        return {"placeId": self.place_id, "displayName": self.display_name}
