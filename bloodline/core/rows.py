"""Input row schemas.

Rows arrive as plain mappings from the data-fetch collaborator (a JSON
snapshot, a database view or a GEDCOM import). They are validated here before
the graph builder reads them; a row that fails validation is dropped by the
builder rather than aborting the whole load.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _as_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    raise ValueError(f"identifier must be a string or an integer, got {type(value).__name__}")


class _Row(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)


class PersonRow(_Row):
    """A person record as stored upstream."""

    id: str
    is_male: Optional[bool] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    is_alive: Optional[bool] = None
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    death_year: Optional[int] = None
    death_month: Optional[int] = None
    death_day: Optional[int] = None
    birth_place: Optional[str] = None
    birth_country: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _check_id(cls, value: Any) -> str:
        ident = _as_id(value)
        if ident is None:
            raise ValueError("person id is required")
        return ident


class SpouseLinkRow(_Row):
    """A union between two persons; either side may be unknown."""

    id: str
    partner_a_id: Optional[str] = None
    partner_b_id: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _check_id(cls, value: Any) -> str:
        ident = _as_id(value)
        if ident is None:
            raise ValueError("spouse link id is required")
        return ident

    @field_validator('partner_a_id', 'partner_b_id', mode='before')
    @classmethod
    def _check_partner(cls, value: Any) -> Optional[str]:
        return _as_id(value)

    def partners(self) -> list[str]:
        """Known partner ids, side A first."""
        return [p for p in (self.partner_a_id, self.partner_b_id) if p]


class ChildLinkRow(_Row):
    """Filiation: a child attached to the union of its parents."""

    child_id: str
    spouse_link_id: str

    @field_validator('child_id', 'spouse_link_id', mode='before')
    @classmethod
    def _check_ids(cls, value: Any) -> str:
        ident = _as_id(value)
        if ident is None:
            raise ValueError("child_id and spouse_link_id are required")
        return ident
