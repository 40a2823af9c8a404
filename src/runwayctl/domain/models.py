"""Entity, role template and scenario models.

Model attributes map 1:1 to keys in the scenario YAML file.  Month
fields accept either a :class:`CalendarMonth` or its ``"YYYY-MM"`` key
and always serialize back to the key.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer, model_validator

from runwayctl.domain.calendar import CalendarMonth, from_key, to_key


def _coerce_month(value: Any) -> Any:
    if isinstance(value, str):
        return from_key(value)
    return value


MonthField = Annotated[
    CalendarMonth,
    BeforeValidator(_coerce_month),
    PlainSerializer(to_key, return_type=str),
]

# Keyword -> bar colour, first match wins.
_POSITION_COLORS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("design",), "#EC4899"),
    (("engineer", "developer"), "#3B82F6"),
    (("product",), "#8B5CF6"),
    (("marketing",), "#F59E0B"),
    (("sales",), "#10B981"),
    (("ops", "operations"), "#6366F1"),
)
DEFAULT_BAR_COLOR = "#3B82F6"


class Entity(BaseModel):
    """A scheduled headcount slot: a named hire or a placeholder.

    An entity without ``start`` is never laid out and never burns cash.
    An entity without ``end`` is open-ended.
    """

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    salary: float | None = Field(default=None, ge=0)
    start: MonthField | None = None
    end: MonthField | None = None
    picture_url: str | None = None
    linkedin_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_split_dates(cls, data: Any) -> Any:
        """Accept ``start_month``/``start_year`` pairs from flat exports."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for edge in ("start", "end"):
            month = data.pop(f"{edge}_month", None)
            year = data.pop(f"{edge}_year", None)
            if data.get(edge) is None and month and year:
                data[edge] = CalendarMonth(year=int(year), month=int(month))
        return data

    @property
    def display_name(self) -> str:
        """Full name if known, else the role label, else ``"TBD"``."""
        if self.first_name or self.last_name:
            return f"{self.first_name or ''} {self.last_name or ''}".strip()
        return self.position or "TBD"

    @property
    def bar_color(self) -> str:
        position = (self.position or "").lower()
        for keywords, color in _POSITION_COLORS:
            if any(word in position for word in keywords):
                return color
        return DEFAULT_BAR_COLOR

    @property
    def has_inverted_range(self) -> bool:
        """True when both edges are set and ``end`` precedes ``start``."""
        return self.start is not None and self.end is not None and self.end < self.start


class RoleTemplate(BaseModel):
    """Immutable catalog entry dragged onto the timeline to add a hire."""

    model_config = {"frozen": True}

    id: str
    name: str
    default_salary: float = Field(ge=0)
    color: str


ROLE_TEMPLATES: tuple[RoleTemplate, ...] = (
    RoleTemplate(id="jr-swe", name="Jr. SWE", default_salary=14000, color="#3B82F6"),
    RoleTemplate(id="sr-swe", name="Sr. SWE", default_salary=16000, color="#3B82F6"),
    RoleTemplate(id="pm", name="PM", default_salary=14000, color="#3B82F6"),
    RoleTemplate(id="ux-designer", name="UX Designer", default_salary=11000, color="#EC4899"),
    RoleTemplate(
        id="account-exec", name="Account Executive", default_salary=8000, color="#3B82F6"
    ),
    RoleTemplate(id="growth-eng", name="Growth Eng.", default_salary=12000, color="#3B82F6"),
)


def get_template(template_id: str) -> RoleTemplate | None:
    """Look up a catalog entry by id."""
    for template in ROLE_TEMPLATES:
        if template.id == template_id:
            return template
    return None


class Scenario(BaseModel):
    """A named hiring plan: starting cash position plus ordered employees.

    Employee order is display order — it decides each entity's timeline row.
    """

    model_config = {"frozen": True}

    name: str = "Untitled scenario"
    starting_cash: float | None = None
    starting_month: int | None = None
    starting_year: int | None = None
    employees: list[Entity] = Field(default_factory=list)

    def find(self, entity_id: str) -> Entity | None:
        for entity in self.employees:
            if entity.id == entity_id:
                return entity
        return None

    def entity_ids(self) -> set[str]:
        return {entity.id for entity in self.employees}

    def with_entity(self, entity: Entity) -> Scenario:
        """Replace the entity with the same id in place, or append it."""
        employees = list(self.employees)
        for i, existing in enumerate(employees):
            if existing.id == entity.id:
                employees[i] = entity
                break
        else:
            employees.append(entity)
        return self.model_copy(update={"employees": employees})
