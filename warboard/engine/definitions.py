"""
Board setups.
Setups live in data/setups/<setup_id>.json: display_name, optional player_color,
combat_rule and mission, and the ordered list of starting territories.
Manual entries typed at the console go through the same validation.
"""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from warboard.engine.state import Territory
from warboard.engine import CONQUEST_TERRITORY_TARGET
from warboard.engine.missions import Mission, MissionKind, COLOR_MISSIONS

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"

NEUTRAL_COLOR = "Neutral"


def _default_setup_id() -> str:
    """Single place for default: warboard.config.DEFAULT_SETUP_ID."""
    from warboard.config import DEFAULT_SETUP_ID
    return DEFAULT_SETUP_ID


class TerritorySetup(BaseModel):
    """One starting territory. Blank names and colors are filled in by position."""
    name: str = ""
    color: str = ""
    troops: int = Field(..., gt=0)

    @field_validator("name", "color", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


class MissionSetup(BaseModel):
    """A mission assigned by the setup instead of drawn at random."""
    kind: MissionKind
    target_color: Optional[str] = None
    count: int = Field(CONQUEST_TERRITORY_TARGET, gt=0)

    @model_validator(mode="after")
    def _require_target_color(self) -> "MissionSetup":
        if self.kind in COLOR_MISSIONS and not (self.target_color or "").strip():
            raise ValueError(f"{self.kind.value} requires a target_color")
        return self

    def build(self) -> Mission:
        return Mission(kind=self.kind, target_color=self.target_color, count=self.count)


class SetupDefinition(BaseModel):
    id: str
    display_name: str = ""
    player_color: Optional[str] = None
    combat_rule: Optional[Literal["conquest", "attrition"]] = None
    mission: Optional[MissionSetup] = None
    territories: list[TerritorySetup] = Field(..., min_length=1)

    def build_territories(self) -> list[Territory]:
        return territories_from_setup(self.territories)

    def build_mission(self) -> Mission | None:
        return self.mission.build() if self.mission else None


def territories_from_setup(entries: list[TerritorySetup]) -> list[Territory]:
    """Turn validated entries into board territories (empty name -> T<index>, empty color -> Neutral)."""
    return [
        Territory(
            name=entry.name or f"T{i}",
            color=entry.color or NEUTRAL_COLOR,
            troops=entry.troops,
        )
        for i, entry in enumerate(entries)
    ]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_territory_entries(entries: list[dict[str, Any]]) -> list[Territory]:
    """
    Validate raw territory entries (e.g. typed at the console) and build the board.
    Raises ValueError describing every invalid field.
    """
    if not entries:
        raise ValueError("At least one territory is required")
    try:
        validated = [TerritorySetup.model_validate(e) for e in entries]
    except ValidationError as e:
        raise ValueError(f"Invalid territory: {_format_validation_error(e)}") from e
    return territories_from_setup(validated)


def list_setups() -> list[dict]:
    """Return [{ id, display_name, territories }, ...] for all setups in data/setups/."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for path in sorted(SETUPS_DIR.glob("*.json")):
        setup_id = path.stem
        try:
            with open(path, "r") as f:
                data = json.load(f)
            out.append({
                "id": data.get("id", setup_id),
                "display_name": data.get("display_name", setup_id),
                "territories": len(data.get("territories") or []),
            })
        except (json.JSONDecodeError, OSError):
            out.append({"id": setup_id, "display_name": setup_id, "territories": 0})
    return out


def load_setup(setup_id: str | None = None, setups_dir: Path | str | None = None) -> SetupDefinition:
    """
    Load and validate a setup by id.
    Raises FileNotFoundError for an unknown id and ValueError for a malformed file.
    """
    setup_id = setup_id or _default_setup_id()
    base = Path(setups_dir) if setups_dir is not None else SETUPS_DIR
    path = base / f"{setup_id}.json"
    if not path.exists():
        raise FileNotFoundError(f"Setup not found: {setup_id}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Setup {setup_id} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data.setdefault("id", setup_id)
    try:
        setup = SetupDefinition.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid setup {setup_id}: {_format_validation_error(e)}") from e

    return setup
