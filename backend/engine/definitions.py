"""
Static setup definitions: territories, players and missions.
All setup data lives under data/setups/<setup_id>/: territories.json, players.json,
missions.json, and optional manifest.json (display_name).
Files are validated with pydantic before being turned into engine state.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

from backend.engine.state import (
    Territory,
    Player,
    Mission,
    MissionObjective,
    ConquerTerritories,
    EliminatePlayer,
    HaveTroopsTotal,
)

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"

logger = logging.getLogger("war.definitions")


def _default_setup_id() -> str:
    """Single place for default: backend.config.DEFAULT_SETUP_ID."""
    from backend.config import DEFAULT_SETUP_ID
    return DEFAULT_SETUP_ID


def _setup_dir(setup_id: str) -> Path:
    return SETUPS_DIR / setup_id


# ===== Setup file schema =====

class TerritorySetup(BaseModel):
    id: int
    name: str
    color: str = ""
    troops: int = Field(ge=0)
    owner: int | None = None  # player id; null = neutral


class PlayerSetup(BaseModel):
    id: int = Field(ge=0)
    name: str


class ConquerTerritoriesSetup(BaseModel):
    type: Literal["conquer_territories"]
    description: str = ""
    required_count: int = Field(ge=0)


class EliminatePlayerSetup(BaseModel):
    type: Literal["eliminate_player"]
    description: str = ""
    # Not checked against the roster: an unknown target just never completes.
    target_player_id: int


class HaveTroopsTotalSetup(BaseModel):
    type: Literal["have_troops_total"]
    description: str = ""
    required_count: int = Field(ge=0)


MissionSetup = Annotated[
    Union[ConquerTerritoriesSetup, EliminatePlayerSetup, HaveTroopsTotalSetup],
    Field(discriminator="type"),
]


class ScenarioSetup(BaseModel):
    """A complete, validated scenario."""
    id: str
    display_name: str
    territories: list[TerritorySetup]
    players: list[PlayerSetup]
    # owner player id -> that player's missions
    missions: dict[int, list[MissionSetup]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> "ScenarioSetup":
        territory_ids = [t.id for t in self.territories]
        if len(set(territory_ids)) != len(territory_ids):
            raise ValueError("Duplicate territory id in setup")
        player_ids = {p.id for p in self.players}
        if len(player_ids) != len(self.players):
            raise ValueError("Duplicate player id in setup")
        for territory in self.territories:
            if territory.owner is not None and territory.owner not in player_ids:
                raise ValueError(
                    f"Territory {territory.name} owned by unknown player {territory.owner}")
        for owner_id in self.missions:
            if owner_id not in player_ids:
                raise ValueError(f"Missions assigned to unknown player {owner_id}")
        return self


# ===== Loading =====

def _read_json(path: Path):
    with open(path, "r") as f:
        return json.load(f)


def list_setups() -> list[dict]:
    """Return [{ id, display_name }, ...] for all setups (subdirs of data/setups/ with territories.json)."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for d in sorted(SETUPS_DIR.iterdir()):
        if not d.is_dir() or not (d / "territories.json").exists():
            continue
        setup_id = d.name
        manifest_path = d / "manifest.json"
        if manifest_path.exists():
            try:
                m = _read_json(manifest_path)
                out.append({
                    "id": m.get("id", setup_id),
                    "display_name": m.get("display_name", setup_id),
                })
            except (json.JSONDecodeError, OSError):
                logger.warning("Unreadable manifest for setup %s", setup_id)
                out.append({"id": setup_id, "display_name": setup_id})
        else:
            out.append({"id": setup_id, "display_name": setup_id})
    return out


def load_setup(setup_id: str | None = None, data_dir: Path | str | None = None) -> ScenarioSetup:
    """
    Load and validate a setup.

    Args:
        setup_id: Setup under data/setups/ (default: backend.config.DEFAULT_SETUP_ID)
        data_dir: Explicit directory holding the setup files (overrides setup_id)

    Raises:
        FileNotFoundError: setup directory or a required file is missing
        pydantic.ValidationError: file contents do not match the schema
    """
    if data_dir is not None:
        setup_dir = Path(data_dir)
        setup_id = setup_id or setup_dir.name
    else:
        setup_id = setup_id or _default_setup_id()
        setup_dir = _setup_dir(setup_id)
    if not setup_dir.exists() or not setup_dir.is_dir():
        raise FileNotFoundError(f"Setup not found: {setup_id}")

    for required in ("territories.json", "players.json"):
        if not (setup_dir / required).exists():
            raise FileNotFoundError(f"{required} not found in setup: {setup_id}")

    data = {
        "id": setup_id,
        "display_name": setup_id,
        "territories": _read_json(setup_dir / "territories.json"),
        "players": _read_json(setup_dir / "players.json"),
    }
    missions_path = setup_dir / "missions.json"
    if missions_path.exists():
        data["missions"] = _read_json(missions_path)
    manifest_path = setup_dir / "manifest.json"
    if manifest_path.exists():
        m = _read_json(manifest_path)
        data["display_name"] = m.get("display_name", setup_id)

    setup = ScenarioSetup.model_validate(data)
    logger.info("Loaded setup %s: %d territories, %d players",
                setup.id, len(setup.territories), len(setup.players))
    return setup


def _to_objective(mission: MissionSetup) -> MissionObjective:
    if isinstance(mission, ConquerTerritoriesSetup):
        return ConquerTerritories(required_count=mission.required_count)
    if isinstance(mission, EliminatePlayerSetup):
        return EliminatePlayer(target_player_id=mission.target_player_id)
    if isinstance(mission, HaveTroopsTotalSetup):
        return HaveTroopsTotal(required_count=mission.required_count)
    raise TypeError(f"Unknown mission setup: {type(mission).__name__}")


def definitions_from_setup(setup: ScenarioSetup) -> tuple[
    dict[int, Territory],
    dict[int, Player],
    dict[int, list[Mission]],
]:
    """
    Build engine records from a validated setup.
    Returns fresh objects on every call, so games never share territory records.
    """
    territories = {
        t.id: Territory(id=t.id, name=t.name, color=t.color, troops=t.troops, owner=t.owner)
        for t in setup.territories
    }
    players = {p.id: Player(id=p.id, name=p.name) for p in setup.players}
    missions = {
        owner_id: [
            Mission(description=m.description, objective=_to_objective(m))
            for m in mission_list
        ]
        for owner_id, mission_list in setup.missions.items()
    }
    return territories, players, missions


def definitions_from_snapshot(snapshot: dict) -> tuple[
    dict[int, Territory],
    dict[int, Player],
    dict[int, list[Mission]],
]:
    """
    Build engine records from an in-memory dict with keys territories, players
    and (optionally) missions, in the same shape as the setup files.
    """
    data = {"id": "snapshot", "display_name": "snapshot"}
    data.update(snapshot)
    return definitions_from_setup(ScenarioSetup.model_validate(data))


def load_static_definitions(
    data_dir: Path | str | None = None,
    setup_id: str | None = None,
) -> tuple[
    dict[int, Territory],
    dict[int, Player],
    dict[int, list[Mission]],
]:
    """
    Load territories, players and missions for a setup.

    Args:
        data_dir: Path to directory containing the setup JSON files.
        setup_id: If set, use data/setups/<setup_id>/ (ignored if data_dir is set).
            Neither set: the default setup.

    Returns: (territories, players, missions_by_owner)
    """
    return definitions_from_setup(load_setup(setup_id=setup_id, data_dir=data_dir))
