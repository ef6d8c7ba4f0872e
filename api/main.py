"""
Hoops Dynasty API
FastAPI wrapper around the hoops simulation core
"""

import random
import time
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from hoops.attributes import (
    CATEGORY_DISPLAY_NAMES,
    get_attribute_display_name,
    get_attribute_grade,
    get_player_archetype,
    get_top_attributes,
)
from hoops.bio import (
    format_college_display,
    format_draft_display,
    get_bmi_category,
    get_college_tier,
    get_hometown_abbreviation,
    is_international_player,
)
from hoops.config import LeagueConfig
from hoops.league import calculate_league_stats, get_available_team_templates, validate_league_config
from hoops.personality import TRAITS, get_personality_insights, get_trait_description, get_trait_display_name
from hoops.season import build_playoff_bracket, get_standings, is_playoff_time
from hoops.store import GameStore
from hoops.strategy import (
    DefensiveStrategy,
    OffensiveStrategy,
    TeamStrategy,
    calculate_strategy_fit,
    combine_strategy_effects,
    suggest_optimal_strategy,
)
from hoops.team import Team, TeamColors


app = FastAPI(title="Hoops Dynasty API", version="1.0.0")

sessions: Dict[str, dict] = {}


@app.get("/health")
def health_check():
    return {"status": "ok", "sessions": len(sessions)}


@app.get("/team-templates")
def list_team_templates():
    return [
        {
            "id": t.team_id,
            "city": t.city,
            "name": t.name,
            "abbreviation": t.abbreviation,
            "colors": {"primary": t.primary, "secondary": t.secondary},
        }
        for t in get_available_team_templates()
    ]


@app.get("/strategies")
def list_strategies():
    return {
        "offensive": [s.value for s in OffensiveStrategy],
        "defensive": [s.value for s in DefensiveStrategy],
    }


@app.get("/traits")
def list_traits():
    return [
        {"key": t, "name": get_trait_display_name(t), "description": get_trait_description(t)}
        for t in TRAITS
    ]


# ──────────────────────────────────────────────
# REQUEST MODELS
# ──────────────────────────────────────────────

class CreateLeagueRequest(BaseModel):
    league_name: str
    season_length: int = 30
    difficulty: str = "normal"
    number_of_teams: int = 30
    team_id: Optional[str] = None
    current_season: Optional[int] = None
    seed: Optional[int] = None


class TradeRequest(BaseModel):
    from_team: str
    to_team: str
    players_out: List[str] = []
    players_in: List[str] = []


class PlayerNameRequest(BaseModel):
    name: str


class TeamInfoRequest(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    abbreviation: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class StrategyRequest(BaseModel):
    offensive: str
    defensive: str


class ImportStateRequest(BaseModel):
    state: dict
    seed: Optional[int] = None


# ──────────────────────────────────────────────
# HELPERS
# ──────────────────────────────────────────────

def _get_session(session_id: str) -> dict:
    if session_id not in sessions:
        raise HTTPException(status_code=404, detail="Session not found")
    return sessions[session_id]


def _require_league(session: dict) -> GameStore:
    store = session["store"]
    if not store.state.all_teams:
        raise HTTPException(status_code=400, detail="No league created in this session")
    return store


def _require_team(store: GameStore, team_id: str) -> Team:
    team = store.get_team(team_id)
    if team is None:
        raise HTTPException(status_code=404, detail=f"Team '{team_id}' not found")
    return team


def _serialize_player(player) -> dict:
    data = player.to_dict()
    data["personality_score"] = player.personality.score
    data["personality_label"] = player.personality.label
    data["personality_insights"] = get_personality_insights(player.personality)
    data["archetype"] = get_player_archetype(player.attributes, player.position)
    data["draft_display"] = format_draft_display(player.bio)
    data["college_display"] = format_college_display(player.bio.college)
    data["hometown_abbreviation"] = get_hometown_abbreviation(player.bio.hometown)
    data["is_international"] = is_international_player(player.bio)
    # seeded by id so a player keeps the same tier across requests
    data["college_tier"] = get_college_tier(player.bio.college, random.Random(player.id))
    data["bmi_category"] = get_bmi_category(player.bio.height, player.bio.weight)
    data["top_attributes"] = [
        {
            "category": CATEGORY_DISPLAY_NAMES[cat],
            "attribute": get_attribute_display_name(attr),
            "value": value,
            "grade": get_attribute_grade(value),
        }
        for cat, attr, value in get_top_attributes(player.attributes)
    ]
    return data


def _serialize_team(team: Team, include_roster: bool = False) -> dict:
    result = {
        "id": team.id,
        "name": team.name,
        "city": team.city,
        "full_name": team.full_name,
        "abbreviation": team.abbreviation,
        "colors": team.colors.to_dict(),
        "salary": team.salary,
        "wins": team.wins,
        "losses": team.losses,
        "win_percentage": round(team.win_pct, 4),
        "average_overall": round(team.average_overall, 1),
        "strategy": team.strategy.to_dict(),
    }
    if include_roster:
        result["roster"] = [_serialize_player(p) for p in team.roster]
    return result


def _serialize_status(store: GameStore) -> dict:
    state = store.state
    season_length = state.league_config.season_length if state.league_config else 30
    return {
        "current_team_id": state.current_team_id,
        "current_season": state.current_season,
        "current_week": state.current_week,
        "season_length": season_length,
        "is_playoff_time": is_playoff_time(state.current_week, season_length),
        "games_played": len(state.game_results),
        "league_stats": calculate_league_stats(state.all_teams),
        "name_pool": {
            **store.name_generator.get_stats(),
            "low": store.name_generator.is_name_pool_low(),
            "exhausted": store.name_generator.is_name_pool_exhausted(),
        },
    }


def _parse_strategy(req: StrategyRequest) -> TeamStrategy:
    try:
        return TeamStrategy(OffensiveStrategy(req.offensive), DefensiveStrategy(req.defensive))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ──────────────────────────────────────────────
# SESSIONS
# ──────────────────────────────────────────────

@app.post("/sessions")
def create_session():
    session_id = str(uuid.uuid4())
    now = time.time()
    sessions[session_id] = {"store": GameStore(), "created_at": now}
    return {"session_id": session_id, "created_at": now}


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str):
    if session_id not in sessions:
        raise HTTPException(status_code=404, detail="Session not found")
    del sessions[session_id]
    return {"deleted": True}


@app.get("/sessions/{session_id}")
def get_session(session_id: str):
    session = _get_session(session_id)
    store = session["store"]
    result = {
        "session_id": session_id,
        "created_at": session["created_at"],
        "has_league": bool(store.state.all_teams),
    }
    if store.state.all_teams:
        result["status"] = _serialize_status(store)
    return result


@app.post("/sessions/{session_id}/league")
def create_league(session_id: str, req: CreateLeagueRequest):
    session = _get_session(session_id)
    config = LeagueConfig(
        league_name=req.league_name,
        season_length=req.season_length,
        difficulty=req.difficulty,
        number_of_teams=req.number_of_teams,
    )
    errors = validate_league_config(config)
    if errors:
        raise HTTPException(status_code=400, detail=errors)

    store = GameStore(rng=random.Random(req.seed) if req.seed is not None else None)
    store.initialize_new_league(config, req.team_id or "", current_season=req.current_season)
    session["store"] = store
    return _serialize_status(store)


# ──────────────────────────────────────────────
# TEAMS / PLAYERS
# ──────────────────────────────────────────────

@app.get("/sessions/{session_id}/teams")
def list_teams(session_id: str):
    store = _require_league(_get_session(session_id))
    return [_serialize_team(t) for t in store.state.all_teams]


@app.get("/sessions/{session_id}/teams/{team_id}")
def get_team(session_id: str, team_id: str):
    store = _require_league(_get_session(session_id))
    return _serialize_team(_require_team(store, team_id), include_roster=True)


@app.put("/sessions/{session_id}/current-team/{team_id}")
def set_current_team(session_id: str, team_id: str):
    store = _require_league(_get_session(session_id))
    _require_team(store, team_id)
    store.set_current_team(team_id)
    return {"current_team_id": team_id}


@app.patch("/sessions/{session_id}/teams/{team_id}")
def update_team_info(session_id: str, team_id: str, req: TeamInfoRequest):
    store = _require_league(_get_session(session_id))
    team = _require_team(store, team_id)

    if req.name is not None and not store.validate_team_name(req.name, exclude_team_id=team_id):
        raise HTTPException(status_code=400, detail=f"Team name '{req.name}' is already taken")
    if req.abbreviation is not None and not store.validate_abbreviation(req.abbreviation, exclude_team_id=team_id):
        raise HTTPException(status_code=400, detail=f"Abbreviation '{req.abbreviation}' is invalid or taken")

    colors = None
    if req.primary_color is not None or req.secondary_color is not None:
        colors = TeamColors(
            primary=req.primary_color or team.colors.primary,
            secondary=req.secondary_color or team.colors.secondary,
        )
    abbreviation = req.abbreviation.upper() if req.abbreviation is not None else None
    store.update_team_info(team_id, name=req.name, city=req.city, abbreviation=abbreviation, colors=colors)
    return _serialize_team(store.get_team(team_id))


@app.put("/sessions/{session_id}/teams/{team_id}/players/{player_id}/name")
def update_player_name(session_id: str, team_id: str, player_id: str, req: PlayerNameRequest):
    store = _require_league(_get_session(session_id))
    team = _require_team(store, team_id)
    if team.find_player(player_id) is None:
        raise HTTPException(status_code=404, detail=f"Player '{player_id}' not found")
    name = req.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Player name is required")
    if not store.validate_player_name(name, team_id, exclude_player_id=player_id):
        raise HTTPException(status_code=400, detail=f"'{name}' is already on this roster")
    store.update_player_name(team_id, player_id, name)
    return _serialize_player(store.get_team(team_id).find_player(player_id))


# ──────────────────────────────────────────────
# STRATEGY
# ──────────────────────────────────────────────

@app.put("/sessions/{session_id}/teams/{team_id}/strategy")
def set_team_strategy(session_id: str, team_id: str, req: StrategyRequest):
    store = _require_league(_get_session(session_id))
    _require_team(store, team_id)
    strategy = _parse_strategy(req)
    store.update_team_strategy(team_id, strategy)
    return {
        "strategy": strategy.to_dict(),
        "effects": combine_strategy_effects(strategy).to_dict(),
        "fit": round(calculate_strategy_fit(store.get_team(team_id), strategy), 4),
    }


@app.get("/sessions/{session_id}/teams/{team_id}/strategy/suggest")
def suggest_strategy(session_id: str, team_id: str):
    store = _require_league(_get_session(session_id))
    team = _require_team(store, team_id)
    suggestion = suggest_optimal_strategy(team)
    return {
        "strategy": suggestion.to_dict(),
        "fit": round(calculate_strategy_fit(team, suggestion), 4),
    }


# ──────────────────────────────────────────────
# SEASON
# ──────────────────────────────────────────────

@app.post("/sessions/{session_id}/simulate-week")
def simulate_week(session_id: str):
    store = _require_league(_get_session(session_id))
    result = store.simulate_week()
    return {
        "current_week": result.current_week,
        "games": [g.to_dict() for g in result.game_results],
        "injuries": [r.to_dict() for r in result.injuries],
    }


@app.get("/sessions/{session_id}/standings")
def standings(session_id: str):
    store = _require_league(_get_session(session_id))
    return [
        dict(_serialize_team(t), rank=i + 1)
        for i, t in enumerate(get_standings(store.state.all_teams))
    ]


@app.get("/sessions/{session_id}/playoffs")
def playoffs(session_id: str):
    store = _require_league(_get_session(session_id))
    status = _serialize_status(store)
    bracket = build_playoff_bracket(store.state.all_teams)
    return {
        "is_playoff_time": status["is_playoff_time"],
        "first_round": [
            {"high_seed": _serialize_team(high), "low_seed": _serialize_team(low)}
            for high, low in bracket
        ],
    }


@app.get("/sessions/{session_id}/results")
def game_results(session_id: str):
    store = _require_league(_get_session(session_id))
    return [g.to_dict() for g in store.state.game_results]


@app.post("/sessions/{session_id}/reset-season")
def reset_season(session_id: str):
    store = _require_league(_get_session(session_id))
    store.reset_season()
    return _serialize_status(store)


# ──────────────────────────────────────────────
# TRADES
# ──────────────────────────────────────────────

@app.post("/sessions/{session_id}/trades")
def propose_trade(session_id: str, req: TradeRequest):
    store = _require_league(_get_session(session_id))
    try:
        trade = store.propose_trade(req.from_team, req.to_team, req.players_out, req.players_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return trade.to_dict()


def _require_trade(store: GameStore, trade_id: str):
    trade = store.get_trade(trade_id)
    if trade is None:
        raise HTTPException(status_code=404, detail=f"Trade '{trade_id}' not found")
    return trade


@app.post("/sessions/{session_id}/trades/{trade_id}/accept")
def accept_trade(session_id: str, trade_id: str):
    store = _require_league(_get_session(session_id))
    _require_trade(store, trade_id)
    store.accept_trade(trade_id)
    return store.get_trade(trade_id).to_dict()


@app.post("/sessions/{session_id}/trades/{trade_id}/reject")
def reject_trade(session_id: str, trade_id: str):
    store = _require_league(_get_session(session_id))
    _require_trade(store, trade_id)
    store.reject_trade(trade_id)
    return store.get_trade(trade_id).to_dict()


# ──────────────────────────────────────────────
# PLAYER POOLS
# ──────────────────────────────────────────────

@app.get("/sessions/{session_id}/draft-class")
def draft_class(session_id: str, count: int = Query(30, ge=1, le=200)):
    store = _require_league(_get_session(session_id))
    return [_serialize_player(p) for p in store.generate_draft_class(count)]


@app.get("/sessions/{session_id}/free-agents")
def free_agents(session_id: str, count: int = Query(20, ge=1, le=200)):
    store = _require_league(_get_session(session_id))
    return [_serialize_player(p) for p in store.generate_free_agents(count)]


# ──────────────────────────────────────────────
# SAVE / LOAD
# ──────────────────────────────────────────────

@app.get("/sessions/{session_id}/export")
def export_state(session_id: str):
    store = _require_league(_get_session(session_id))
    return store.export()


@app.post("/sessions/{session_id}/import")
def import_state(session_id: str, req: ImportStateRequest):
    session = _get_session(session_id)
    store = GameStore(rng=random.Random(req.seed) if req.seed is not None else None)
    try:
        store.load(req.state)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid saved state: {e}")
    session["store"] = store
    return _serialize_status(store)
