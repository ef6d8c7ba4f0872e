"""
Player trades between two teams.

``from_team`` sends ``players_out`` and receives ``players_in`` from
``to_team``.  Salary difference and trade value are measured from the
proposing team's side (incoming minus outgoing) and frozen at proposal
time.  Executing a trade moves the players as they stand on their rosters
then.

Usage:
    trade = propose_trade(teams, "las", "bos", ["a1b2c3d4e"], ["x9y8z7w6v"])
    teams = execute_trade(teams, trade)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Sequence

from hoops.player import Player
from hoops.team import Team

TRADE_STATUSES = ("pending", "accepted", "rejected")


@dataclass
class Trade:
    id: str
    from_team: str
    to_team: str
    players_out: List[Player] = field(default_factory=list)
    players_in: List[Player] = field(default_factory=list)
    status: str = "pending"
    salary_difference: int = 0
    trade_value: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from_team": self.from_team,
            "to_team": self.to_team,
            "players_out": [p.to_dict() for p in self.players_out],
            "players_in": [p.to_dict() for p in self.players_in],
            "status": self.status,
            "salary_difference": self.salary_difference,
            "trade_value": self.trade_value,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Trade":
        return cls(
            id=d["id"],
            from_team=d["from_team"],
            to_team=d["to_team"],
            players_out=[Player.from_dict(p) for p in d.get("players_out", [])],
            players_in=[Player.from_dict(p) for p in d.get("players_in", [])],
            status=d.get("status", "pending"),
            salary_difference=d.get("salary_difference", 0),
            trade_value=d.get("trade_value", 0),
        )


def _team_by_id(teams: Sequence[Team], team_id: str) -> Team:
    for team in teams:
        if team.id == team_id:
            return team
    raise ValueError(f"Unknown team '{team_id}'")


def _pick_players(team: Team, player_ids: Sequence[str]) -> List[Player]:
    picked = []
    for pid in player_ids:
        player = team.find_player(pid)
        if player is None:
            raise ValueError(f"Player '{pid}' is not on {team.abbreviation}")
        picked.append(player)
    return picked


def salary_difference(players_out: Sequence[Player], players_in: Sequence[Player]) -> int:
    return sum(p.contract.salary for p in players_in) - sum(p.contract.salary for p in players_out)


def trade_value(players_out: Sequence[Player], players_in: Sequence[Player]) -> int:
    return sum(p.overall for p in players_in) - sum(p.overall for p in players_out)


def propose_trade(
    teams: Sequence[Team],
    from_team_id: str,
    to_team_id: str,
    players_out_ids: Sequence[str],
    players_in_ids: Sequence[str],
) -> Trade:
    if from_team_id == to_team_id:
        raise ValueError("A team cannot trade with itself")
    from_team = _team_by_id(teams, from_team_id)
    to_team = _team_by_id(teams, to_team_id)
    players_out = _pick_players(from_team, players_out_ids)
    players_in = _pick_players(to_team, players_in_ids)
    if not players_out and not players_in:
        raise ValueError("A trade must include at least one player")

    return Trade(
        id=str(uuid.uuid4())[:12],
        from_team=from_team_id,
        to_team=to_team_id,
        players_out=players_out,
        players_in=players_in,
        salary_difference=salary_difference(players_out, players_in),
        trade_value=trade_value(players_out, players_in),
    )


def execute_trade(teams: Sequence[Team], trade: Trade) -> List[Team]:
    """Swap the traded players and refresh both payrolls; other teams are untouched.

    Players are moved as they currently stand on their rosters, not as they
    were when the trade was proposed.  Raises ``ValueError`` if a traded
    player is no longer on the sending team.
    """
    from_team = _team_by_id(teams, trade.from_team)
    to_team = _team_by_id(teams, trade.to_team)
    players_out = _pick_players(from_team, [p.id for p in trade.players_out])
    players_in = _pick_players(to_team, [p.id for p in trade.players_in])

    out_ids = {p.id for p in players_out}
    in_ids = {p.id for p in players_in}
    updated = []
    for team in teams:
        if team.id == trade.from_team:
            kept = [p for p in team.roster if p.id not in out_ids]
            team = team.with_roster(kept + players_in)
        elif team.id == trade.to_team:
            kept = [p for p in team.roster if p.id not in in_ids]
            team = team.with_roster(kept + players_out)
        updated.append(team)
    return updated
