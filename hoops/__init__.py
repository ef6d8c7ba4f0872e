"""
Hoops Dynasty Simulation Core
"""

from .config import LeagueConfig, POSITIONS, DIFFICULTIES
from .attributes import (
    PlayerAttributes,
    calculate_overall_rating,
    generate_player_attributes,
    get_attribute_grade,
    get_player_archetype,
    get_top_attributes,
)
from .personality import (
    PlayerPersonality,
    generate_personality_traits,
    calculate_personality_score,
    get_personality_label,
    get_personality_insights,
    validate_personality_traits,
)
from .bio import PlayerBio, generate_player_bio, generate_player_weight, format_draft_display, FALLBACK_WEIGHT
from .names import NameGenerator, NamePoolExhaustedError
from .strategy import (
    OffensiveStrategy,
    DefensiveStrategy,
    TeamStrategy,
    StrategyEffects,
    combine_strategy_effects,
    calculate_strategy_fit,
    suggest_optimal_strategy,
    calculate_matchup_advantage,
    generate_random_strategy,
)
from .injuries import Injury, InjuryReport, INJURY_TYPES
from .player import Player, Contract, PlayerStats
from .team import Team, TeamColors
from .trades import Trade, propose_trade, execute_trade
from .league import (
    generate_league,
    validate_league_config,
    calculate_league_stats,
    get_available_team_templates,
    generate_draft_class,
    generate_free_agents,
)
from .season import (
    GameResult,
    BoxScore,
    WeekResult,
    simulate_week,
    get_standings,
    get_playoff_teams,
    build_playoff_bracket,
    is_playoff_time,
)
from .migrations import run_migrations, MIGRATIONS
from .store import GameStore, GameState

__all__ = [
    "LeagueConfig", "POSITIONS", "DIFFICULTIES",
    "PlayerAttributes", "calculate_overall_rating", "generate_player_attributes",
    "get_attribute_grade", "get_player_archetype", "get_top_attributes",
    "PlayerPersonality", "generate_personality_traits", "calculate_personality_score",
    "get_personality_label", "get_personality_insights", "validate_personality_traits",
    "PlayerBio", "generate_player_bio", "generate_player_weight", "format_draft_display", "FALLBACK_WEIGHT",
    "NameGenerator", "NamePoolExhaustedError",
    "OffensiveStrategy", "DefensiveStrategy", "TeamStrategy", "StrategyEffects",
    "combine_strategy_effects", "calculate_strategy_fit", "suggest_optimal_strategy",
    "calculate_matchup_advantage", "generate_random_strategy",
    "Injury", "InjuryReport", "INJURY_TYPES",
    "Player", "Contract", "PlayerStats",
    "Team", "TeamColors",
    "Trade", "propose_trade", "execute_trade",
    "generate_league", "validate_league_config", "calculate_league_stats",
    "get_available_team_templates", "generate_draft_class", "generate_free_agents",
    "GameResult", "BoxScore", "WeekResult", "simulate_week",
    "get_standings", "get_playoff_teams", "build_playoff_bracket", "is_playoff_time",
    "run_migrations", "MIGRATIONS",
    "GameStore", "GameState",
]
