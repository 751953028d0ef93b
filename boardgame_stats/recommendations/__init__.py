"""
Recommendation engine: suggests owned base games to play next, each with a
short human-readable reason and supporting stat.

Modules
-------
random_source : RandomSource protocol + choose_uniform() +
                choose_weighted_by_sqrt_rarity() — the only randomness.
heuristics    : Suggestion / GameProfile + build_profiles() + one function per
                heuristic, each returning at most one Suggestion.
                join_cost_club() only runs when enabled in config.
engine        : Recommendation dataclass + suggest_games()
                + merge_suggestions().
"""
