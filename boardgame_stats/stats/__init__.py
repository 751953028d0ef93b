"""
Statistics engine: pure functions over the game catalog and play log.

Modules
-------
metrics      : GameAggregate + aggregate() / aggregate_through_year() —
               the per-game totals every other module builds on.
h_index      : h_index() + per-metric, breakdown and year-over-year variants.
milestones   : classify() into fives/dimes/quarters/centuries, cumulative
               counts, band increases, new and skipped milestone games.
collection   : ownership totals, acquisition years, diagnostics.
plays        : play counts, play time, per-game breakdowns, top games.
activity     : analyze_activity() — day extremes, streaks, dry spells.
achievements : logging_achievements() — cumulative checkpoints per year.
cost         : price paid, cost per hour / session / play, cost clubs.
"""
