"""
Reporting layer: turns computed statistics into plain-text CLI output.

Submodules:
  snapshot    — StatsSnapshot + StatsSnapshotCache, memoized per (year, metric)
  formatters  — format_summary(), format_milestones(), format_year_review(),
                format_recommendations()
"""
