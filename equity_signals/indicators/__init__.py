from .calculator import (
    IndicatorPeriods,
    compute_snapshot,
    compute_snapshots,
    series_problem,
    to_arrays,
)

__all__ = ["IndicatorPeriods", "compute_snapshot", "compute_snapshots", "series_problem", "to_arrays"]
