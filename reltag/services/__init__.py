"""Release services."""

from .errors import ReleaseError
from .release import ReleaseOutcome, ReleasePlan, plan_release, run_release

__all__ = [
    "ReleaseError",
    "ReleaseOutcome",
    "ReleasePlan",
    "plan_release",
    "run_release",
]
