"""Built-in AVR 2024 scoring actions.

Used whenever no configuration file is given or the given one fails to load.
"""

from __future__ import annotations

from avrcalc.models import STAGED_SENTINEL, ScoringAction


def initialize_default_actions() -> list[ScoringAction]:
    """Build a fresh default registry. Every call gets new ids and zero counts."""
    return [
        # Phase 1
        ScoringAction(
            name="Phase 1",
            description="Score in the goal zone",
            pointvalue=2,
            phase=1,
        ),
        # Phase 2
        ScoringAction(
            name="Phase 2",
            description="Score in the railway",
            pointvalue=4,
            phase=2,
        ),
        # Phase 3
        ScoringAction(
            name="Phase 3",
            description="Score in the hotspots",
            pointvalue=8,
            phase=3,
        ),
        # Phase 4
        ScoringAction(
            name="General parking",
            description="AVR, RVR, and DEXI has parked.",
            pointvalue=3,
            phase=4,
            max_count=1,
        ),
        ScoringAction(
            name="Mini parking",
            description="This number of sphero mini drivers that have parked.",
            pointvalue=1,
            phase=4,
            max_count=3,
        ),
        ScoringAction(
            name="Stacking",
            description="Creating a single unsupported stack of conex boxes with AVR. Enter height.",
            pointvalue=STAGED_SENTINEL,
            phase=4,
            pointstages=[0, 0, 1, 3, 5, 7, 20],
        ),
    ]
