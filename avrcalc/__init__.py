"""avrcalc — scoring calculator for the AVR 2024 robotics competition.

Set counts for each scoring action across the competition phases and sum them
into a final score. Actions score linearly (points × count) or by point
stages (a lookup table indexed by count, e.g. stacking height).

Usage:
    python -m avrcalc actions                     # Show scoring actions
    python -m avrcalc score -s 1=3 -s Stacking=4  # Score a set of counts
    python -m avrcalc play                        # Interactive session
"""
