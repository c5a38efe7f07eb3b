"""JUICECON severity scale.

Levels run from 5 (noticeable) up to 1 (the ultimate). Thresholds are
Fahrenheit dewpoints, inclusive on their lower edge, and are checked from the
highest down so the first match wins.
"""

from typing import List, Tuple

from juicecon_mcp.models import SeverityLevel

LEVELS: List[Tuple[float, SeverityLevel]] = [
    (75.0, SeverityLevel(level=1, descriptor="The Ultimate", description="A very rare event. This is not a drill.")),
    (
        73.0,
        SeverityLevel(
            level=2,
            descriptor="Come The Fuck On",
            description="Unacceptable. File complaints with the atmosphere.",
        ),
    ),
    (70.0, SeverityLevel(level=3, descriptor="Unbearable", description="The air has weight. You are breathing soup.")),
    (65.0, SeverityLevel(level=4, descriptor="Miserable", description="Existence is damp. Consider relocation.")),
    (60.0, SeverityLevel(level=5, descriptor="Noticeable", description="A/C at night is now justified.")),
]

COMFORTABLE = SeverityLevel(
    level=None,
    descriptor="Comfortable",
    description="JUICECON protocols not currently active.",
)


def classify(dewpoint_f: float) -> SeverityLevel:
    """Map a Fahrenheit dewpoint to its JUICECON level"""
    for threshold, level in LEVELS:
        if dewpoint_f >= threshold:
            return level
    return COMFORTABLE
