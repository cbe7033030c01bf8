from typing import Dict, Iterable, List

ATTRIBUTES = ("Technique", "Endurance", "Strength", "Tactic", "Recovery")

SCORING_RULES: Dict[str, Dict[str, int]] = {
    "Technique": {"Technique": 2},
    "Endurance": {"Endurance": 2},
    "Strength": {"Strength": 2},
    "Tactic": {"Tactic": 1},
    "Recovery": {"Recovery": 1},
    "Team Training": {"Technique": 2, "Endurance": 2, "Tactic": 1},
    "Match": {"Technique": 2, "Endurance": 2, "Tactic": 1},
    "Physio": {"Strength": 1, "Recovery": 2},
}

WEEKLY_TARGETS: Dict[str, int] = {
    "Technique": 18,
    "Endurance": 12,
    "Strength": 4,
    "Tactic": 5,
    "Recovery": 6,
}

SUGGESTIONS: Dict[str, str] = {
    "Technique": "Technique session",
    "Endurance": "Endurance session",
    "Strength": "Strength session",
    "Tactic": "Tactic session or Team Training",
    "Recovery": "Recovery session or Physio",
}

TEAM_SESSION_TYPES = ("Team Training", "Match")


def get_points(category_name: str) -> Dict[str, int]:
    """Attribute points for one completed session; unknown names score nothing."""
    return dict(SCORING_RULES.get(category_name, {}))


def calculate_totals(category_names: Iterable[str]) -> Dict[str, int]:
    totals = {attribute: 0 for attribute in ATTRIBUTES}
    for name in category_names:
        for attribute, points in get_points(name).items():
            totals[attribute] += points
    return totals


def count_sessions(category_names: Iterable[str]) -> Dict[str, int]:
    counts = {name: 0 for name in SCORING_RULES}
    for name in category_names:
        if name in counts:
            counts[name] += 1
    return counts


def count_team_sessions(session_counts: Dict[str, int]) -> int:
    return sum(session_counts.get(name, 0) for name in TEAM_SESSION_TYPES)


def get_warnings(totals: Dict[str, int], *, targets: Dict[str, int] = WEEKLY_TARGETS) -> List[Dict]:
    warnings = []
    for attribute, target in targets.items():
        current = totals.get(attribute, 0)
        if current < target:
            warnings.append(
                {
                    "attribute": attribute,
                    "current": current,
                    "target": target,
                    "shortfall": target - current,
                    "suggestion": SUGGESTIONS[attribute],
                }
            )
    return warnings
