from activity_tracker import football_scoring as fs


def test_points_for_known_and_unknown_categories():
    assert fs.get_points("Physio") == {"Strength": 1, "Recovery": 2}
    assert fs.get_points("Yoga") == {}


def test_calculate_totals_sums_rules():
    totals = fs.calculate_totals(["Team Training", "Match", "Technique", "Yoga"])
    assert totals == {"Technique": 6, "Endurance": 4, "Strength": 0, "Tactic": 2, "Recovery": 0}


def test_session_counts_and_team_group():
    counts = fs.count_sessions(["Team Training", "Match", "Match", "Physio", "Yoga"])
    assert counts["Team Training"] == 1
    assert counts["Match"] == 2
    assert counts["Physio"] == 1
    assert "Yoga" not in counts
    assert fs.count_team_sessions(counts) == 3


def test_warnings_only_for_attributes_below_target():
    totals = {"Technique": 18, "Endurance": 10, "Strength": 4, "Tactic": 6, "Recovery": 0}
    warnings = fs.get_warnings(totals)
    assert [w["attribute"] for w in warnings] == ["Endurance", "Recovery"]
    endurance = warnings[0]
    assert endurance["current"] == 10
    assert endurance["target"] == 12
    assert endurance["shortfall"] == 2
    assert endurance["suggestion"] == "Endurance session"
    assert warnings[1]["suggestion"] == "Recovery session or Physio"


def test_no_warnings_when_all_targets_met():
    assert fs.get_warnings(dict(fs.WEEKLY_TARGETS)) == []
