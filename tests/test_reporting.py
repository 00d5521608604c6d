import pandas as pd
import pytest

from rtrwh.data_tables import AssessmentStore
from rtrwh.reporting import (
    NOT_RECOVERABLE,
    build_analytics_overview,
    build_result_summary,
    build_structure_table,
    build_subsidy_table,
)


def _frame(rows):
    return pd.DataFrame(rows, columns=["state", "created_at", "feasibility_score", "annual_harvest"])


def test_empty_overview():
    overview = build_analytics_overview(_frame([]))

    assert overview["total_assessments"] == 0
    assert overview["average_feasibility_score"] == 0.0
    assert overview["top_states"] == []
    assert overview["monthly_trend"] == []
    assert overview["feasibility_distribution"] == {"excellent": 0, "good": 0, "fair": 0, "poor": 0}


def test_overview_aggregates():
    df = _frame([
        ("Karnataka", "2026-01-05T10:00:00Z", 85, 60000.0),
        ("Maharashtra", "2026-01-20T10:00:00Z", 100, 299200.0),
        ("Karnataka", "2026-03-01T10:00:00Z", 65, 40000.0),
        ("", "2026-12-31T23:00:00Z", 44, 5000.0),
        (None, "2026-03-15T10:00:00Z", 50, 10000.0),
    ])

    overview = build_analytics_overview(df)

    assert overview["total_assessments"] == 5
    assert overview["average_feasibility_score"] == pytest.approx(68.8)
    assert overview["total_potential_harvest"] == pytest.approx(414200)
    assert overview["top_states"] == [
        {"state": "Karnataka", "count": 2},
        {"state": "Unknown", "count": 2},
        {"state": "Maharashtra", "count": 1},
    ]
    assert overview["monthly_trend"] == [
        {"month": 0, "count": 2},
        {"month": 2, "count": 2},
        {"month": 11, "count": 1},
    ]
    assert overview["feasibility_distribution"] == {"excellent": 2, "good": 1, "fair": 1, "poor": 1}


def test_top_states_limited_to_five():
    states = ["A", "B", "C", "D", "E", "F", "G"]
    df = _frame([(s, "2026-05-01T00:00:00Z", 50, 1.0) for s in states])
    overview = build_analytics_overview(df)
    assert [row["state"] for row in overview["top_states"]] == states[:5]


def test_overview_from_store(engine, make_input):
    store = AssessmentStore()
    store.save_assessment(
        make_input(state="Karnataka"), engine.calculate(make_input()), created_at="2026-04-01T00:00:00Z"
    )
    overview = build_analytics_overview(store.fetch_dataframe("assessments"))
    store.close()

    assert overview["total_assessments"] == 1
    assert overview["top_states"] == [{"state": "Karnataka", "count": 1}]
    assert overview["monthly_trend"] == [{"month": 3, "count": 1}]


def test_structure_and_subsidy_tables(engine, make_input):
    result = engine.calculate(make_input(address="Village Rampur, Bihar"))

    structures = build_structure_table(result)
    assert list(structures["type"]) == ["storage_tank", "recharge_pit"]
    assert structures["cost"].sum() == pytest.approx(94340)

    subsidies = build_subsidy_table(result)
    assert list(subsidies["amount"]) == [50000, 25000]
    assert subsidies["share_of_cost_pct"].iloc[0] == pytest.approx(50000 / 104340 * 100)


def test_summary_unrecoverable(engine, make_input):
    summary = build_result_summary(engine.calculate(make_input(address="Village Rampur, Bihar")))

    assert summary["payback"] == NOT_RECOVERABLE
    assert summary["roi_pct"] is None
    assert summary["top_structure"] == "storage_tank"
    assert summary["structure_count"] == 2
    assert summary["feasibility_category"] == "fair"


def test_summary_recoverable(engine, make_input):
    summary = build_result_summary(
        engine.calculate(make_input(address="Village Rampur, Bihar", roof_area=60, available_space=5))
    )
    assert summary["payback"] == "70.9 yrs"
    assert summary["roi_pct"] == pytest.approx(1.4108, abs=1e-4)
