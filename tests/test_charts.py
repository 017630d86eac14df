from tests.factories import BOB, make_issue, make_worklog
from worklog_app.core.service import build_worklog_data
from worklog_app.visual.charts import project_breakdown_chart, team_member_chart, team_member_frame
from worklog_app.visual.colors import get_project_color_map


def _sample_data():
    issues = [
        make_issue("PROJ-1"),
        make_issue("BETA-1", project_key="BETA", project_name="Project Beta", assignee=BOB),
    ]
    worklogs = {
        "PROJ-1": [make_worklog("wl-1", 3600), make_worklog("wl-2", 1800, author=BOB)],
        "BETA-1": [make_worklog("wl-3", 5400)],
    }
    return build_worklog_data(issues, worklogs)


def test_project_breakdown_chart_keeps_order_and_registers_colors():
    data = _sample_data()
    chart, df = project_breakdown_chart(data.projects)
    assert chart is not None
    assert df["project_key"].tolist() == ["PROJ", "BETA"]
    assert df["total_hours"].tolist() == [1.5, 1.5]
    assert df.loc[0, "contributor_count"] == 2
    assert set(get_project_color_map()) == {"PROJ", "BETA"}


def test_project_breakdown_chart_empty():
    chart, df = project_breakdown_chart([])
    assert chart is None
    assert df.empty


def test_team_member_frame_shares():
    data = _sample_data()
    df = team_member_frame(data.team_members)
    alice = df[df["member"] == "Alice"].set_index("project_key")
    assert alice.loc["PROJ", "hours"] == 1.0
    assert alice.loc["BETA", "hours"] == 1.5
    assert alice.loc["BETA", "percent"] == 60.0
    assert (alice["member_total"] == 2.5).all()


def test_team_member_chart_truncates():
    issues = [make_issue("PROJ-1")]
    worklogs = {
        "PROJ-1": [
            make_worklog(f"wl-{i}", 3600 * (i + 1), author={"accountId": f"user-{i}", "displayName": f"User {i}"})
            for i in range(5)
        ]
    }
    members = build_worklog_data(issues, worklogs).team_members
    chart, df, truncated = team_member_chart(members, max_members=3)
    assert chart is not None
    assert truncated is True
    assert df["member"].tolist() == ["User 4", "User 3", "User 2"]


def test_team_member_chart_empty():
    chart, df, truncated = team_member_chart([])
    assert chart is None and df.empty and truncated is False


def test_team_member_chart_keeps_same_named_accounts_apart():
    twin_a = {"accountId": "user-7", "displayName": "Sam"}
    twin_b = {"accountId": "user-8", "displayName": "Sam"}
    issues = [make_issue("PROJ-1")]
    worklogs = {"PROJ-1": [make_worklog("wl-1", 7200, author=twin_a), make_worklog("wl-2", 3600, author=twin_b)]}
    members = build_worklog_data(issues, worklogs).team_members
    chart, df, _ = team_member_chart(members)
    assert df["account_id"].tolist() == ["user-7", "user-8"]
    assert df["member"].tolist() == ["Sam", "Sam"]
    spec = chart.to_dict()
    y = spec["encoding"]["y"]
    assert y["field"] == "account_id"
    assert y["sort"] == ["user-7", "user-8"]
    assert y["axis"]["labelExpr"] == (
        'datum.value === "user-7" ? "Sam" : datum.value === "user-8" ? "Sam" : datum.value'
    )
