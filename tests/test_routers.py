import asyncio

import pytest
from fastapi import HTTPException

import web.backend.routers.entries as entries_router
import web.backend.routers.goals as goals_router
import web.backend.routers.tags as tags_router
import web.backend.routers.todos as todos_router
from tracker.goal_service import GoalService
from tracker.todo_service import TodoService


@pytest.fixture
def services(data_dir, clock, monkeypatch):
    goal_service = GoalService(clock=clock)
    todo_service = TodoService(clock=clock)
    monkeypatch.setattr(goals_router, "get_goal_service", lambda: goal_service)
    monkeypatch.setattr(entries_router, "get_goal_service", lambda: goal_service)
    monkeypatch.setattr(todos_router, "get_todo_service", lambda: todo_service)
    monkeypatch.setattr(tags_router, "get_todo_service", lambda: todo_service)
    return goal_service, todo_service


def _create_goal(goal_type="adherence", config=None, name="Meditate"):
    req = goals_router.GoalRequest(name=name, type=goal_type, config=config or {})
    return asyncio.run(goals_router.create_goal(req))


def test_create_and_fetch_goal(services):
    created = _create_goal()

    fetched = asyncio.run(goals_router.get_goal(created["id"]))

    assert fetched["name"] == "Meditate"
    assert fetched["type"] == "adherence"
    assert fetched["createdAt"] == "2026-10-17T12:00:00Z"
    assert [g["id"] for g in asyncio.run(goals_router.list_goals())] == [created["id"]]


def test_unknown_goal_is_404(services):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(goals_router.get_goal("missing"))
    assert exc.value.status_code == 404
    assert exc.value.detail == "Goal not found"

    with pytest.raises(HTTPException) as exc:
        asyncio.run(goals_router.delete_goal("missing"))
    assert exc.value.status_code == 404


def test_invalid_goal_config_is_400(services):
    req = goals_router.GoalRequest(name="Weight", type="numeric", config={})
    with pytest.raises(HTTPException) as exc:
        asyncio.run(goals_router.create_goal(req))
    assert exc.value.status_code == 400


def test_update_goal_replaces_record(services):
    created = _create_goal()
    req = goals_router.GoalRequest(
        name="Meditate daily",
        type="adherence",
        createdAt=created["createdAt"],
        config={"targetDaysPerWeek": 5},
    )

    updated = asyncio.run(goals_router.update_goal(created["id"], req))

    assert updated["id"] == created["id"]
    assert updated["name"] == "Meditate daily"
    assert updated["config"]["targetDaysPerWeek"] == 5


def test_today_toggle_and_progress(services):
    goal = _create_goal()

    entry = asyncio.run(goals_router.save_today_entry(goal["id"]))
    progress = asyncio.run(goals_router.get_progress(goal["id"]))

    assert entry["value"] is True
    assert progress["status"]["text"] == "Done today"
    assert progress["stats"] == {"streak": 1, "completionRate": 3}
    assert progress["calendar"]["leadingBlanks"] == 4
    assert progress["chart"] is None


def test_progress_month_must_be_well_formed(services):
    goal = _create_goal()
    with pytest.raises(HTTPException) as exc:
        asyncio.run(goals_router.get_progress(goal["id"], month="October"))
    assert exc.value.status_code == 400


def test_progress_for_other_month(services):
    goal = _create_goal()
    progress = asyncio.run(goals_router.get_progress(goal["id"], month="2026-02"))

    assert progress["calendar"]["title"] == "February 2026"
    assert progress["calendar"]["leadingBlanks"] == 0


def test_numeric_today_requires_value(services):
    goal = _create_goal("numeric", {"unit": "kg"}, name="Weight")

    with pytest.raises(HTTPException) as exc:
        asyncio.run(goals_router.save_today_entry(goal["id"]))
    assert exc.value.status_code == 400

    req = goals_router.TodayEntryRequest(value=82.4)
    entry = asyncio.run(goals_router.save_today_entry(goal["id"], req))
    assert entry["value"] == 82.4


def test_progress_summary_lists_status_lines(services):
    _create_goal()
    _create_goal("frequency", {"targetCount": 3}, name="Gym")

    summary = asyncio.run(goals_router.progress_summary())

    assert [s["text"] for s in summary] == ["No entries yet", "No entries yet"]
    assert all(s["hasData"] is False for s in summary)


def test_milestones_endpoint_keeps_complete_rows(services):
    goal = _create_goal("numeric", {"unit": "kg", "target": 75}, name="Weight")
    req = goals_router.MilestonesRequest(milestones=[
        goals_router.MilestoneBody(value=80, label="First 5"),
        goals_router.MilestoneBody(label="No value"),
    ])

    updated = asyncio.run(goals_router.update_milestones(goal["id"], req))

    assert [m["label"] for m in updated["milestones"]] == ["First 5"]


def test_entries_filter_by_goal(services):
    first = _create_goal()
    second = _create_goal(name="Read")
    for goal in (first, second):
        req = entries_router.EntryRequest(goalId=goal["id"], date="2026-10-16", value=True)
        asyncio.run(entries_router.create_entry(req))

    listed = asyncio.run(entries_router.list_entries(goalId=first["id"]))
    everything = asyncio.run(entries_router.list_entries())

    assert [e["goalId"] for e in listed] == [first["id"]]
    assert len(everything) == 2


def test_delete_goal_keeps_entries(services):
    goal = _create_goal()
    asyncio.run(goals_router.save_today_entry(goal["id"]))

    assert asyncio.run(goals_router.delete_goal(goal["id"])) == {"success": True}
    assert len(asyncio.run(entries_router.list_entries(goalId=goal["id"]))) == 1


def test_unknown_entry_is_404(services):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(entries_router.delete_entry("missing"))
    assert exc.value.status_code == 404
    assert exc.value.detail == "Entry not found"


def test_todo_reorder_and_grouping(services):
    created = [
        asyncio.run(todos_router.create_todo(todos_router.TodoRequest(text=text)))
        for text in ("one", "two")
    ]
    asyncio.run(todos_router.create_todo(todos_router.TodoRequest(text="old", date="2026-10-10")))

    asyncio.run(todos_router.reorder_todos(
        todos_router.ReorderRequest(orderedIds=[created[1]["id"], created[0]["id"]])
    ))

    today = asyncio.run(todos_router.todays_todos())
    grouped = asyncio.run(todos_router.todos_by_date())

    assert [t["text"] for t in today] == ["two", "one"]
    assert [g["date"] for g in grouped] == ["2026-10-17", "2026-10-10"]


def test_delete_unknown_todo_is_not_an_error(services):
    assert asyncio.run(todos_router.delete_todo("missing")) == {"success": True}


def test_duplicate_tag_is_400(services):
    asyncio.run(tags_router.create_tag(tags_router.TagRequest(name="Health", color="#0a0")))

    with pytest.raises(HTTPException) as exc:
        asyncio.run(tags_router.create_tag(tags_router.TagRequest(name="health")))
    assert exc.value.status_code == 400
    assert exc.value.detail == "Tag already exists"
    assert [t["name"] for t in asyncio.run(tags_router.list_tags())] == ["health"]


def test_renaming_tag_to_existing_name_is_400(services):
    asyncio.run(tags_router.create_tag(tags_router.TagRequest(name="Work")))
    home = asyncio.run(tags_router.create_tag(tags_router.TagRequest(name="home")))

    with pytest.raises(HTTPException) as exc:
        asyncio.run(tags_router.update_tag(home["id"], tags_router.TagRequest(name="WORK")))
    assert exc.value.status_code == 400
    assert sorted(t["name"] for t in asyncio.run(tags_router.list_tags())) == ["home", "work"]


def test_entry_update_onto_another_entry_id_is_400(services):
    goal = _create_goal()
    first, second = [
        asyncio.run(entries_router.create_entry(
            entries_router.EntryRequest(goalId=goal["id"], date=day, value=True)
        ))
        for day in ("2026-10-15", "2026-10-16")
    ]
    req = entries_router.EntryRequest(id=second["id"], goalId=goal["id"], date="2026-10-15", value=False)

    with pytest.raises(HTTPException) as exc:
        asyncio.run(entries_router.update_entry(first["id"], req))
    assert exc.value.status_code == 400

    stored = asyncio.run(entries_router.list_entries(goalId=goal["id"]))
    assert [(e["id"], e["value"]) for e in stored] == [(first["id"], True), (second["id"], True)]
