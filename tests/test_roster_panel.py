import asyncio

from conftest import empty_schedule_dict
from nurse_roster.exceptions import ScheduleGenerationError
from nurse_roster.schemas.roster_schema import DayOfWeek, Schedule, ShiftType
from nurse_roster.services.nurse_store import DUPLICATE_NAME_MESSAGE, EMPTY_NAME_MESSAGE
from nurse_roster.services.roster_panel import (
    GENERATION_FAILED_MESSAGE,
    NO_NURSES_MESSAGE,
    GenerationResult,
    GenerationStatus,
    RosterPanel,
)


class StubClient:
    def __init__(self, schedule=None, error=None):
        self.schedule = schedule or Schedule.model_validate(empty_schedule_dict())
        self.error = error
        self.calls = []

    async def generate(self, nurses):
        self.calls.append(nurses)
        if self.error is not None:
            raise self.error
        return self.schedule


class BlockingClient(StubClient):
    def __init__(self):
        super().__init__()
        self.release = None

    async def generate(self, nurses):
        self.calls.append(nurses)
        await self.release.wait()
        return self.schedule


def test_add_failure_keeps_field_and_shows_error():
    panel = RosterPanel(StubClient())

    panel.add_nurse("   ")
    assert panel.add_error == EMPTY_NAME_MESSAGE
    assert panel.name_field == "   "

    panel.add_nurse("A")
    panel.add_nurse("A ")
    assert panel.add_error == DUPLICATE_NAME_MESSAGE
    assert panel.name_field == "A "
    assert len(panel.store) == 1


def test_add_success_clears_field_and_error():
    panel = RosterPanel(StubClient())
    panel.add_nurse("")

    panel.add_nurse("A")

    assert panel.add_error is None
    assert panel.name_field == ""


def test_editor_save_commits_and_cancel_discards():
    panel = RosterPanel(StubClient())
    a = panel.add_nurse("A")

    editor = panel.open_editor(a.id)
    editor.toggle_shift(ShiftType.nightShift)
    panel.cancel_editor("backdrop")
    assert panel.editor is None
    assert panel.store.get(a.id).preferences.is_default()

    editor = panel.open_editor(a.id)
    editor.toggle_day(DayOfWeek.monday)
    editor.set_reason(DayOfWeek.monday, "leave")
    panel.save_editor()

    assert panel.editor is None
    assert panel.store.get(a.id).preferences.unavailableDays == {DayOfWeek.monday: "leave"}


def test_escape_signal_closes_open_editor():
    panel = RosterPanel(StubClient())
    a = panel.add_nurse("A")
    panel.open_editor(a.id).toggle_shift(ShiftType.dayShift)

    panel.cancel_signal.fire("escape")

    assert panel.editor is None
    assert panel.cancel_signal.listener_count == 0
    assert panel.store.get(a.id).preferences.is_default()


def test_reopening_editor_releases_previous_subscription():
    panel = RosterPanel(StubClient())
    a = panel.add_nurse("A")
    b = panel.add_nurse("B")

    first = panel.open_editor(a.id)
    panel.open_editor(b.id)

    assert first.closed
    assert panel.cancel_signal.listener_count == 1
    assert panel.editor.nurse_id == b.id


def test_generate_without_nurses_is_rejected_without_request():
    client = StubClient()
    panel = RosterPanel(client)

    assert not panel.can_generate
    result = asyncio.run(panel.generate())

    assert result == GenerationResult.rejected
    assert panel.error == NO_NURSES_MESSAGE
    assert client.calls == []


def test_generate_success_sets_schedule():
    client = StubClient()
    panel = RosterPanel(client)
    panel.add_nurse("A")

    result = asyncio.run(panel.generate())

    assert result == GenerationResult.succeeded
    assert panel.status == GenerationStatus.settled
    assert panel.schedule is client.schedule
    assert panel.error is None


def test_generate_failure_shows_generic_message_and_no_schedule():
    panel = RosterPanel(StubClient(error=ScheduleGenerationError("bad json")))
    panel.add_nurse("A")

    result = asyncio.run(panel.generate())

    assert result == GenerationResult.failed
    assert panel.error == GENERATION_FAILED_MESSAGE
    assert panel.schedule is None
    assert panel.view().schedule_grid is None


def test_second_generate_while_pending_is_ignored():
    client = BlockingClient()
    panel = RosterPanel(client)
    panel.add_nurse("A")

    async def scenario():
        client.release = asyncio.Event()
        first = asyncio.create_task(panel.generate())
        await asyncio.sleep(0)

        assert panel.status == GenerationStatus.pending
        assert not panel.can_generate
        assert not panel.view().can_generate
        assert await panel.generate() == GenerationResult.ignored

        # 진행 중에도 목록 변경은 가능하고, 요청은 시작 시점 스냅샷을 사용한다
        panel.add_nurse("B")
        client.release.set()
        return await first

    assert asyncio.run(scenario()) == GenerationResult.succeeded
    assert len(client.calls) == 1
    assert [n.name for n in client.calls[0]] == ["A"]
    assert len(panel.store) == 2
