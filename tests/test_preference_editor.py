import pytest

from nurse_roster.exceptions import PreferenceEditError
from nurse_roster.schemas.roster_schema import DayOfWeek, Nurse, NursePreferences, ShiftType
from nurse_roster.services.preference_editor import CancelSignal, PreferenceEditor


def make_nurse(**prefs):
    return Nurse(id="n1", name="김간호", preferences=NursePreferences(**prefs))


def test_toggle_shift_twice_restores_original():
    nurse = make_nurse(preferredShifts=[ShiftType.eveningShift])
    editor = PreferenceEditor(nurse)

    editor.toggle_shift(ShiftType.dayShift)
    assert set(editor.draft.preferredShifts) == {ShiftType.eveningShift, ShiftType.dayShift}

    editor.toggle_shift(ShiftType.dayShift)
    assert set(editor.draft.preferredShifts) == {ShiftType.eveningShift}


def test_toggle_day_twice_restores_original_keys():
    nurse = make_nurse(unavailableDays={DayOfWeek.tuesday: "교육"})
    editor = PreferenceEditor(nurse)

    editor.toggle_day(DayOfWeek.sunday)
    assert editor.draft.unavailableDays[DayOfWeek.sunday] == ""

    editor.toggle_day(DayOfWeek.sunday)
    assert set(editor.draft.unavailableDays) == {DayOfWeek.tuesday}


def test_toggle_accepts_raw_values():
    editor = PreferenceEditor(make_nurse())
    editor.toggle_shift("nightShift")
    editor.toggle_day("monday")

    assert editor.draft.preferredShifts == [ShiftType.nightShift]
    assert DayOfWeek.monday in editor.draft.unavailableDays


def test_set_reason_overwrites_for_unavailable_day():
    editor = PreferenceEditor(make_nurse(unavailableDays={DayOfWeek.monday: "old"}))
    editor.set_reason(DayOfWeek.monday, "연차")
    assert editor.draft.unavailableDays[DayOfWeek.monday] == "연차"


def test_set_reason_rejected_for_available_day():
    editor = PreferenceEditor(make_nurse())

    with pytest.raises(PreferenceEditError):
        editor.set_reason(DayOfWeek.wednesday, "training")

    assert editor.draft.unavailableDays == {}


def test_draft_does_not_touch_original_nurse():
    nurse = make_nurse()
    editor = PreferenceEditor(nurse)
    editor.toggle_shift(ShiftType.dayShift)
    editor.toggle_day(DayOfWeek.friday)

    assert nurse.preferences.is_default()


def test_save_returns_full_nurse_and_closes():
    editor = PreferenceEditor(make_nurse())
    editor.toggle_day(DayOfWeek.friday)
    editor.set_reason(DayOfWeek.friday, "병가")

    saved = editor.save()

    assert saved.id == "n1"
    assert saved.name == "김간호"
    assert saved.preferences.unavailableDays == {DayOfWeek.friday: "병가"}
    assert editor.closed
    with pytest.raises(PreferenceEditError):
        editor.toggle_shift(ShiftType.dayShift)


def test_cancel_signal_closes_editor_and_releases_subscription():
    signal = CancelSignal()
    editor = PreferenceEditor(make_nurse(), signal)
    assert signal.listener_count == 1

    signal.fire("escape")

    assert editor.closed
    assert editor.close_reason == "escape"
    assert signal.listener_count == 0


@pytest.mark.parametrize("exit_path", ["save", "cancel", "context"])
def test_every_exit_path_releases_subscription(exit_path):
    signal = CancelSignal()
    editor = PreferenceEditor(make_nurse(), signal)

    if exit_path == "save":
        editor.save()
    elif exit_path == "cancel":
        editor.cancel("backdrop")
    else:
        with editor:
            pass

    assert editor.closed
    assert signal.listener_count == 0


def test_signal_after_save_has_no_effect():
    signal = CancelSignal()
    closed = []
    editor = PreferenceEditor(make_nurse(), signal, on_close=lambda e: closed.append(e.close_reason))

    editor.save()
    signal.fire("escape")

    assert closed == ["save"]
