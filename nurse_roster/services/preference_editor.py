"""
간호사 선호도 편집기 모듈
- 간호사 한 명의 선호도를 임시 초안으로 편집하고, 저장 시에만 결과를 내보낸다
- 취소(버튼/배경 클릭/Esc 등 외부 신호) 시 초안을 버리고 저장소는 건드리지 않는다
"""
from typing import Callable, List, Optional

from nurse_roster.exceptions import PreferenceEditError
from nurse_roster.schemas.roster_schema import DayOfWeek, Nurse, NursePreferences, ShiftType
from nurse_roster.utils.utils import get_logger

logger = get_logger(__name__)

CANCEL_BUTTON = "button"
CANCEL_BACKDROP = "backdrop"
CANCEL_ESCAPE = "escape"


class CancelSignal:
    """외부 취소 신호(예: 페이지에서 전달한 Esc 키) 구독 허브."""

    def __init__(self):
        self._listeners: List[Callable[[str], None]] = []

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def fire(self, source: str = CANCEL_ESCAPE) -> None:
        for listener in list(self._listeners):
            listener(source)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class PreferenceEditor:
    """
    선호도 편집 초안.
    열릴 때 취소 신호를 구독하고, 어떤 경로로 닫히든 구독을 해제한다.
    """

    def __init__(self, nurse: Nurse, signal: Optional[CancelSignal] = None,
                 on_close: Optional[Callable[["PreferenceEditor"], None]] = None):
        self.nurse_id = nurse.id
        self.nurse_name = nurse.name
        self.draft: NursePreferences = nurse.preferences.model_copy(deep=True)
        self.closed = False
        self.close_reason: Optional[str] = None
        self._on_close = on_close
        self._unsubscribe = signal.subscribe(self.cancel) if signal is not None else None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        if not self.closed:
            self.cancel("exit")

    def _ensure_open(self):
        if self.closed:
            raise PreferenceEditError("이미 닫힌 편집기입니다.")

    def _close(self, reason: str) -> None:
        self.closed = True
        self.close_reason = reason
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._on_close is not None:
            self._on_close(self)

    def has_shift(self, shift: ShiftType) -> bool:
        return shift in self.draft.preferredShifts

    def is_unavailable(self, day: DayOfWeek) -> bool:
        return day in self.draft.unavailableDays

    def toggle_shift(self, shift: ShiftType) -> None:
        self._ensure_open()
        shift = ShiftType(shift)
        if shift in self.draft.preferredShifts:
            self.draft.preferredShifts = [s for s in self.draft.preferredShifts if s != shift]
        else:
            self.draft.preferredShifts = self.draft.preferredShifts + [shift]

    def toggle_day(self, day: DayOfWeek) -> None:
        self._ensure_open()
        day = DayOfWeek(day)
        days = dict(self.draft.unavailableDays)
        if day in days:
            del days[day]
        else:
            days[day] = ""
        self.draft.unavailableDays = days

    def set_reason(self, day: DayOfWeek, reason: str) -> None:
        """근무 불가로 표시된 요일에만 사유를 쓸 수 있다. 그 외에는 거부한다."""
        self._ensure_open()
        day = DayOfWeek(day)
        if day not in self.draft.unavailableDays:
            raise PreferenceEditError("근무 불가 요일로 먼저 선택해 주세요.")
        days = dict(self.draft.unavailableDays)
        days[day] = reason
        self.draft.unavailableDays = days

    def save(self) -> Nurse:
        self._ensure_open()
        updated = Nurse(id=self.nurse_id, name=self.nurse_name,
                        preferences=self.draft.model_copy(deep=True))
        self._close("save")
        return updated

    def cancel(self, source: str = CANCEL_BUTTON) -> None:
        if self.closed:
            return
        logger.info(f"선호도 편집 취소: id={self.nurse_id}, source={source}")
        self._close(source)
