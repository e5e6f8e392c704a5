from dataclasses import dataclass
from typing import Iterable, List, Tuple

from nurse_roster.schemas.roster_schema import (
    DAY_LABELS, DAY_ORDER, SHIFT_INFO, SHIFT_ORDER, DayOfWeek, Nurse, Schedule, ShiftType,
)

NOBODY_ASSIGNED = "배정 없음"
DEFAULT_OFF_REASON = "휴무"


@dataclass(frozen=True)
class ShiftCell:
    shift: ShiftType
    label: str
    time: str
    names: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.names

    @property
    def display_names(self) -> Tuple[str, ...]:
        return self.names if self.names else (NOBODY_ASSIGNED,)


@dataclass(frozen=True)
class OffDutyNurse:
    name: str
    reason: str


@dataclass(frozen=True)
class DayColumn:
    day: DayOfWeek
    label: str
    shifts: Tuple[ShiftCell, ...]
    off_duty: Tuple[OffDutyNurse, ...]

    @property
    def is_weekend(self) -> bool:
        return self.day in (DayOfWeek.saturday, DayOfWeek.sunday)


def off_duty_for(day: DayOfWeek, nurses: Iterable[Nurse]) -> Tuple[OffDutyNurse, ...]:
    """현재 저장된 선호도 기준, 해당 요일에 근무 불가인 간호사와 사유."""
    return tuple(
        OffDutyNurse(name=n.name, reason=n.preferences.unavailableDays[day] or DEFAULT_OFF_REASON)
        for n in nurses
        if day in n.preferences.unavailableDays
    )


def render_schedule(schedule: Schedule, nurses: Iterable[Nurse]) -> List[DayColumn]:
    """
    근무표와 간호사 목록으로 요일별 표시 데이터를 만든다.
    휴무 패널은 근무표 응답이 아니라 현재 선호도를 참조한다.
    """
    nurses = list(nurses)
    columns = []
    for day in DAY_ORDER:
        daily = schedule.for_day(day)
        cells = tuple(
            ShiftCell(
                shift=shift,
                label=SHIFT_INFO[shift]["label"],
                time=SHIFT_INFO[shift]["time"],
                names=tuple(daily.names_for(shift)),
            )
            for shift in SHIFT_ORDER
        )
        columns.append(DayColumn(day=day, label=DAY_LABELS[day], shifts=cells,
                                 off_duty=off_duty_for(day, nurses)))
    return columns
