from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class ShiftType(str, Enum):
    """하루 3교대 근무 (고정 순서)."""
    dayShift = "dayShift"
    eveningShift = "eveningShift"
    nightShift = "nightShift"


class DayOfWeek(str, Enum):
    """월요일부터 일요일까지 (고정 순서)."""
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"


SHIFT_ORDER: List[ShiftType] = list(ShiftType)
DAY_ORDER: List[DayOfWeek] = list(DayOfWeek)

# 근무 표시 정보: (이름, 코드, 시간)
SHIFT_INFO: Dict[ShiftType, Dict[str, str]] = {
    ShiftType.dayShift: {"label": "데이", "code": "D", "name": "Day Shift", "time": "08:00 - 16:00"},
    ShiftType.eveningShift: {"label": "이브닝", "code": "E", "name": "Evening Shift", "time": "16:00 - 00:00"},
    ShiftType.nightShift: {"label": "나이트", "code": "N", "name": "Night Shift", "time": "00:00 - 08:00"},
}

DAY_LABELS: Dict[DayOfWeek, str] = {
    DayOfWeek.monday: "월요일",
    DayOfWeek.tuesday: "화요일",
    DayOfWeek.wednesday: "수요일",
    DayOfWeek.thursday: "목요일",
    DayOfWeek.friday: "금요일",
    DayOfWeek.saturday: "토요일",
    DayOfWeek.sunday: "일요일",
}


class NursePreferences(BaseModel):
    """간호사 개인 선호도.
    - preferredShifts: 선호 근무 (중복 없음, 순서 무관)
    - unavailableDays: 근무 불가 요일 → 사유 (빈 문자열도 '불가'로 취급)
    - 예시: {"preferredShifts": ["nightShift"], "unavailableDays": {"monday": "연차"}}
    """
    preferredShifts: List[ShiftType] = Field(default_factory=list)
    unavailableDays: Dict[DayOfWeek, str] = Field(default_factory=dict)

    @field_validator("preferredShifts")
    @classmethod
    def _dedupe_shifts(cls, shifts: List[ShiftType]) -> List[ShiftType]:
        return list(dict.fromkeys(shifts))

    def is_default(self) -> bool:
        return not self.preferredShifts and not self.unavailableDays


class Nurse(BaseModel):
    id: str
    name: str = Field(..., min_length=1)
    preferences: NursePreferences = Field(default_factory=NursePreferences)


class DailySchedule(BaseModel):
    """하루 근무 배정. 각 근무별 간호사 이름 목록."""
    dayShift: List[str]
    eveningShift: List[str]
    nightShift: List[str]

    def names_for(self, shift: ShiftType) -> List[str]:
        return getattr(self, shift.value)


class Schedule(BaseModel):
    """7일 근무표. 한 번의 생성 요청으로 통째로 만들어진다."""
    monday: DailySchedule
    tuesday: DailySchedule
    wednesday: DailySchedule
    thursday: DailySchedule
    friday: DailySchedule
    saturday: DailySchedule
    sunday: DailySchedule

    def for_day(self, day: DayOfWeek) -> DailySchedule:
        return getattr(self, day.value)


class NurseCreateRequest(BaseModel):
    name: str


class ReasonUpdateRequest(BaseModel):
    reason: str = ""


class PreferencesUpdate(BaseModel):
    """JSON API로 선호도 전체를 한 번에 저장할 때 사용."""
    preferences: NursePreferences
