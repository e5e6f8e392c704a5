import json
from typing import Any, Dict, List, Optional, Sequence, TypedDict

from google import genai
from google.genai import types
from pydantic import ValidationError

from nurse_roster.config import Settings
from nurse_roster.exceptions import ScheduleFormatError, ScheduleGenerationError
from nurse_roster.schemas.roster_schema import (
    DAY_ORDER, SHIFT_INFO, SHIFT_ORDER, Nurse, Schedule,
)
from nurse_roster.utils.utils import get_logger

logger = get_logger(__name__)

NO_PREFERENCES_TEXT = "No specific nurse preferences."

DAY_NAMES = {day: day.value.capitalize() for day in DAY_ORDER}


class ScheduleState(TypedDict, total=False):
    """
    근무표 생성 그래프의 상태 타입

    Attributes:
        nurses: 요청 시점의 간호사 목록 스냅샷
        system: 시스템 프롬프트
        prompt: 사용자 프롬프트
        raw_text: 모델 응답 원문
        schedule: 형식 검증을 통과한 근무표
    """
    nurses: List[Nurse]
    system: str
    prompt: str
    raw_text: Optional[str]
    schedule: Schedule


def _shift_schema() -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))


def build_response_schema() -> types.Schema:
    """7개 요일 × 3개 근무 × 문자열 배열 구조. 모든 키가 필수."""
    daily = types.Schema(
        type=types.Type.OBJECT,
        properties={shift.value: _shift_schema() for shift in SHIFT_ORDER},
        required=[shift.value for shift in SHIFT_ORDER],
    )
    return types.Schema(
        type=types.Type.OBJECT,
        properties={day.value: daily for day in DAY_ORDER},
        required=[day.value for day in DAY_ORDER],
    )


def format_preferences(nurses: Sequence[Nurse]) -> str:
    """
    선호도가 있는 간호사만 한 줄씩 요약한다. 아무도 없으면 고정 문장을 반환한다.
    예) - 김간호: Preferred shifts: Night Shift; Unavailable days: Monday (annual leave)
    """
    lines = []
    for nurse in nurses:
        prefs = nurse.preferences
        parts = []
        if prefs.preferredShifts:
            shift_names = ", ".join(SHIFT_INFO[s]["name"] for s in prefs.preferredShifts)
            parts.append(f"Preferred shifts: {shift_names}")
        if prefs.unavailableDays:
            day_names = ", ".join(
                f"{DAY_NAMES[day]} ({reason})" if reason else DAY_NAMES[day]
                for day, reason in prefs.unavailableDays.items()
            )
            parts.append(f"Unavailable days: {day_names}")
        if parts:
            lines.append(f"- {nurse.name}: {'; '.join(parts)}")

    if not lines:
        return NO_PREFERENCES_TEXT

    preferences_text = "\n".join(lines)
    return (
        "Nurse Preferences (Please try to accommodate these as much as possible "
        "while respecting all other rules):\n"
        f"{preferences_text}"
    )


class ScheduleGeneratorPrompt:
    def __init__(self, nurses: Sequence[Nurse]):
        """
        프롬프트 클래스
        """
        shift_lines = "\n".join(
            f"                - {SHIFT_INFO[s]['name']} ({SHIFT_INFO[s]['code']}): {SHIFT_INFO[s]['time']}"
            for s in SHIFT_ORDER
        )
        self.system = f"""
            # GOAL:
            You are an expert hospital ward shift scheduler.
            Create a 7-day (Monday to Sunday) nursing schedule for a 24-hour ward.

            ## Scheduling Rules & Constraints
            1. Shifts: There are three 8-hour shifts per day:
{shift_lines}
            2. Staffing: Each shift must be staffed by at least 2 nurses. If possible, aim for 2-3 nurses per shift.
            3. Fairness: Distribute shifts as evenly as possible among all available nurses over the week.
            4. Rest: Every nurse must have at least two full days off during the 7-day period. A day off means they are not assigned to any shift on that day.
            5. Safety: CRITICAL RULE - A nurse cannot be scheduled for a Day Shift on the day immediately following a Night Shift. This is to ensure adequate rest.
            6. Consistency: Only use the provided nurse names in the schedule. Do not assign a nurse to a day if it is listed as their unavailable day.

            ## Output Format
            Provide the output STRICTLY as a JSON object that conforms to the provided schema.
            Do not include any introductory text, markdown formatting, or explanations.
            The entire response should be only the valid JSON object.
        """

        names = [n.name for n in nurses]
        self.human = f"""
            # CONTEXT:
            Available Nurses:
            {', '.join(names)}
            Total nurses: {len(names)}

            {format_preferences(nurses)}

            # OUTPUT:
        """

    @property
    def text(self) -> str:
        return f"{self.system}\n{self.human}"


def validate_schedule_shape(data: Any) -> Schedule:
    """
    최상위 구조만 검사한다: 7개 요일 키와 각 요일의 3개 근무 키.
    배정 인원, 휴무일, 나이트 다음날 데이 금지 등 규칙 준수 여부는 검사하지 않는다.
    """
    if not isinstance(data, dict):
        raise ScheduleFormatError("Invalid schedule format: top-level value is not an object")
    for day in DAY_ORDER:
        daily = data.get(day.value)
        if not isinstance(daily, dict):
            raise ScheduleFormatError(f"Invalid schedule format: Missing data for {day.value}")
        for shift in SHIFT_ORDER:
            if shift.value not in daily:
                raise ScheduleFormatError(
                    f"Invalid schedule format: Missing {shift.value} for {day.value}"
                )
    try:
        return Schedule.model_validate(data)
    except ValidationError as e:
        raise ScheduleFormatError(f"Invalid schedule format: {e}") from e


def parse_schedule(raw_text: Optional[str]) -> Schedule:
    if not raw_text or not raw_text.strip():
        raise ScheduleGenerationError("Empty response from generation service")
    try:
        data = json.loads(raw_text.strip())
    except json.JSONDecodeError as e:
        raise ScheduleGenerationError("Response is not valid JSON") from e
    return validate_schedule_shape(data)


class GeminiTransport:
    """google-genai 클라이언트로 한 번의 구조화 출력 요청을 보낸다."""

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.google_api_key)
        return self._client

    async def complete(self, system: str, prompt: str) -> Optional[str]:
        response = await self.client.aio.models.generate_content(
            model=self.settings.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system,
                response_mime_type="application/json",
                response_schema=build_response_schema(),
                temperature=self.settings.temperature,
            ),
        )
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            logger.info(
                f"토큰 사용량: model={self.settings.model_name}, "
                f"prompt_tokens={usage.prompt_token_count}, "
                f"completion_tokens={usage.candidates_token_count}"
            )
        return response.text


def create_prompt_builder():
    def prompt_builder(state: ScheduleState) -> Dict[str, Any]:
        prompt = ScheduleGeneratorPrompt(state["nurses"])
        return {"system": prompt.system, "prompt": prompt.human}
    return prompt_builder


def create_schedule_generator(transport):
    async def schedule_generator(state: ScheduleState) -> Dict[str, Any]:
        try:
            raw_text = await transport.complete(state["system"], state["prompt"])
        except Exception as e:
            raise ScheduleGenerationError("Failed to generate schedule from AI service.") from e
        return {"raw_text": raw_text}
    return schedule_generator


def shape_validator(state: ScheduleState) -> Dict[str, Any]:
    return {"schedule": parse_schedule(state.get("raw_text"))}
