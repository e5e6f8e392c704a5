"""
간호사 목록 패널 서비스 모듈
- 간호사 추가/삭제, 선호도 편집기 열기/저장/취소, 근무표 생성 요청을 담당
- 화면 상태(loading, error, schedule)를 한 곳에서 관리한다
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from nurse_roster.exceptions import (
    NurseNotFoundError,
    NurseValidationError,
    PreferenceEditError,
    ScheduleGenerationError,
)
from nurse_roster.schemas.roster_schema import Nurse, Schedule
from nurse_roster.services.nurse_store import NurseStore
from nurse_roster.services.preference_editor import CANCEL_BUTTON, CancelSignal, PreferenceEditor
from nurse_roster.services.schedule_renderer import DayColumn, render_schedule
from nurse_roster.utils.utils import get_logger, log_error

logger = get_logger(__name__)

NO_NURSES_MESSAGE = "근무표를 생성하려면 간호사를 한 명 이상 추가해 주세요."
GENERATION_FAILED_MESSAGE = "근무표를 생성하지 못했습니다. 다시 시도하거나 네트워크 연결을 확인해 주세요."


class GenerationStatus(str, Enum):
    idle = "idle"
    pending = "pending"
    settled = "settled"


class GenerationResult(str, Enum):
    ignored = "ignored"  # 이미 요청 진행 중
    rejected = "rejected"  # 간호사 없음
    succeeded = "succeeded"
    failed = "failed"


@dataclass(frozen=True)
class RosterView:
    nurses: Tuple[Nurse, ...]
    name_field: str
    add_error: Optional[str]
    editor: Optional[PreferenceEditor]
    status: GenerationStatus
    error: Optional[str]
    schedule: Optional[Schedule]
    schedule_grid: Optional[List[DayColumn]]

    @property
    def is_loading(self) -> bool:
        return self.status == GenerationStatus.pending

    @property
    def can_generate(self) -> bool:
        return not self.is_loading and len(self.nurses) > 0


class RosterPanel:
    """세션 단위 화면 컨트롤러. 생성 요청은 동시에 하나만 진행된다."""

    def __init__(self, client, store: Optional[NurseStore] = None,
                 cancel_signal: Optional[CancelSignal] = None):
        self.client = client
        self.store = store if store is not None else NurseStore()
        self.cancel_signal = cancel_signal if cancel_signal is not None else CancelSignal()
        self.name_field = ""
        self.add_error: Optional[str] = None
        self.editor: Optional[PreferenceEditor] = None
        self.status = GenerationStatus.idle
        self.error: Optional[str] = None
        self.schedule: Optional[Schedule] = None

    # ───────────────────────── 간호사 목록 ───────────────────────── #
    def add_nurse(self, name: str) -> Optional[Nurse]:
        """실패 시 입력값은 그대로 두고 오류 메시지를 보여준다."""
        try:
            nurse = self.store.add(name)
        except NurseValidationError as e:
            self.name_field = name
            self.add_error = str(e)
            return None
        self.name_field = ""
        self.add_error = None
        return nurse

    def remove_nurse(self, nurse_id: str) -> None:
        self.store.remove(nurse_id)

    # ───────────────────────── 선호도 편집 ───────────────────────── #
    def open_editor(self, nurse_id: str) -> PreferenceEditor:
        nurse = self.store.get(nurse_id)
        if nurse is None:
            raise NurseNotFoundError(f"간호사를 찾을 수 없습니다: {nurse_id}")
        if self.editor is not None:
            self.editor.cancel("replaced")
        self.editor = PreferenceEditor(nurse, self.cancel_signal, on_close=self._editor_closed)
        return self.editor

    def _editor_closed(self, editor: PreferenceEditor) -> None:
        if self.editor is editor:
            self.editor = None

    def require_editor(self) -> PreferenceEditor:
        if self.editor is None:
            raise PreferenceEditError("열려 있는 편집기가 없습니다.")
        return self.editor

    def save_editor(self) -> Nurse:
        updated = self.require_editor().save()
        self.store.replace(updated)
        return updated

    def cancel_editor(self, source: str = CANCEL_BUTTON) -> None:
        if self.editor is not None:
            self.editor.cancel(source)

    # ───────────────────────── 근무표 생성 ───────────────────────── #
    @property
    def can_generate(self) -> bool:
        return self.status != GenerationStatus.pending and len(self.store) > 0

    async def generate(self) -> GenerationResult:
        if self.status == GenerationStatus.pending:
            logger.info("근무표 생성 요청 무시: 이미 진행 중")
            return GenerationResult.ignored
        if len(self.store) == 0:
            self.error = NO_NURSES_MESSAGE
            return GenerationResult.rejected

        nurses = self.store.snapshot()
        self.status = GenerationStatus.pending
        self.error = None
        self.schedule = None
        try:
            schedule = await self.client.generate(nurses)
        except ScheduleGenerationError as e:
            log_error(logger, "schedule_generation", e, {"nurse_count": len(nurses)})
            self.error = GENERATION_FAILED_MESSAGE
            return GenerationResult.failed
        finally:
            self.status = GenerationStatus.settled
        self.schedule = schedule
        return GenerationResult.succeeded

    # ───────────────────────── 화면 상태 ───────────────────────── #
    def view(self) -> RosterView:
        nurses = self.store.snapshot()
        grid = render_schedule(self.schedule, nurses) if self.schedule is not None else None
        return RosterView(
            nurses=nurses,
            name_field=self.name_field,
            add_error=self.add_error,
            editor=self.editor,
            status=self.status,
            error=self.error,
            schedule=self.schedule,
            schedule_grid=grid,
        )
