"""
간호사 목록 저장소 모듈
- 세션 동안만 유지되는 메모리 저장소 (영구 저장 없음)
- 추가/삭제/교체 시 새 스냅샷(tuple)을 만들어 이전 스냅샷은 그대로 유효하다
"""
from typing import Callable, Iterator, Optional, Tuple
import uuid

from nurse_roster.exceptions import NurseValidationError
from nurse_roster.schemas.roster_schema import Nurse, NursePreferences
from nurse_roster.utils.utils import get_logger

logger = get_logger(__name__)

EMPTY_NAME_MESSAGE = "간호사 이름을 입력해 주세요."
DUPLICATE_NAME_MESSAGE = "이미 목록에 있는 간호사입니다."


def _new_id() -> str:
    return uuid.uuid4().hex


class NurseStore:
    """간호사 목록의 단일 원본."""

    def __init__(self, id_factory: Callable[[], str] = _new_id):
        self._nurses: Tuple[Nurse, ...] = ()
        self._id_factory = id_factory

    def __len__(self) -> int:
        return len(self._nurses)

    def __iter__(self) -> Iterator[Nurse]:
        return iter(self.snapshot())

    def snapshot(self) -> Tuple[Nurse, ...]:
        """현재 목록의 복사본. 이후 변경의 영향을 받지 않는다."""
        return tuple(n.model_copy(deep=True) for n in self._nurses)

    def get(self, nurse_id: str) -> Optional[Nurse]:
        for nurse in self._nurses:
            if nurse.id == nurse_id:
                return nurse.model_copy(deep=True)
        return None

    def add(self, name: str) -> Nurse:
        """
        간호사를 추가한다.
        - 공백 이름, 중복 이름이면 NurseValidationError (목록 변경 없음)
        """
        trimmed = (name or "").strip()
        if not trimmed:
            raise NurseValidationError(EMPTY_NAME_MESSAGE)
        if any(n.name == trimmed for n in self._nurses):
            raise NurseValidationError(DUPLICATE_NAME_MESSAGE)

        existing_ids = {n.id for n in self._nurses}
        nurse_id = self._id_factory()
        while nurse_id in existing_ids:
            nurse_id = self._id_factory()

        nurse = Nurse(id=nurse_id, name=trimmed, preferences=NursePreferences())
        self._nurses = self._nurses + (nurse,)
        logger.info(f"간호사 추가: id={nurse_id}, name={trimmed}, total={len(self._nurses)}")
        return nurse.model_copy(deep=True)

    def remove(self, nurse_id: str) -> None:
        """해당 ID가 없으면 아무 것도 하지 않는다."""
        remaining = tuple(n for n in self._nurses if n.id != nurse_id)
        if len(remaining) != len(self._nurses):
            logger.info(f"간호사 삭제: id={nurse_id}")
        self._nurses = remaining

    def replace(self, nurse: Nurse) -> None:
        """ID로 찾아 선호도만 교체한다. 위치는 유지되고, 없는 ID면 무시한다."""
        updated = []
        found = False
        for current in self._nurses:
            if current.id == nurse.id:
                current = current.model_copy(
                    update={"preferences": nurse.preferences.model_copy(deep=True)}
                )
                found = True
            updated.append(current)
        if found:
            self._nurses = tuple(updated)
            logger.info(f"간호사 선호도 저장: id={nurse.id}")
