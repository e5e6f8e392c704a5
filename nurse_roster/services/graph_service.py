from typing import Sequence

from nurse_roster.agents.main_graph import GraphGenerate
from nurse_roster.exceptions import ScheduleGenerationError
from nurse_roster.schemas.roster_schema import Nurse, Schedule
from nurse_roster.utils.utils import Timer, get_logger

logger = get_logger(__name__)


class GraphService:
    """근무표 생성 요청 클라이언트. 전송 계층은 생성 시 주입받는다."""

    def __init__(self, transport):
        self._graph = GraphGenerate(transport)

    async def generate(self, nurses: Sequence[Nurse]) -> Schedule:
        """
        간호사 목록 스냅샷으로 근무표를 한 번 생성한다.

        Args:
            nurses (list): 요청 시점의 간호사 목록

        Returns:
            Schedule: 형식 검증을 통과한 근무표

        Raises:
            ScheduleGenerationError: 호출 실패, JSON 파싱 실패, 형식 오류
        """
        snapshot = [n.model_copy(deep=True) for n in nurses]
        with Timer(f"근무표 생성 (간호사 {len(snapshot)}명)", logger):
            try:
                response = await self._graph.ainvoke({"nurses": snapshot})
            except ScheduleGenerationError:
                raise
            except Exception as e:
                raise ScheduleGenerationError("Failed to generate schedule from AI service.") from e
        return response["schedule"]
