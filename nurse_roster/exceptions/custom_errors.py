class NurseValidationError(Exception):
    """간호사 추가 시 이름이 비어 있거나 이미 등록된 경우 발생."""

    pass


class NurseNotFoundError(Exception):
    """존재하지 않는 간호사 ID로 편집을 시도한 경우 발생."""

    pass


class PreferenceEditError(Exception):
    """선호도 편집 규칙 위반 (닫힌 편집기 사용, 근무 가능일에 사유 입력 등)."""

    pass


class GenerationPreconditionError(Exception):
    """간호사가 한 명도 없는 상태에서 근무표 생성을 요청한 경우 발생."""

    pass


class ScheduleGenerationError(Exception):
    """외부 생성 서비스 호출 실패, JSON 파싱 실패, 응답 형식 오류를 모두 포함."""

    pass


class ScheduleFormatError(ScheduleGenerationError):
    """응답 JSON에 필수 요일/근무 키가 누락된 경우 발생."""

    pass


class GenerationInProgressError(Exception):
    """이미 진행 중인 근무표 생성 요청이 있는 경우 발생."""

    pass


class ConfigurationError(Exception):
    """필수 설정 값(API 키 등)이 없는 경우 발생."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    NurseValidationError: 400,
    NurseNotFoundError: 404,
    PreferenceEditError: 400,
    GenerationInProgressError: 409,
    GenerationPreconditionError: 422,
    ScheduleFormatError: 502,
    ScheduleGenerationError: 502,
}


def status_code_for(error: Exception) -> int:
    """예외 타입에 대응하는 HTTP 상태 코드를 반환한다. 매핑이 없으면 500."""
    for error_type in type(error).__mro__:
        if error_type in CUSTOM_ERRORS:
            return CUSTOM_ERRORS[error_type]
    return 500
