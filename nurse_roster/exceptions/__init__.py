from .custom_errors import (
    CUSTOM_ERRORS,
    ConfigurationError,
    GenerationInProgressError,
    GenerationPreconditionError,
    NurseNotFoundError,
    NurseValidationError,
    PreferenceEditError,
    ScheduleFormatError,
    ScheduleGenerationError,
    status_code_for,
)
