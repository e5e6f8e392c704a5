from langgraph.graph import StateGraph, END

from nurse_roster.agents.schedule_generator_agent import (
    ScheduleState,
    create_prompt_builder,
    create_schedule_generator,
    shape_validator,
)


def GraphGenerate(transport):
    """
    근무표 생성 그래프 생성

    Returns:
        CompiledGraph: 컴파일된 그래프 객체

    Notes:
        prompt_builder → schedule_generator → shape_validator 순서로 실행
        재시도 없음. 어느 단계든 실패하면 ScheduleGenerationError로 끝난다.
    """
    graph = StateGraph(ScheduleState)
    graph.add_node('prompt_builder', create_prompt_builder())
    graph.add_node('schedule_generator', create_schedule_generator(transport))
    graph.add_node('shape_validator', shape_validator)

    graph.set_entry_point('prompt_builder')
    graph.add_edge('prompt_builder', 'schedule_generator')
    graph.add_edge('schedule_generator', 'shape_validator')
    graph.add_edge('shape_validator', END)

    app = graph.compile()
    return app
