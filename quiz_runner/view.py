"""Quiz View - Projeção do estado do engine para a camada de apresentação."""

from .engine.quiz_engine import QuizEngine
from .models.enums import OptionMark
from .models.schemas import NavState, OptionView, QuestionView, ResultView, SessionView


def format_timer(seconds: int) -> str:
    """Formata segundos como MM:SS (minutos podem passar de 99)."""
    seconds = max(seconds, 0)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_progress(engine: QuizEngine) -> str:
    if engine.length == 0:
        return "No questions"
    return f"Question {engine.current_index + 1} of {engine.length}"


def build_nav(engine: QuizEngine) -> NavState:
    """Regras dos botões: avancar/finalizar exigem resposta na questão atual."""
    has_selection = isinstance(engine.get_selected_index(), int)
    last = engine.is_last()

    return NavState(
        prev_enabled=engine.current_index > 0,
        next_enabled=not last and engine.length > 0 and has_selection,
        finish_enabled=last and has_selection and not engine.is_finished,
    )


def build_question(engine: QuizEngine, review_mode: bool) -> QuestionView | None:
    question = engine.current_question
    if question is None:
        return None

    selected = engine.get_selected_index()
    options = []
    for index, text in enumerate(question.options):
        mark = OptionMark.NONE
        if review_mode:
            mark = engine.scoring.mark_option(question, index, selected)
        options.append(
            OptionView(index=index, text=text, checked=selected == index, mark=mark)
        )

    return QuestionView(id=question.id, text=question.text, topic=question.topic, options=options)


def build_result(engine: QuizEngine) -> ResultView | None:
    if not engine.is_finished:
        return None

    summary = engine.get_summary()
    return ResultView(
        correct=summary.correct,
        total=summary.total,
        percent=engine.scoring.percent_rounded(summary),
        passed=summary.passed,
        label=engine.scoring.result_label(summary),
    )


def build_view(engine: QuizEngine, review_mode: bool = False) -> SessionView:
    """Monta o SessionView completo a partir do engine."""
    return SessionView(
        title=engine.title,
        progress=format_progress(engine),
        timer=format_timer(engine.remaining_sec),
        current_index=engine.current_index,
        total=engine.length,
        remaining_sec=engine.remaining_sec,
        phase=engine.phase,
        review_mode=review_mode,
        question=build_question(engine, review_mode),
        nav=build_nav(engine),
        result=build_result(engine),
    )
