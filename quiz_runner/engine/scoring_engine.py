"""Quiz Scoring Engine - Pontuação e anotações de revisão."""

import math
from collections.abc import Mapping, Sequence

from ..models.enums import OptionMark
from ..models.schemas import QuizQuestion, QuizSummary


class QuizScoringEngine:
    """Motor de pontuação acerto/erro para quizzes.

    Cada questão vale o mesmo: uma resposta conta como correta somente quando
    o índice registrado é igual a ``correct_index``. Questões sem resposta e
    índices fora do intervalo nunca contam.

    Example:
        >>> scoring = QuizScoringEngine()
        >>> summary = scoring.calculate_summary(questions, {"q1": 1}, 0.6)
        >>> scoring.result_label(summary)
        '1 of 3 (33%) - Failed'
    """

    PASSED_TEXT = "Passed"
    FAILED_TEXT = "Failed"

    def is_correct(self, question: QuizQuestion, selected_index: int | None) -> bool:
        return selected_index is not None and selected_index == question.correct_index

    def calculate_summary(
        self,
        questions: Sequence[QuizQuestion],
        answers: Mapping[int | str, int],
        pass_threshold: float,
    ) -> QuizSummary:
        """Calcula o resultado a partir das respostas atuais.

        Args:
            questions: Questões do quiz, em ordem
            answers: Mapa id da questão -> índice escolhido
            pass_threshold: Fração mínima de acertos para aprovação

        Returns:
            QuizSummary com correct, total, percent e passed
        """
        correct = sum(1 for q in questions if self.is_correct(q, answers.get(q.id)))
        total = len(questions)
        percent = correct / total if total > 0 else 0.0

        return QuizSummary(
            correct=correct,
            total=total,
            percent=percent,
            passed=percent >= pass_threshold,
        )

    def mark_option(
        self, question: QuizQuestion, option_index: int, selected_index: int | None
    ) -> OptionMark:
        """Anotação de revisão de uma alternativa.

        A correta é sempre marcada; a escolhida só é marcada quando errada.
        """
        if option_index == question.correct_index:
            return OptionMark.CORRECT
        if selected_index == option_index:
            return OptionMark.INCORRECT
        return OptionMark.NONE

    def percent_rounded(self, summary: QuizSummary) -> int:
        # meio arredonda para cima (12.5 -> 13)
        return math.floor(summary.percent * 100 + 0.5)

    def result_label(self, summary: QuizSummary) -> str:
        """Texto final exibido ao usuário."""
        status = self.PASSED_TEXT if summary.passed else self.FAILED_TEXT
        return f"{summary.correct} of {summary.total} ({self.percent_rounded(summary)}%) - {status}"
