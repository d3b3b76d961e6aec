"""Quiz Schemas - Modelos Pydantic do quiz e da camada de apresentação."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import OptionMark, QuizPhase

# =============================================================================
# DEFINIÇÃO DO QUIZ
# =============================================================================


class _DefinitionModel(BaseModel):
    """Aceita tanto snake_case quanto camelCase (formato do questions.json)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class QuizQuestion(_DefinitionModel):
    """Questão de múltipla escolha.

    Apenas dados: a validação de intervalo (correct_index, ids únicos) é feita
    pelo loader antes de o engine ser construido.
    """

    id: int | str = Field(..., description="ID estável da questão (chave das respostas)")
    text: str = Field(..., description="Enunciado da questão")
    options: list[str] = Field(..., description="Alternativas em ordem")
    correct_index: int = Field(..., description="Índice da alternativa correta")
    topic: str | None = Field(default=None, description="Tópico (sem efeito na pontuação)")


class QuizDefinition(_DefinitionModel):
    """Configuração imutável de um quiz."""

    title: str = Field(..., description="Titulo do quiz")
    time_limit_sec: int = Field(..., ge=0, description="Tempo limite em segundos")
    pass_threshold: float = Field(..., ge=0.0, le=1.0, description="Fração mínima para aprovação")
    questions: list[QuizQuestion] = Field(default_factory=list, description="Questões em ordem")


class QuizSummary(BaseModel):
    """Resultado derivado das respostas atuais."""

    correct: int = Field(..., description="Respostas corretas")
    total: int = Field(..., description="Total de questões")
    percent: float = Field(..., description="Fração de acertos (0 quando não ha questões)")
    passed: bool = Field(..., description="percent >= pass_threshold")


# =============================================================================
# APRESENTAÇÃO
# =============================================================================


class SelectRequest(BaseModel):
    """Request para marcar uma alternativa na questão atual."""

    option_index: int = Field(..., description="Índice da alternativa escolhida")


class OptionView(BaseModel):
    index: int
    text: str
    checked: bool = False
    mark: OptionMark = OptionMark.NONE


class QuestionView(BaseModel):
    id: int | str
    text: str
    topic: str | None = None
    options: list[OptionView] = Field(default_factory=list)


class NavState(BaseModel):
    """Habilitação dos botões de navegação."""

    prev_enabled: bool
    next_enabled: bool
    finish_enabled: bool


class ResultView(BaseModel):
    correct: int
    total: int
    percent: int = Field(..., description="Percentual arredondado (0-100)")
    passed: bool
    label: str = Field(..., description="Texto pronto para exibição")


class SessionView(BaseModel):
    """Estado renderizável da sessão."""

    title: str
    progress: str = Field(..., description="Ex: 'Question 2 of 10'")
    timer: str = Field(..., description="Tempo restante em MM:SS")
    current_index: int
    total: int
    remaining_sec: int
    phase: QuizPhase
    review_mode: bool = False
    question: QuestionView | None = None
    nav: NavState
    result: ResultView | None = None


class IntentResponse(BaseModel):
    """Response de uma ação do usuário."""

    moved: bool = Field(..., description="Se a ação alterou o estado")
    session: SessionView
