"""Loaders for the bundled supplement catalog and quiz question bank."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from supplement_rewards.domain.catalog import Supplement
from supplement_rewards.domain.errors import StorageError
from supplement_rewards.domain.quiz import QuizDifficulty, QuizQuestion

_logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DEFAULT_SUPPLEMENTS_PATH = DATA_DIR / "supplements.json"
DEFAULT_QUESTIONS_PATH = DATA_DIR / "quiz_questions.json"


class SupplementPayload(BaseModel):
    """Supplement entry as stored in the catalog JSON."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    dosage: str = ""
    benefits: list[str] = Field(default_factory=list)
    special_notes: str = Field(default="", alias="specialNotes")
    synergies: list[str] = Field(default_factory=list)
    incompatible_with: list[str] = Field(default_factory=list, alias="incompatibleWith")
    side_effects: list[str] = Field(default_factory=list, alias="sideEffects")
    food_sources: list[str] = Field(default_factory=list, alias="foodSources")
    is_morning: bool = Field(default=False, alias="isMorning")
    is_midday: bool = Field(default=False, alias="isMidday")
    is_evening: bool = Field(default=False, alias="isEvening")
    meal_timing: str = "with_meal"
    unit: str = "mg"

    def to_domain(self) -> Supplement:
        return Supplement(**self.model_dump(by_alias=False))


class QuizQuestionPayload(BaseModel):
    """Question entry as stored in the question bank JSON."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    question: str
    options: list[str]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str | None = None
    category: str | None = None
    difficulty: QuizDifficulty = QuizDifficulty.MEDIUM

    def to_domain(self) -> QuizQuestion:
        fields = self.model_dump(by_alias=False, exclude_none=True)
        return QuizQuestion(**fields)


_SUPPLEMENTS_ADAPTER = TypeAdapter(list[SupplementPayload])
_QUESTIONS_ADAPTER = TypeAdapter(list[QuizQuestionPayload])


def load_supplements(path: Path | None = None) -> list[Supplement]:
    """Load the supplement catalog from JSON."""
    source = path or DEFAULT_SUPPLEMENTS_PATH
    payloads = _read(source, _SUPPLEMENTS_ADAPTER)
    _logger.info("Loaded supplements: path=%s count=%s", source, len(payloads))
    return [payload.to_domain() for payload in payloads]


def load_questions(path: Path | None = None) -> list[QuizQuestion]:
    """Load the quiz question bank from JSON."""
    source = path or DEFAULT_QUESTIONS_PATH
    payloads = _read(source, _QUESTIONS_ADAPTER)
    _logger.info("Loaded quiz questions: path=%s count=%s", source, len(payloads))
    return [payload.to_domain() for payload in payloads]


def _read(path: Path, adapter: TypeAdapter) -> list:
    try:
        return adapter.validate_json(path.read_bytes())
    except (OSError, PydanticValidationError) as exc:
        _logger.exception("Failed to load bundled data: path=%s", path)
        raise StorageError(f"Failed to load {path}") from exc
