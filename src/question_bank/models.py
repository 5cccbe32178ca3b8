from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, ConfigDict


class QuestionStyle(str, Enum):
    """How the generated questions should read."""
    INTUITIVE = "intuitive"
    DIVERSE = "diverse"
    APPLICATION = "application"
    IMAGE_DATA = "image-data"
    MIXED = "mixed"


class ChapterType(str, Enum):
    PAGES = "pages"
    TOPIC = "topic"


class ChapterWeight(BaseModel):
    name: str
    weight: float = Field(0, ge=0, le=100)
    questions: int = Field(0, ge=0)


class DifficultyDistribution(BaseModel):
    easy: float = 30
    medium: float = 50
    hard: float = 20


class CognitiveDistribution(BaseModel):
    remember: float = 20
    understand: float = 40
    apply: float = 30
    analyze: float = 10


class QuestionTypeWeights(BaseModel):
    multiple_choice: float = 100
    true_false: float = 0
    short_answer: float = 0
    essay: float = 0


class WeightingConfig(BaseModel):
    """Target percentages per bucket. Advisory only: sums are not enforced."""

    chapter_weights: List[ChapterWeight] = Field(default_factory=list)
    difficulty_distribution: DifficultyDistribution = Field(default_factory=DifficultyDistribution)
    cognitive_distribution: CognitiveDistribution = Field(default_factory=CognitiveDistribution)
    question_type_weights: QuestionTypeWeights = Field(default_factory=QuestionTypeWeights)


class Parameters(BaseModel):
    """Snapshot of the generation form; stored as JSON on the session."""

    chapter: str = Field(..., min_length=1, description="Page range ('1-5, 8') or a topic name.")
    chapter_type: ChapterType = ChapterType.PAGES
    question_style: QuestionStyle = QuestionStyle.INTUITIVE
    question_count: int = Field(10, ge=1, le=50)
    question_types: List[str] = Field(default_factory=lambda: ["multiple_choice"])
    keywords: Optional[str] = Field(None, description="Comma separated focus keywords.")
    sample_questions: List[Dict[str, Any]] = Field(default_factory=list)
    selected_topics: List[str] = Field(
        default_factory=list, description="Outline titles the questions should cover."
    )
    weighting: WeightingConfig = Field(default_factory=WeightingConfig)

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class Question(BaseModel):
    id: str
    content: str = Field(..., min_length=4)
    options: Dict[str, str]
    correct_answer: str
    explanation: str
    question_type: str = "choice"
    difficulty: float = Field(0.5, ge=0.0, le=1.0)
    difficulty_label: Literal["easy", "medium", "hard"] = "medium"
    bloom_level: int = Field(2, ge=1, le=6)
    chapter: str = ""
    source_pdf: str = ""
    page_range: str = ""
    tags: List[str] = Field(default_factory=list)
