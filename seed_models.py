import json
from importlib import resources
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuestionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: List[str] = Field(..., min_length=2)
    correct_answer: int = Field(..., alias="correctAnswer", ge=0)
    has_image: bool = Field(False, alias="hasImage")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    category: str
    difficulty: int
    is_active: bool = Field(True, alias="isActive")

    @model_validator(mode="after")
    def _check_answer_and_image(self):
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correctAnswer {self.correct_answer} is out of range for {len(self.options)} options"
            )
        if self.has_image and not self.image_url:
            raise ValueError("hasImage is set but imageUrl is empty")
        if not self.has_image and self.image_url:
            raise ValueError("imageUrl given for a question without hasImage")
        return self

    def to_fields(self) -> Dict[str, Any]:
        """Static Firestore fields, camelCase, without an imageUrl when there is no image."""
        return self.model_dump(by_alias=True, exclude_none=True)


class QuizRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    difficulty: str
    estimated_time: int = Field(..., alias="estimatedTime")  # minutes
    is_active: bool = Field(True, alias="isActive")
    quiz_type: Optional[str] = Field(None, alias="quizType")


class QuizDataset(BaseModel):
    quiz: QuizRecord
    questions: List[QuestionRecord] = Field(..., min_length=1)

    @property
    def categories(self) -> List[str]:
        seen: List[str] = []
        for q in self.questions:
            if q.category not in seen:
                seen.append(q.category)
        return seen

    def quiz_fields(self) -> Dict[str, Any]:
        fields = self.quiz.model_dump(by_alias=True, exclude_none=True)
        fields["totalQuestions"] = len(self.questions)
        fields["categories"] = self.categories
        return fields


def load_dataset(path: str) -> QuizDataset:
    with open(path, "r", encoding="utf-8") as f:
        return QuizDataset.model_validate(json.load(f))


def load_bundled_dataset(filename: str) -> QuizDataset:
    text = resources.files("seed_data").joinpath(filename).read_text(encoding="utf-8")
    return QuizDataset.model_validate_json(text)


def bundled_dataset_names() -> List[str]:
    return sorted(p.name for p in resources.files("seed_data").iterdir() if p.name.endswith(".json"))
