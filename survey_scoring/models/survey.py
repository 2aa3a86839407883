"""
Survey definition models - Survey Scoring Engine
survey_scoring/models/survey.py

Questions are a discriminated union keyed by ``type``: each scoring-relevant
question kind has its own model carrying only the parameters that kind uses.
Free-text and structural kinds share ``UnscoredQuestion``.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, model_validator

from survey_scoring.models.common import CamelModel


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

class QuestionBase(CamelModel):
    """Fields shared by every question kind."""

    id: str = Field(..., min_length=1, description="Question identifier, unique within a survey")
    text: str = Field(
        default="",
        alias="question",
        description="Question wording shown to respondents",
    )
    description: Optional[str] = None
    required: bool = False
    options: Optional[List[str]] = Field(
        default=None,
        description="Answer options, for kinds that present a fixed choice list",
    )
    option_scores: Optional[Dict[str, float]] = Field(
        default=None,
        description="Explicit score per option value; consulted before numeric parsing",
    )
    scorable: bool = Field(
        default=False,
        description="Question contributes to scoring (requires scoring_category as well)",
    )
    scoring_category: Optional[str] = Field(
        default=None,
        description="ScoreConfig category id this question rolls up into",
    )
    score_weight: float = Field(default=1.0, description="Multiplier applied to score and max")


class RatingQuestion(QuestionBase):
    type: Literal["rating"]
    rating_scale: Optional[int] = Field(default=None, ge=1, description="Top of the 1..N scale (default 5)")


class NpsQuestion(QuestionBase):
    type: Literal["nps"]


class LikertQuestion(QuestionBase):
    type: Literal["likert"]
    likert_points: Optional[int] = Field(default=None, ge=2, description="5 or 7 point scale (default 5)")
    custom_labels: Optional[List[str]] = None


class OpinionScaleQuestion(QuestionBase):
    type: Literal["opinion_scale"]
    min: Optional[float] = None
    max: Optional[float] = None
    rating_scale: Optional[int] = None


class SliderQuestion(QuestionBase):
    type: Literal["slider"]
    min: Optional[float] = None
    max: Optional[float] = None


class MultipleChoiceQuestion(QuestionBase):
    type: Literal["multiple_choice"]


class DropdownQuestion(QuestionBase):
    type: Literal["dropdown"]


class CheckboxQuestion(QuestionBase):
    type: Literal["checkbox"]
    max_selections: Optional[int] = None


class ImageChoiceQuestion(QuestionBase):
    type: Literal["image_choice"]
    image_options: Optional[List[Any]] = None


class YesNoQuestion(QuestionBase):
    type: Literal["yes_no"]
    yes_label: Optional[str] = None
    no_label: Optional[str] = None


class MatrixQuestion(QuestionBase):
    type: Literal["matrix"]
    row_labels: Optional[List[str]] = None
    col_labels: Optional[List[str]] = None


class RankingQuestion(QuestionBase):
    type: Literal["ranking"]


class ConstantSumQuestion(QuestionBase):
    type: Literal["constant_sum"]
    total_points: Optional[float] = None


class NumberQuestion(QuestionBase):
    type: Literal["number"]
    min: Optional[float] = None
    max: Optional[float] = None


class EmojiRatingQuestion(QuestionBase):
    type: Literal["emoji_rating"]


class UnscoredQuestion(QuestionBase):
    """Free-text and display-only kinds. Never scored (max points 0)."""

    type: Literal[
        "text", "textarea", "email", "phone", "url", "date", "time", "datetime",
        "file_upload", "signature", "video", "audio_capture", "calculation",
        "section", "statement", "legal", "hidden",
    ]


Question = Annotated[
    Union[
        RatingQuestion,
        NpsQuestion,
        LikertQuestion,
        OpinionScaleQuestion,
        SliderQuestion,
        MultipleChoiceQuestion,
        DropdownQuestion,
        CheckboxQuestion,
        ImageChoiceQuestion,
        YesNoQuestion,
        MatrixQuestion,
        RankingQuestion,
        ConstantSumQuestion,
        NumberQuestion,
        EmojiRatingQuestion,
        UnscoredQuestion,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Score configuration
# ---------------------------------------------------------------------------

class Category(CamelModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    weight: float = Field(default=1.0, description="Used by the domain overview contribution only")


class ScoreRange(CamelModel):
    """
    Survey-authored score band (respondent-facing).

    ``category=None`` makes the range a global fallback. These are never used
    for cross-survey analytics; see ``survey_scoring.scoring.bands`` for the
    canonical Index Band table.
    """

    id: Optional[str] = None
    category: Optional[str] = None
    min: float
    max: float
    label: str = ""
    color: Optional[str] = None
    interpretation: Optional[str] = None

    @model_validator(mode="after")
    def validate_bounds(self) -> "ScoreRange":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class ScoreConfig(CamelModel):
    enabled: bool = False
    categories: List[Category] = Field(default_factory=list)
    score_ranges: List[ScoreRange] = Field(default_factory=list)
    results_summary: Optional[str] = None


class Survey(CamelModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    description: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)
    score_config: Optional[ScoreConfig] = None

    @property
    def scoring_enabled(self) -> bool:
        return self.score_config is not None and self.score_config.enabled

    def category_ids(self) -> List[str]:
        if self.score_config is None:
            return []
        return [c.id for c in self.score_config.categories]
