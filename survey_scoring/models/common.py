"""
Shared model base - Survey Scoring Engine
survey_scoring/models/common.py
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model for everything that crosses the API boundary.

    Attributes are snake_case in Python and camelCase on the wire, so survey
    JSON produced by the editor (``ratingScale``, ``optionScores``, ...)
    validates directly. Serialize with ``by_alias=True``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
