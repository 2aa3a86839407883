from enum import Enum


class QuestionType(str, Enum):
    # Scorable / answerable types
    RATING = "rating"
    NPS = "nps"
    LIKERT = "likert"
    OPINION_SCALE = "opinion_scale"
    SLIDER = "slider"
    MULTIPLE_CHOICE = "multiple_choice"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"
    IMAGE_CHOICE = "image_choice"
    YES_NO = "yes_no"
    MATRIX = "matrix"
    RANKING = "ranking"
    CONSTANT_SUM = "constant_sum"
    NUMBER = "number"
    EMOJI_RATING = "emoji_rating"
    # Free-text types (answerable, never scored)
    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    FILE_UPLOAD = "file_upload"
    SIGNATURE = "signature"
    VIDEO = "video"
    AUDIO_CAPTURE = "audio_capture"
    CALCULATION = "calculation"
    # Structural / display-only types
    SECTION = "section"
    STATEMENT = "statement"
    LEGAL = "legal"
    HIDDEN = "hidden"


class TrendGranularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"      # buckets start on Monday
    MONTHLY = "monthly"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class OverallTrend(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    MIXED = "mixed"
    STABLE = "stable"


class IndexType(str, Enum):
    """The five insight dimensions analytics are reported against."""
    LEADERSHIP_EFFECTIVENESS = "leadership-effectiveness"
    TEAM_WELLBEING = "team-wellbeing"
    BURNOUT_RISK = "burnout-risk"
    PSYCHOLOGICAL_SAFETY = "psychological-safety"
    ENGAGEMENT = "engagement"


class AnalyticsMode(str, Enum):
    INSIGHT_DIMENSIONS = "insight-dimensions"  # >= 3 canonical dimension categories
    GENERIC_SCORING = "generic-scoring"
    BASIC = "basic"                            # scoring disabled
    MISCONFIGURED = "misconfigured"            # enabled but no categories


class MetricId(str, Enum):
    PARTICIPATION_METRICS = "participation_metrics"
    QUESTION_SUMMARY = "question_summary"

    LEADERSHIP_INDEX_DISTRIBUTION = "leadership_index_distribution"
    WELLBEING_INDEX_DISTRIBUTION = "wellbeing_index_distribution"
    BURNOUT_RISK_DISTRIBUTION = "burnout_risk_distribution"
    PSYCHOLOGICAL_SAFETY_DISTRIBUTION = "psychological_safety_distribution"
    ENGAGEMENT_INDEX_DISTRIBUTION = "engagement_index_distribution"

    LEADERSHIP_INDEX_BAND_DISTRIBUTION = "leadership_index_band_distribution"
    WELLBEING_INDEX_BAND_DISTRIBUTION = "wellbeing_index_band_distribution"
    BURNOUT_RISK_BAND_DISTRIBUTION = "burnout_risk_band_distribution"
    PSYCHOLOGICAL_SAFETY_BAND_DISTRIBUTION = "psychological_safety_band_distribution"
    ENGAGEMENT_INDEX_BAND_DISTRIBUTION = "engagement_index_band_distribution"

    LEADERSHIP_DOMAIN_OVERVIEW = "leadership_domain_overview"
    WELLBEING_DOMAIN_OVERVIEW = "wellbeing_domain_overview"
    ENGAGEMENT_DOMAIN_OVERVIEW = "engagement_domain_overview"

    LEADERSHIP_INDEX_TREND = "leadership_index_trend"
    WELLBEING_INDEX_TREND = "wellbeing_index_trend"
    BURNOUT_RISK_TREND = "burnout_risk_trend"

    MANAGER_INDEX_SUMMARY = "manager_index_summary"
    INDEX_TRENDS_SUMMARY = "index_trends_summary"
    BEFORE_AFTER_INDEX_COMPARISON = "before_after_index_comparison"
