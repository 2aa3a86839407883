"""
scoring/ - single-response scoring engine

Modules:
    utils.py                - Half-up rounding and summary statistics
    question_scorer.py      - Score one answer against one question
    category_aggregator.py  - Weighted per-category raw/max totals
    bands.py                - Canonical Index Bands and survey-authored score ranges
    trace_builder.py        - Category/overall scores and the diagnostic trace
"""
