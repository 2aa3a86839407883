"""
analytics/ - survey-wide derived views

Modules:
    scored.py            - Score a response set once through the trace builder
    participation.py     - Response/completion rates and average completion time
    distribution.py      - Index score buckets and canonical Index Band distribution
    question_summary.py  - Per-question completion, numeric stats and option counts
    manager_rollup.py    - Per-manager respondent counts, averages and bands
    trends.py            - Calendar-time trend and per-version trends summary
    comparison.py        - Before/after comparison between two versions
    domain_overview.py   - Per-category averages and weighted contribution
    confidence.py        - Analytics mode, warnings and show/hide rules

Every view degrades to a well-defined empty structure; none of them raise
for disabled scoring, missing categories or zero responses.
"""
