"""GitGrade — heuristic quality grading for GitHub repositories.

Scores a repository snapshot on code quality, structure, documentation,
tests, commit consistency and relevance, and summarizes commit activity.
"""

__version__ = "0.1.0"
