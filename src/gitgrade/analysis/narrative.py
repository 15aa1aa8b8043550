"""Narrative — strengths, risks, details and roadmap from a breakdown."""

from gitgrade.models import Breakdown, Dimension, Narrative

# (dimension, threshold, strength, risk)
_VERDICTS: tuple[tuple[Dimension, int, str, str], ...] = (
    (
        Dimension.structure,
        75,
        "Clear project structure and conventions.",
        "Project structure needs tightening (src/, docs/, config hygiene).",
    ),
    (
        Dimension.documentation,
        70,
        "README/documentation appears usable.",
        "Documentation is weak: add setup, usage, screenshots, and limitations.",
    ),
    (
        Dimension.tests,
        65,
        "Testing/CI signals found (better maintainability).",
        "Tests/CI appear missing or weak (higher regression risk).",
    ),
    (
        Dimension.commits,
        65,
        "Commit activity suggests iterative development.",
        "Commit history sample suggests inconsistent iteration.",
    ),
)

# (dimension, label, heuristic description)
_DETAILS: tuple[tuple[Dimension, str, str], ...] = (
    (Dimension.code_quality, "Code quality", "file composition, large-file risk, configs"),
    (Dimension.structure, "Project structure", "conventions + repository hygiene"),
    (Dimension.documentation, "Documentation", "README size + key sections heuristic"),
    (Dimension.tests, "Testing", "test discovery + CI signals"),
    (Dimension.commits, "Commit consistency", "unique commit days + recency heuristic"),
    (Dimension.relevance, "Relevance", "recency + basic popularity/issue signals"),
)

ROADMAP_THRESHOLD = 60

# (dimension, item) emitted when the score is below ROADMAP_THRESHOLD
_ROADMAP: tuple[tuple[Dimension, str], ...] = (
    (
        Dimension.documentation,
        "CRITICAL: Improve README (setup, usage, screenshots, limitations, license).",
    ),
    (
        Dimension.structure,
        "CRITICAL: Organize folders (src/, docs/, tests/) and keep root clean.",
    ),
    (
        Dimension.tests,
        "IMPORTANT: Add unit tests for core logic + minimal test runner config.",
    ),
    (
        Dimension.commits,
        "IMPORTANT: Commit more consistently (small, meaningful commit messages).",
    ),
)

NICE_TO_HAVE = (
    "NICE-TO-HAVE: Add CI (GitHub Actions) to run tests/lint on every push.",
    "NICE-TO-HAVE: Add an “Architecture” section explaining design decisions.",
)


def build_narrative(breakdown: Breakdown) -> Narrative:
    strengths: list[str] = []
    risks: list[str] = []
    for dim, threshold, strength, risk in _VERDICTS:
        if breakdown[dim] >= threshold:
            strengths.append(strength)
        else:
            risks.append(risk)

    details = tuple(
        f"{label}: {breakdown[dim]}/100 ({hint})." for dim, label, hint in _DETAILS
    )

    roadmap = [item for dim, item in _ROADMAP if breakdown[dim] < ROADMAP_THRESHOLD]
    roadmap.extend(NICE_TO_HAVE)

    return Narrative(
        strengths=tuple(strengths),
        risks=tuple(risks),
        details=details,
        roadmap=tuple(roadmap),
    )
