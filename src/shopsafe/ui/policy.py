"""Static policy reference content."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PolicyCard:
    title: str
    description: str
    examples: list[str] = field(default_factory=list)


POLICY_CARDS: list[PolicyCard] = [
    PolicyCard(
        title="Misleading Claims",
        description="Prohibits exaggerated product effects, unrealistic promises, and falsified results.",
        examples=["'Instant weight loss'", "'Cures all diseases'", "'Guaranteed results'"],
    ),
    PolicyCard(
        title="Transformation Narratives",
        description="Visual or verbal before-and-after comparisons are strictly prohibited in many categories.",
        examples=["Side-by-side skin photos", "'Look at me before using this'"],
    ),
    PolicyCard(
        title="Absolute Language",
        description="Avoid using superlative or definitive terms that cannot be objectively proven.",
        examples=["'The best in the world'", "'Only product that works'", "'100% effective'"],
    ),
    PolicyCard(
        title="Regulated Categories",
        description="Supplements, cosmetics, and medical devices require specific disclaimers and verified claims.",
        examples=["FDA disclaimers", "Ingredient transparency"],
    ),
]

ANALYSIS_SCOPE: list[str] = [
    "Misleading Claims",
    "Transformation Narratives",
    "Health/Beauty Claims",
    "Time-based Results",
    "Absolute Language",
    "Regulated Categories",
]

CONSERVATIVE_MODE_NOTE = (
    "V2 prioritizes account safety. If a claim is borderline, it will be flagged "
    "for changes to prevent potential shadowbans or strikes."
)
