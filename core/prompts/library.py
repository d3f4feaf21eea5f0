"""Static discussion prompts offered to students, keyed by class subject."""
from __future__ import annotations

from typing import Dict, List

DEFAULT_SUBJECT = "general"

PROMPT_LIBRARY: Dict[str, List[Dict[str, str]]] = {
    "general": [
        {
            "title": "Defend a Position",
            "description": "Pick a claim you believe and build the strongest case for it.",
        },
        {
            "title": "Steelman the Other Side",
            "description": "Argue the best version of a view you disagree with.",
        },
        {
            "title": "Cause and Effect",
            "description": "Explain why something happened and test your explanation.",
        },
        {
            "title": "Evaluate a Source",
            "description": "Decide how far a source can be trusted and why.",
        },
    ],
    "history": [
        {
            "title": "Historical Causation",
            "description": "Weigh the causes of a major event and rank their importance.",
        },
        {
            "title": "Counterfactual History",
            "description": "Explore what might have changed if one decision went differently.",
        },
        {
            "title": "Primary Source Analysis",
            "description": "Read a document for perspective, purpose and bias.",
        },
    ],
    "science": [
        {
            "title": "Design an Experiment",
            "description": "Propose a test for a hypothesis and defend its controls.",
        },
        {
            "title": "Interpret the Evidence",
            "description": "Decide what a data set does and does not show.",
        },
        {
            "title": "Science and Society",
            "description": "Argue how a discovery should shape public policy.",
        },
    ],
    "english": [
        {
            "title": "Literary Interpretation",
            "description": "Defend a reading of a text with close evidence.",
        },
        {
            "title": "Character Motivation",
            "description": "Explain why a character acts as they do.",
        },
        {
            "title": "Theme Across Texts",
            "description": "Compare how two works treat the same theme.",
        },
    ],
    "math": [
        {
            "title": "Justify a Method",
            "description": "Explain why a solution strategy works and when it fails.",
        },
        {
            "title": "Find the Flaw",
            "description": "Locate the error in a convincing but wrong argument.",
        },
        {
            "title": "Model the Real World",
            "description": "Build a model for a situation and test its assumptions.",
        },
    ],
    "social-studies": [
        {
            "title": "Policy Debate",
            "description": "Take a side on a policy question and anticipate objections.",
        },
        {
            "title": "Rights in Conflict",
            "description": "Resolve a case where two rights collide.",
        },
        {
            "title": "Economic Trade-offs",
            "description": "Weigh who gains and who loses from a decision.",
        },
    ],
    "ethics": [
        {
            "title": "Moral Dilemma",
            "description": "Choose between two bad options and justify the choice.",
        },
        {
            "title": "Technology and Responsibility",
            "description": "Decide who is accountable when a tool causes harm.",
        },
    ],
}


def resolve_subject(subject: str | None) -> str:
    key = (subject or "").strip().lower()
    return key if key in PROMPT_LIBRARY else DEFAULT_SUBJECT


def get_prompts(subject: str | None) -> List[Dict[str, str]]:
    """Prompts for ``subject``; unknown subjects get the general set."""
    return [dict(p) for p in PROMPT_LIBRARY[resolve_subject(subject)]]


