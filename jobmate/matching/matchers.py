"""Skill and keyword matching utilities."""

from __future__ import annotations

import re
from collections.abc import Iterable

# Category keyword -> words that mark a skill as relevant to that category.
RELATED_SKILL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "plumbing": ("water", "pipe", "leak", "faucet", "drain", "toilet"),
    "electrical": ("wiring", "circuit", "outlet", "lighting", "power"),
    "cleaning": ("housekeeping", "maid", "janitorial", "dusting", "vacuum"),
    "landscaping": ("gardening", "lawn", "mowing", "trimming", "plants"),
    "carpentry": ("woodwork", "furniture", "cabinet", "shelving", "construction"),
    "painting": ("interior", "exterior", "wall", "trim", "staining"),
    "moving": ("packing", "lifting", "transport", "furniture", "boxes"),
}


def normalize_skill(skill: str) -> str:
    """Normalize a skill or tag for case-insensitive comparison.

    Lowercases and collapses whitespace while keeping meaningful
    punctuation such as "+", "#" and "." (e.g. "C++", "Node.js").
    """
    value = skill.strip().lower()
    value = re.sub(r"\s+", " ", value)
    return value


def count_tag_matches(tags: Iterable[str], skills: Iterable[str]) -> int:
    """Count listing tags equal (case-insensitively) to any requester skill.

    Tags are counted per occurrence, so the result never exceeds the number
    of tags.
    """
    wanted = {normalize_skill(s) for s in skills if s and s.strip()}
    return sum(1 for tag in tags if normalize_skill(tag) in wanted)


def is_related_skill(skill: str, category: str) -> bool:
    """Return True if the skill names a keyword tied to the category.

    Only the first known category contained in ``category`` is consulted.
    """
    skill_norm = normalize_skill(skill)
    category_norm = normalize_skill(category)
    for known_category, keywords in RELATED_SKILL_KEYWORDS.items():
        if known_category in category_norm:
            return any(keyword in skill_norm for keyword in keywords)
    return False


def relevant_skills(
    skills: Iterable[str], category: str | None, description: str | None
) -> list[str]:
    """Return the skills that relate to a job, preserving their order.

    A skill is relevant when it appears in the job category or description,
    or when it maps to the category through ``RELATED_SKILL_KEYWORDS``.
    """
    category_norm = normalize_skill(category or "")
    description_norm = normalize_skill(description or "")

    found: list[str] = []
    for skill in skills:
        if not skill or not skill.strip():
            continue
        skill_norm = normalize_skill(skill)
        if (
            skill_norm in category_norm
            or skill_norm in description_norm
            or is_related_skill(skill_norm, category_norm)
        ):
            found.append(skill.strip())
    return found
