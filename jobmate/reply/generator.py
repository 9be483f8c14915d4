"""Templated outreach replies from a specialist to a job poster."""

from __future__ import annotations

import hashlib
import logging
import random
from collections.abc import Callable, Sequence
from enum import Enum

from jobmate.matching.matchers import relevant_skills
from jobmate.matching.models import MatchResult
from jobmate.reply.models import JobPost, RequesterProfile, SpecialistProfile

logger = logging.getLogger(__name__)

AVAILABILITY_PHRASES: tuple[str, ...] = (
    "within the next few days",
    "as early as tomorrow",
    "this week",
    "at your earliest convenience",
    "according to your preferred schedule",
)

MAX_HIGHLIGHTED_SKILLS = 3
UNBOUNDED_BUDGET = 999999.0

# (phrases, key) -> chosen phrase
PhraseSelector = Callable[[Sequence[str], str], str]


def stable_phrase_selector(phrases: Sequence[str], key: str) -> str:
    """Pick a phrase from a stable hash of the key.

    The same requester and job always get the same wording.
    """
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return phrases[int(digest, 16) % len(phrases)]


def random_phrase_selector(rng: random.Random | None = None) -> PhraseSelector:
    """Build a selector that picks phrases at random (seed ``rng`` for tests)."""
    source = rng or random.Random()

    def _select(phrases: Sequence[str], key: str) -> str:
        return source.choice(list(phrases))

    return _select


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


class ReplySection(str, Enum):
    """Reply sections in output order."""

    INTRODUCTION = "introduction"
    SKILLS_HIGHLIGHT = "skills_highlight"
    AVAILABILITY = "availability"
    PRICING = "pricing"
    QUESTIONS = "questions"


class AutoReplyGenerator:
    """Builds reply text from partial job, specialist and requester data.

    Generation is pure string building; the only configurable behaviour is
    how the availability phrase is chosen.
    """

    def __init__(self, phrase_selector: PhraseSelector | None = None) -> None:
        self.phrase_selector = phrase_selector or stable_phrase_selector

    def generate(
        self,
        job: JobPost,
        specialist: SpecialistProfile,
        requester: RequesterProfile | None = None,
        match: MatchResult | None = None,
    ) -> str:
        """Render all five sections joined by blank lines."""
        sections = [
            self.generate_section(section, job, specialist, requester, match)
            for section in ReplySection
        ]
        logger.debug(
            f"Generated reply for job={job.id or '-'} specialist={specialist.id or '-'}"
        )
        return "\n\n".join(sections)

    def generate_section(
        self,
        section: ReplySection | str,
        job: JobPost,
        specialist: SpecialistProfile,
        requester: RequesterProfile | None = None,
        match: MatchResult | None = None,
    ) -> str:
        """Render a single section.

        Raises:
            ValueError: If ``section`` is not a known section name.
        """
        section = ReplySection(section)
        requester = requester or RequesterProfile()

        if section is ReplySection.INTRODUCTION:
            return self.introduction(job, specialist, requester, match)
        if section is ReplySection.SKILLS_HIGHLIGHT:
            return self.skills_highlight(job, specialist)
        if section is ReplySection.AVAILABILITY:
            return self.availability(job, requester)
        if section is ReplySection.PRICING:
            return self.pricing(job, specialist)
        return self.questions()

    def introduction(
        self,
        job: JobPost,
        specialist: SpecialistProfile,
        requester: RequesterProfile,
        match: MatchResult | None = None,
    ) -> str:
        client_name = requester.first_name or "there"
        job_title = job.title or "your job"
        experience = (
            f"{specialist.first_name} has" if specialist.first_name else "I have"
        )
        category = job.category or "this type of work"

        text = (
            f"Hi {client_name},\n\n"
            f"I'm interested in {job_title} and believe I'd be a great fit for "
            f"this project. {experience} extensive experience in {category} and "
            f"would love to help you with this job."
        )
        if match is not None:
            text += (
                f" Our compatibility score for this job is {match.score}/100 "
                f"({match.primary_reason.lower()})."
            )
        return text

    def skills_highlight(self, job: JobPost, specialist: SpecialistProfile) -> str:
        skills = relevant_skills(specialist.skills, job.category, job.description)
        if not skills:
            return (
                "I have the skills and experience needed to complete this job "
                "successfully."
            )

        skills_list = ", ".join(skills[:MAX_HIGHLIGHTED_SKILLS])
        years = specialist.years_of_experience or "5+"
        field = job.category or "this field"
        completed = specialist.completed_jobs or "numerous"
        return (
            f"My expertise includes {skills_list}, with {years} years of experience "
            f"in {field}. I've successfully completed {completed} similar projects "
            f"with consistently positive feedback."
        )

    def availability(self, job: JobPost, requester: RequesterProfile) -> str:
        if job.is_urgent:
            return (
                "I understand this is an urgent job, and I'm available to start "
                "immediately. I can prioritize your project and ensure it's "
                "completed quickly without compromising quality."
            )

        key = f"{requester.id or ''}:{job.id or ''}"
        phrase = self.phrase_selector(AVAILABILITY_PHRASES, key)
        return (
            f"I'm available to start this project {phrase} and can work with your "
            f"schedule to ensure timely completion."
        )

    def pricing(self, job: JobPost, specialist: SpecialistProfile) -> str:
        has_budget = job.budget_min is not None or job.budget_max is not None
        rate = specialist.hourly_rate

        if has_budget and rate:
            budget_min = job.budget_min or 0.0
            budget_max = job.budget_max or UNBOUNDED_BUDGET
            amount = _format_amount(rate)

            if budget_min <= rate <= budget_max:
                return (
                    f"My rate of ${amount}/hr falls within your budget range, and I "
                    f"can provide excellent value for your investment."
                )
            if rate < budget_min:
                return (
                    f"My rate of ${amount}/hr is below your budget range, which "
                    f"means you'll receive high-quality work at a competitive price."
                )
            return (
                f"While my standard rate is ${amount}/hr, I'd be happy to discuss "
                f"pricing options that work within your budget for this specific "
                f"project."
            )

        return (
            "I offer competitive rates and would be happy to provide a detailed "
            "quote after learning more about your specific requirements."
        )

    def questions(self) -> str:
        return (
            "I have a few questions to better understand your needs:\n"
            "1. Do you have a specific timeline or deadline for this project?\n"
            "2. Are there any particular requirements or preferences I should "
            "know about?\n"
            "3. What's the best way to communicate during the project?\n\n"
            "I look forward to discussing this opportunity with you further. "
            "Please feel free to reach out with any questions.\n\n"
            "Best regards,\n"
            "[Your Name]"
        )
