"""Auto-reply generation for job matches.

Public API:
    - AutoReplyGenerator: Builds the five-section reply text
    - ReplySection: Section names in output order
    - JobPost / SpecialistProfile / RequesterProfile: Reply inputs
"""

from jobmate.reply.generator import (
    AVAILABILITY_PHRASES,
    AutoReplyGenerator,
    ReplySection,
    random_phrase_selector,
    stable_phrase_selector,
)
from jobmate.reply.models import JobPost, RequesterProfile, SpecialistProfile

__all__ = [
    "AutoReplyGenerator",
    "ReplySection",
    "AVAILABILITY_PHRASES",
    "stable_phrase_selector",
    "random_phrase_selector",
    "JobPost",
    "SpecialistProfile",
    "RequesterProfile",
]
