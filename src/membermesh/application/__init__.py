"""Application layer - use cases and orchestration."""

from .commands import GenerateMemberCommand
from .dtos import BatchOutput, ElementType, MemberInput, MemberMeshOutput, SkippedMember

__all__ = [
    "BatchOutput",
    "ElementType",
    "GenerateMemberCommand",
    "MemberInput",
    "MemberMeshOutput",
    "SkippedMember",
]
