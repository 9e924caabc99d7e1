"""ORM models - import all so Base.metadata is complete for migrations."""

from fitplan.models.challenge import Challenge, ChallengeParticipant, RewardCredit, UserRewards
from fitplan.models.photo import CommentLike, PhotoComment, PhotoLike, ProgressPhoto
from fitplan.models.platform_settings import PlatformSettings
from fitplan.models.profile import Profile
from fitplan.models.quiz import HealthProfile, QuizResult

__all__ = [
    "Challenge",
    "ChallengeParticipant",
    "CommentLike",
    "HealthProfile",
    "PhotoComment",
    "PhotoLike",
    "PlatformSettings",
    "Profile",
    "ProgressPhoto",
    "QuizResult",
    "RewardCredit",
    "UserRewards",
]
