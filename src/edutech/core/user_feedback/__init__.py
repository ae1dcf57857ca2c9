from edutech.core.user_feedback.abc import UserFeedback
from edutech.core.user_feedback.interactive import InteractiveFeedback, SuppressedFeedback

__all__ = ["InteractiveFeedback", "SuppressedFeedback", "UserFeedback"]
