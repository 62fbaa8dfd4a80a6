from .exceptions import DuplicateFeedbackError
from .models import FeedbackInput, FeedbackRecord, PendingFeedback
from .service import FeedbackService

__all__ = [
    "DuplicateFeedbackError",
    "FeedbackInput",
    "FeedbackRecord",
    "FeedbackService",
    "PendingFeedback",
]
