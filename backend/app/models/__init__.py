# backend/app/models/__init__.py
from app.models.profile import Profile, UserRole
from app.models.job import Job, JobEditHistory, JobHoldHistory
from app.models.application import Application
from app.models.invitation import JobInvitation
from app.models.engagement import Engagement, Submission
from app.models.message import Message, StarredConversation
from app.models.notification import Notification
from app.models.saved import SavedJob, SavedHeadhunter
from app.models.subscription import Subscription

__all__ = [
    "Profile",
    "UserRole",
    "Job",
    "JobEditHistory",
    "JobHoldHistory",
    "Application",
    "JobInvitation",
    "Engagement",
    "Submission",
    "Message",
    "StarredConversation",
    "Notification",
    "SavedJob",
    "SavedHeadhunter",
    "Subscription",
]
