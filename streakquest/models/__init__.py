from .user import User, Role
from .attendance import Attendance, AttendanceMethod
from .gamification import Gamification
from .xp_ledger import XPLedger
from .achievement import Achievement, AchievementType, UserAchievement
from .homework import Homework, HomeworkSubmission
from .qr_code import QRCode

__all__ = [
    "User", "Role",
    "Attendance", "AttendanceMethod",
    "Gamification", "XPLedger",
    "Achievement", "AchievementType", "UserAchievement",
    "Homework", "HomeworkSubmission",
    "QRCode",
]
