from typing import List, Optional
from .attendance import AttendanceStats, AttendanceSummary
from .auth import UserRead
from .base import CamelModel
from .gamification import GamificationRead, UserAchievementRead
from .homework import HomeworkRead


class StudentDashboard(CamelModel):
    user: UserRead
    gamification: Optional[GamificationRead] = None
    attendance: AttendanceSummary
    achievements: List[UserAchievementRead]


class LowAttendanceStudent(UserRead):
    attendance_rate: int


class TeacherDashboard(CamelModel):
    total_students: int
    present_today: int
    low_attendance_students: List[LowAttendanceStudent]
    avg_attendance: int
    homework: List[HomeworkRead]


class ChildSummary(CamelModel):
    child: UserRead
    gamification: Optional[GamificationRead] = None
    attendance: AttendanceStats
    achievements: List[UserAchievementRead]


class ParentDashboard(CamelModel):
    children: List[ChildSummary]
