from zuhri.schemas.base import CamelModel

class UserStats(CamelModel):
    completed_courses: int = 0
    certificates: int = 0
    total_hours: int = 0
    average_grade: int = 0

class AdminStats(CamelModel):
    total_users: int = 0
    total_courses: int = 0
    total_exams: int = 0
    total_enrollments: int = 0
