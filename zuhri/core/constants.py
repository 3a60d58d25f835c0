from enum import Enum


class RoleEnum(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"

class CourseLevelEnum(str, Enum):
    PREPARATORY = "تمهيدي"
    INTERMEDIATE = "متوسط"
    ADVANCED = "متقدم"
    BACHELOR = "بكالوريوس"
    MASTER = "ماجستير"
    DOCTORATE = "دكتوراه"

class StudentLevelEnum(str, Enum):
    BEGINNER = "مبتدئ"
    INTERMEDIATE = "متوسط"
    ADVANCED = "متقدم"

class ExamAttemptStatusEnum(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EXPIRED = "expired"

class TemplateStyleEnum(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"
    ELEGANT = "elegant"

class CertificateFormatEnum(str, Enum):
    PDF = "pdf"
    PNG = "png"


# Ordered highest first; the first threshold a grade reaches wins.
HONORS_THRESHOLDS = [
    (95, "بتقدير امتياز مع مرتبة الشرف"),
    (85, "بتقدير امتياز"),
    (75, "بتقدير جيد جداً"),
    (70, "بتقدير جيد"),
]

DEFAULT_PASSING_GRADE = 70

DEFAULT_INSTITUTION_NAME = "جامعة الإمام الزُّهري"

# One row per diploma level. ``level`` matches Course.level so a template
# seeded from a row is picked up when certificates for that level are issued.
DIPLOMA_LEVELS = [
    {
        "key": "preparatory",
        "level": CourseLevelEnum.PREPARATORY.value,
        "title": "الديبلوم التمهيدي في علوم الحديث",
        "certificate_type": "ديبلوم معتمد",
        "hours": 120,
        "background_color": "#f0fdf4",
        "text_color": "#14532d",
        "border_color": "#15803d",
        "template_style": TemplateStyleEnum.CLASSIC.value,
    },
    {
        "key": "intermediate",
        "level": CourseLevelEnum.INTERMEDIATE.value,
        "title": "الدبلوم المتوسط في علوم الحديث",
        "certificate_type": "ديبلوم معتمد",
        "hours": 180,
        "background_color": "#fff7ed",
        "text_color": "#7c2d12",
        "border_color": "#c2410c",
        "template_style": TemplateStyleEnum.CLASSIC.value,
    },
    {
        "key": "certificate",
        "level": CourseLevelEnum.ADVANCED.value,
        "title": "الإجازة في علوم الحديث",
        "certificate_type": "إجازة علمية",
        "hours": 240,
        "background_color": "#eff6ff",
        "text_color": "#1e3a8a",
        "border_color": "#1d4ed8",
        "template_style": TemplateStyleEnum.MODERN.value,
    },
    {
        "key": "bachelor",
        "level": CourseLevelEnum.BACHELOR.value,
        "title": "بكالوريوس في علم الحديث",
        "certificate_type": "درجة بكالوريوس",
        "hours": 300,
        "background_color": "#faf5ff",
        "text_color": "#581c87",
        "border_color": "#7e22ce",
        "template_style": TemplateStyleEnum.ELEGANT.value,
    },
    {
        "key": "master",
        "level": CourseLevelEnum.MASTER.value,
        "title": "ماجستير عالم بالحديث",
        "certificate_type": "درجة ماجستير",
        "hours": 360,
        "background_color": "#fefce8",
        "text_color": "#713f12",
        "border_color": "#a16207",
        "template_style": TemplateStyleEnum.ELEGANT.value,
    },
    {
        "key": "doctorate",
        "level": CourseLevelEnum.DOCTORATE.value,
        "title": "دكتور في الدراسات الحديثية",
        "certificate_type": "درجة دكتوراه",
        "hours": 480,
        "background_color": "#fef2f2",
        "text_color": "#7f1d1d",
        "border_color": "#b91c1c",
        "template_style": TemplateStyleEnum.ELEGANT.value,
    },
]

DIPLOMA_LEVELS_BY_LEVEL = {row["level"]: row for row in DIPLOMA_LEVELS}
