"""
Department lists and grouping
"""

SCOFT_DEPARTMENTS = [
    'Artificial Intelligence & Data Science',
    'Artificial Intelligence & Machine Learning',
    'Computer Science & Engineering',
    'Computer Science & Engineering (Cyber Security)',
    'Computer Science & Engineering (IoT)',
    'Information Technology',
]

NON_SCOFT_DEPARTMENTS = [
    'Agricultural Engineering',
    'Bio Medical Engineering',
    'Civil Engineering',
    'Chemical Engineering',
    'Electrical & Electronics Engineering',
    'Electronics & Instrumentation Engineering',
    'Electronics & Communication Engineering',
    'Mechanical Engineering',
    'Medical Electronics',
]

ALL_DEPARTMENTS = SCOFT_DEPARTMENTS + NON_SCOFT_DEPARTMENTS

SCOFT = 'SCOFT'
NON_SCOFT = 'NON-SCOFT'


def department_category(department: str) -> str:
    """Return SCOFT or NON-SCOFT for a department name"""
    return SCOFT if department in SCOFT_DEPARTMENTS else NON_SCOFT


def is_known_department(department: str) -> bool:
    return department in ALL_DEPARTMENTS
