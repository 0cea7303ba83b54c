"""
Demo accounts, faculty directory and sample OD requests
"""

from datetime import date, datetime
from typing import Dict

from odflow.models import db, User, StudentProfile, FacultyMember, ODRequest, Certificate
from odflow.utils.helpers import log_info, to_data_url

SIGNATURE = ('data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk'
             'YPhfDwAChwGA60e6kgAAAABJRU5ErkJggg==')

CSE = 'Computer Science & Engineering'
ECE = 'Electronics & Communication Engineering'

DEMO_USERS = [
    # username, name, role, department, mentor username
    ('student001', 'John Doe', 'student', CSE, 'mentor001'),
    ('student002', 'Jane Smith', 'student', CSE, 'mentor001'),
    ('student003', 'Mike Johnson', 'student', ECE, 'mentor002'),
    ('mentor001', 'Dr. Sarah Wilson', 'mentor', CSE, None),
    ('mentor002', 'Prof. Robert Brown', 'mentor', ECE, None),
    ('hod001', 'Dr. Michael Davis', 'hod', CSE, None),
    ('hod002', 'Dr. Lisa Anderson', 'hod', ECE, None),
    ('principal001', 'Dr. James Thompson', 'principal', None, None),
    ('admin001', 'System Administrator', 'admin', None, None),
]

DEMO_PROFILES = {
    'student001': ('CSE001', '3rd', '+91 9876543210', 'john.doe@college.edu'),
    'student002': ('CSE002', '4th', '+91 9876543212', 'jane.smith@college.edu'),
    'student003': ('ECE003', '2nd', '+91 9876543214', 'mike.johnson@college.edu'),
}

# code, name, designation, department, room, building, floor, extension,
# office hours, week off, specialization, is_hod, availability
DEMO_FACULTY = [
    ('FAC001', 'Dr. Sarah Wilson', 'Associate Professor & Mentor', CSE, 'CS-201', 'SCOFT Block A',
     '2nd Floor', '2201', '10:00 AM - 4:00 PM', 'Sunday',
     ['Software Engineering', 'Data Structures', 'Programming'], False, 'Available'),
    ('FAC002', 'Dr. Michael Davis', 'Professor & HOD', CSE, 'CS-101', 'SCOFT Block A',
     '1st Floor', '2101', '9:00 AM - 5:00 PM', 'Saturday',
     ['Computer Networks', 'Cybersecurity', 'System Administration'], True, 'Available'),
    ('FAC003', 'Prof. Rajesh Kumar', 'Assistant Professor', 'Artificial Intelligence & Data Science',
     'AI-301', 'SCOFT Block B', '3rd Floor', '2301', '11:00 AM - 5:00 PM', 'Sunday',
     ['Machine Learning', 'Deep Learning', 'Data Analytics'], False, 'In Meeting'),
    ('FAC004', 'Dr. Priya Sharma', 'Professor & HOD', 'Artificial Intelligence & Data Science',
     'AI-201', 'SCOFT Block B', '2nd Floor', '2201', '9:00 AM - 4:00 PM', 'Saturday',
     ['Artificial Intelligence', 'Neural Networks', 'Pattern Recognition'], True, 'Available'),
    ('FAC005', 'Prof. Amit Patel', 'Associate Professor', 'Information Technology', 'IT-202',
     'SCOFT Block C', '2nd Floor', '2202', '10:00 AM - 4:00 PM', 'Sunday',
     ['Web Development', 'Database Systems', 'Cloud Computing'], False, 'Available'),
    ('FAC006', 'Dr. Sunita Reddy', 'Professor & HOD', 'Information Technology', 'IT-101',
     'SCOFT Block C', '1st Floor', '2101', '9:00 AM - 5:00 PM', 'Saturday',
     ['Information Systems', 'IT Management', 'Enterprise Architecture'], True, 'Busy'),
    ('FAC007', 'Prof. Robert Brown', 'Associate Professor & Mentor', ECE, 'ECE-301',
     'Engineering Block A', '3rd Floor', '3301', '10:00 AM - 4:00 PM', 'Sunday',
     ['Digital Signal Processing', 'Communication Systems', 'VLSI Design'], False, 'Available'),
    ('FAC008', 'Dr. Lisa Anderson', 'Professor & HOD', ECE, 'ECE-101', 'Engineering Block A',
     '1st Floor', '3101', '9:00 AM - 5:00 PM', 'Saturday',
     ['Microwave Engineering', 'Antenna Design', 'RF Systems'], True, 'Available'),
    ('FAC009', 'Prof. Kumar Swamy', 'Assistant Professor', 'Mechanical Engineering', 'MECH-202',
     'Engineering Block B', '2nd Floor', '3202', '11:00 AM - 5:00 PM', 'Sunday',
     ['Thermodynamics', 'Heat Transfer', 'Manufacturing'], False, 'Out of Office'),
    ('FAC010', 'Dr. Anita Desai', 'Professor & HOD', 'Mechanical Engineering', 'MECH-101',
     'Engineering Block B', '1st Floor', '3101', '9:00 AM - 4:00 PM', 'Saturday',
     ['Fluid Mechanics', 'Machine Design', 'CAD/CAM'], True, 'Available'),
    ('FAC011', 'Prof. Srinivas Rao', 'Associate Professor', 'Civil Engineering', 'CIVIL-301',
     'Engineering Block C', '3rd Floor', '3301', '10:00 AM - 4:00 PM', 'Sunday',
     ['Structural Engineering', 'Concrete Technology', 'Construction Management'], False, 'Available'),
    ('FAC012', 'Dr. Meera Nair', 'Professor & HOD', 'Civil Engineering', 'CIVIL-101',
     'Engineering Block C', '1st Floor', '3101', '9:00 AM - 5:00 PM', 'Saturday',
     ['Transportation Engineering', 'Urban Planning', 'Environmental Engineering'], True, 'In Meeting'),
    ('FAC013', 'Prof. Vikram Singh', 'Assistant Professor', 'Electrical & Electronics Engineering',
     'EEE-202', 'Engineering Block D', '2nd Floor', '3202', '11:00 AM - 5:00 PM', 'Sunday',
     ['Power Systems', 'Renewable Energy', 'Electrical Machines'], False, 'Available'),
    ('FAC014', 'Dr. Kavitha Menon', 'Professor & HOD', 'Electrical & Electronics Engineering',
     'EEE-101', 'Engineering Block D', '1st Floor', '3101', '9:00 AM - 4:00 PM', 'Saturday',
     ['Control Systems', 'Power Electronics', 'Smart Grid'], True, 'Available'),
    ('FAC015', 'Prof. Ramesh Gupta', 'Associate Professor', 'Chemical Engineering', 'CHEM-301',
     'Engineering Block E', '3rd Floor', '3301', '10:00 AM - 4:00 PM', 'Sunday',
     ['Process Engineering', 'Chemical Reactors', 'Mass Transfer'], False, 'Available'),
]


def seed_users(password: str) -> Dict[str, User]:
    """Create the demo accounts and student profiles"""
    users = {}
    for username, name, role, department, _ in DEMO_USERS:
        user = User(username=username, name=name, role=role, department=department)
        user.set_password(password)
        if role in ('mentor', 'hod', 'principal'):
            user.digital_signature = SIGNATURE
        db.session.add(user)
        users[username] = user
    db.session.flush()

    for username, _, _, department, mentor_username in DEMO_USERS:
        if mentor_username:
            users[username].mentor_id = users[mentor_username].id

    for username, (roll_number, year, phone_number, email) in DEMO_PROFILES.items():
        student = users[username]
        db.session.add(StudentProfile(
            user_id=student.id,
            name=student.name,
            roll_number=roll_number,
            department=student.department,
            year=year,
            phone_number=phone_number,
            email=email
        ))
    db.session.flush()
    return users


def seed_faculty() -> int:
    for (code, name, designation, department, room_number, building, floor, extension,
         office_hours, week_off_day, specialization, is_hod, availability) in DEMO_FACULTY:
        db.session.add(FacultyMember(
            code=code, name=name, designation=designation, department=department,
            room_number=room_number, building=building, floor=floor, phone_extension=extension,
            email=f"{name.split(' ', 1)[1].lower().replace(' ', '.')}@college.edu",
            office_hours=office_hours, week_off_day=week_off_day,
            specialization=specialization, is_hod=is_hod, availability=availability
        ))
    return len(DEMO_FACULTY)


def _request_for(student: User, **fields) -> ODRequest:
    profile = student.profile
    return ODRequest(
        student_id=student.id,
        student_name=profile.name,
        roll_number=profile.roll_number,
        department=profile.department,
        year=profile.year,
        phone_number=profile.phone_number,
        email=profile.email,
        **fields
    )


def seed_requests(users: Dict[str, User]) -> int:
    """Sample requests covering a closed, a completed and a pending request"""
    sports = _request_for(
        users['student001'],
        from_date=date(2024, 10, 15), to_date=date(2024, 10, 15),
        od_time=['09:00-10:00', '10:00-11:00'],
        reason='Sports Competition',
        detailed_reason='Inter-college basketball tournament representing the college team',
        description='Participating in inter-college basketball tournament',
        status='certificate_approved',
        submitted_at=datetime(2024, 10, 1, 10, 0), last_updated=datetime(2024, 10, 20, 14, 30),
        mentor_feedback='Approved for sports activity', mentor_signature='Dr. Sarah Wilson',
        mentor_approved_at=datetime(2024, 10, 2, 9, 0), event_completed_at=datetime(2024, 10, 15, 18, 0),
        hod_feedback='Excellent participation'
    )
    interview = _request_for(
        users['student002'],
        from_date=date(2024, 10, 20), to_date=date(2024, 10, 20),
        od_time=['14:00-15:00'],
        reason='Job Interview',
        detailed_reason='Campus placement interview with leading technology company',
        description='Technical interview at Tech Corp',
        status='completed',
        submitted_at=datetime(2024, 10, 2, 9, 15), last_updated=datetime(2024, 10, 20, 16, 0),
        mentor_feedback='Good opportunity for career', mentor_signature='Dr. Sarah Wilson',
        mentor_approved_at=datetime(2024, 10, 3, 11, 20), event_completed_at=datetime(2024, 10, 20, 16, 0)
    )
    conference = _request_for(
        users['student003'],
        from_date=date(2024, 10, 18), to_date=date(2024, 10, 19),
        od_time=['10:00-11:00', '11:00-12:00', '12:00-13:00'],
        reason='Academic Conference',
        detailed_reason='IEEE International Conference on Electronics and Communication Technologies',
        description='IEEE Conference on Electronics',
        status='submitted',
        submitted_at=datetime(2024, 10, 1, 16, 45), last_updated=datetime(2024, 10, 1, 16, 45)
    )
    db.session.add_all([sports, interview, conference])
    db.session.flush()

    certificate = Certificate(
        od_request_id=sports.id,
        student_id=sports.student_id,
        file_name='basketball_tournament_certificate.pdf',
        content_type='application/pdf',
        file_data=to_data_url(b'%PDF-1.4\n% demo certificate\n%%EOF\n', 'application/pdf'),
        uploaded_at=datetime(2024, 10, 16, 10, 0),
        status='hod_approved',
        hod_feedback='Excellent participation',
        hod_approved_at=datetime(2024, 10, 17, 14, 0)
    )
    db.session.add(certificate)
    db.session.flush()
    sports.certificate_id = certificate.id
    return 3


def seed_demo_data(password: str, include_requests: bool = True) -> bool:
    """
    Load the demo data set into an empty database

    Args:
        password: Password given to every demo account
        include_requests: Also load the sample requests and certificate

    Returns:
        False when users already exist and nothing was loaded
    """
    if User.query.first() is not None:
        log_info("Demo data already present, skipping seed")
        return False

    users = seed_users(password)
    faculty_count = seed_faculty()
    request_count = seed_requests(users) if include_requests else 0
    db.session.commit()

    log_info(f"Seeded {len(users)} users, {faculty_count} faculty members and {request_count} OD requests")
    return True
