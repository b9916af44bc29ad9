# /luct-portal/app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here guarantees
# that `Base.metadata` knows every table before `create_all` runs at start-up.

from .base_class import Base

from .models.user_models import Faculty, User
from .models.course_models import Course, Class, Enrolment
from .models.report_models import LectureReport, AttendanceMark, Feedback
from .models.rating_models import Rating
