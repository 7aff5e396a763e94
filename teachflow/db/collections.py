USERS = "users"
TEACHER_APPLICATIONS = "teachers"
CLASSES = "classes"
PAYMENTS = "payments"
ENROLLMENTS = "enrollments"
FEEDBACK = "feedback"
