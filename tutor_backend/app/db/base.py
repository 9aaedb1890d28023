from tutor_backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all
from tutor_backend.app.models.user import User  # noqa: F401
from tutor_backend.app.models.student import Student  # noqa: F401
from tutor_backend.app.models.session_record import SessionRecord  # noqa: F401
