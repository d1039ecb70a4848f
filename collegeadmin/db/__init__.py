# collegeadmin/db/__init__.py
# Гарантирует, что все модели зарегистрированы в Base.metadata при импорте collegeadmin.db

from collegeadmin.db.models import *  # noqa: F401,F403
from collegeadmin.db.models import __all__
