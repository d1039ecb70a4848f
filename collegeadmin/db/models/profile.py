from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func
from collegeadmin.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    role = Column(Enum("admin", "faculty", "student", name="user_role"), nullable=False, default="student")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
