# mockapi/models/project.py
from sqlalchemy import BigInteger, Column, Integer, String, Text
from mockapi.db.database import Base


class ProjectRecord(Base):
    __tablename__ = "projects"

    seq = Column(Integer, primary_key=True, autoincrement=True)  # storage order
    id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    base_path = Column(String, nullable=False)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)
