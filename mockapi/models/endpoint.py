# mockapi/models/endpoint.py
from sqlalchemy import JSON, BigInteger, Boolean, Column, ForeignKey, Integer, String
from mockapi.db.database import Base


class EndpointRecord(Base):
    __tablename__ = "endpoints"

    seq = Column(Integer, primary_key=True, autoincrement=True)  # storage order
    id = Column(String, unique=True, index=True, nullable=False)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    path = Column(String, nullable=False)
    method = Column(String, nullable=False)
    response = Column(JSON, nullable=False)  # {status, headers, body, delay}
    enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)
