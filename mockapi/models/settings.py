# mockapi/models/settings.py
from sqlalchemy import JSON, Column, Integer
from mockapi.db.database import Base

SETTINGS_ROW_ID = 1


class SettingsRecord(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    data = Column(JSON, nullable=False)
