from sqlalchemy import Column, String, Text, JSON

from app.db.base import BaseModel


class Structure(BaseModel):
    __tablename__ = "structures"

    name = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, default="", nullable=False)
    reference = Column(JSON, nullable=True)
    fields = Column(JSON, nullable=False, default=list)
