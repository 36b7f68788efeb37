from sqlalchemy import Column, String, Text, Integer, JSON

from app.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    # без внешнего ключа: документы удаленного пользователя могут остаться (USER_REMOVAL_POLICY=orphan)
    owner = Column(String(32), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, default="", nullable=False)
    type = Column(Integer, default=0, nullable=False)
    sub_type = Column(Integer, default=0, nullable=False)
    content = Column(JSON, nullable=True)
