from sqlalchemy import Column, String

from app.db import Base


class Platform(Base):
    __tablename__ = "plataformas"

    id = Column(String(50), primary_key=True)
    description = Column(String(100), nullable=False)
