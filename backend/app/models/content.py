from sqlalchemy import Column, DateTime, Integer, String, func

from app.db import Base


class Content(Base):
    __tablename__ = "contenidos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tmdb_id = Column(Integer, unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    type = Column(String(10), nullable=False)
    genre = Column(String(255), nullable=False, default="")
    year = Column(Integer, nullable=True)
    runtime = Column(Integer, nullable=False, default=0)
    poster_path = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
