from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, DateTime, String
from liftlog.db import Base

class SessionRecord(Base):
    __tablename__ = "sessions"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    # 0 = most recent; history is stored in display order
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    started_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False)
    ended_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    routine_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    exercises = relationship(
        "ExerciseRecord",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ExerciseRecord.position",
    )
