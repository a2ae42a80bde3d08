from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, Integer, ForeignKey, String, Float
from liftlog.db import Base

class SetRecord(Base):
    __tablename__ = "workout_sets"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    exercise_id: Mapped[str] = mapped_column(ForeignKey("exercise_logs.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(8), nullable=False, default="kg")
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    exercise = relationship("ExerciseRecord", back_populates="sets")
