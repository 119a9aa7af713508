from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Float, Integer, String, Text
from sqlalchemy.orm import relationship

from .db import Base


class Round(Base):
    __tablename__ = "rounds"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    course_name = Column(String, nullable=False, index=True)
    tee_name = Column(String, nullable=False, default="white")
    round_format = Column(String, nullable=False, default="full18")

    # RoundSummary as JSON, exactly as it was computed
    summary_json = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    round_golfers = relationship(
        "RoundGolfer",
        back_populates="round",
        cascade="all, delete-orphan"
    )


class RoundGolfer(Base):
    __tablename__ = "round_golfers"

    id = Column(Integer, primary_key=True, index=True)
    round_id = Column(Integer, ForeignKey("rounds.id"), nullable=False)

    golfer_key = Column(String, nullable=False)  # id used in the scorecard
    name = Column(String, nullable=False)
    handicap_index = Column(Float, nullable=False, default=0.0)
    course_handicap = Column(Integer, nullable=False)

    gross_total = Column(Integer, nullable=True)
    net_total = Column(Integer, nullable=True)

    round = relationship("Round", back_populates="round_golfers")

    hole_scores = relationship(
        "HoleScore",
        back_populates="round_golfer",
        cascade="all, delete-orphan"
    )


class HoleScore(Base):
    __tablename__ = "hole_scores"

    id = Column(Integer, primary_key=True, index=True)

    round_golfer_id = Column(Integer, ForeignKey("round_golfers.id"), nullable=False)
    hole_number = Column(Integer, nullable=False)  # 1..18

    gross_strokes = Column(Integer, nullable=False)
    net_strokes = Column(Integer, nullable=True)

    round_golfer = relationship("RoundGolfer", back_populates="hole_scores")
