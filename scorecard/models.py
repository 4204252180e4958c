from sqlalchemy import Column, Integer, String, Date, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from .db import Base


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False, index=True)
    last_name = Column(String, nullable=False, default="")
    code = Column(String, nullable=False, default="")
    handicap = Column(Integer, nullable=False, default=0)
    tee_color = Column(String, nullable=False, default="white")  # blue/white/red

    sessions = relationship(
        "SessionPlayer",
        back_populates="player",
        cascade="all, delete-orphan"
    )
    hole_scores = relationship(
        "HoleScore",
        back_populates="player",
        cascade="all, delete-orphan"
    )


class Course(Base):
    __tablename__ = "golf_courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    holes = Column(Integer, nullable=False, default=18)

    # one value per hole, hole 1 first
    par = Column(JSON, nullable=False)
    handicaps_blue = Column(JSON, nullable=False)    # stroke index 1..18
    handicaps_white = Column(JSON, nullable=False)
    handicaps_red = Column(JSON, nullable=False)

    sessions = relationship(
        "GameSession",
        back_populates="course",
        cascade="all, delete-orphan"
    )

    @property
    def par_total(self):
        return sum(self.par or [])


class GameSession(Base):
    __tablename__ = "game_sessions"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("golf_courses.id"), nullable=False)
    date = Column(Date, nullable=False)

    course = relationship("Course", back_populates="sessions")

    session_players = relationship(
        "SessionPlayer",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionPlayer.id"
    )
    hole_scores = relationship(
        "HoleScore",
        back_populates="session",
        cascade="all, delete-orphan"
    )


class SessionPlayer(Base):
    __tablename__ = "session_players"
    __table_args__ = (UniqueConstraint("session_id", "player_id"),)

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("game_sessions.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)

    # handicap on the day; results use this, not the player's current one
    handicap = Column(Integer, nullable=False)

    session = relationship("GameSession", back_populates="session_players")
    player = relationship("Player", back_populates="sessions")


class HoleScore(Base):
    __tablename__ = "hole_results"
    __table_args__ = (UniqueConstraint("session_id", "player_id", "hole"),)

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("game_sessions.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)

    hole = Column(Integer, nullable=False)          # 1..18
    strokes = Column(Integer, nullable=False)       # gross
    putts = Column(Integer, nullable=False)
    net_strokes = Column(Integer, nullable=False)   # computed

    session = relationship("GameSession", back_populates="hole_scores")
    player = relationship("Player", back_populates="hole_scores")
