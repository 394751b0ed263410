from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

SCHEDULED = "Scheduled"
FINISHED = "Finished"


class Team(BaseModel):
    name: str = ""


class Teams(BaseModel):
    visitors: Team = Field(default_factory=Team)
    home: Team = Field(default_factory=Team)


class TeamScore(BaseModel):
    points: int | None = None


class Scores(BaseModel):
    visitors: TeamScore = Field(default_factory=TeamScore)
    home: TeamScore = Field(default_factory=TeamScore)


class GameStatus(BaseModel):
    long: str = ""


class GameDate(BaseModel):
    start: str = ""


class Game(BaseModel):
    """A game as returned by the ``/games`` endpoint."""

    id: int
    date: GameDate = Field(default_factory=GameDate)
    status: GameStatus = Field(default_factory=GameStatus)
    teams: Teams = Field(default_factory=Teams)
    scores: Scores | None = None

    @field_validator("date", "status", mode="before")
    @classmethod
    def none_to_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def is_scheduled(self) -> bool:
        return self.status.long == SCHEDULED

    @property
    def is_finished(self) -> bool:
        return self.status.long == FINISHED

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Game:
        return cls.model_validate(data)
