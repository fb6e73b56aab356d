"""
Forme delle risposte JSON attese dal gateway Gemini.
Ogni risposta viene validata qui prima di essere usata.
"""
from typing import List

from pydantic import BaseModel, Field


class TaskDigest(BaseModel):
    id: str
    title: str
    subject: str


class BreakdownReply(BaseModel):
    steps: List[str] = Field(default_factory=list)


class RankingReply(BaseModel):
    orderedIds: List[str] = Field(default_factory=list)


class GlobalCompetitor(BaseModel):
    name: str
    achievement: str
    sourceUrl: str
    momComment: str


class StandingsReply(BaseModel):
    competitors: List[GlobalCompetitor] = Field(default_factory=list)
