from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class StudentInfo:
    id: str
    name: str
    email: str


@dataclass(frozen=True)
class RatingEntry:
    date: str
    ratings: Dict[str, int]
    average: float


@dataclass(frozen=True)
class AttendanceEntry:
    date: str
    status: str


@dataclass(frozen=True)
class PointEntry:
    date: str
    type: str
    description: str
    points: int


@dataclass(frozen=True)
class CategoryEntry:
    id: str
    name: str
    is_system: bool = False


@dataclass(frozen=True)
class AnalysisInput:
    """Structured record set handed to the narrative-analysis collaborator."""

    student: StudentInfo
    period: str
    ratings: List[RatingEntry] = field(default_factory=list)
    attendance: List[AttendanceEntry] = field(default_factory=list)
    point_records: List[PointEntry] = field(default_factory=list)
    categories: List[CategoryEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AnalysisResult:
    analysis: str
