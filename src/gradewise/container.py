from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .analysis.service import AnalysisService, StudentAnalyzer
from .attendance.factory import AttendanceStrategyFactory
from .attendance.kv_attendance_repository import KVAttendanceRepository
from .attendance.service import AttendanceService
from .categories.kv_category_repository import KVCategoryRepository
from .categories.service import CategoryService
from .database.bootstrap import apply_schema, ensure_demo_teacher
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_store import MySQLKeyValueStore
from .database.store import InMemoryKeyValueStore, KeyValueStore
from .points.kv_point_repository import KVPointRecordRepository
from .points.service import PointService
from .positions.kv_position_repository import KVPositionRepository
from .positions.service import PositionService
from .ratings.kv_rating_repository import KVRatingRepository
from .ratings.service import RatingService
from .recap.service import RecapService
from .school.kv_settings_repository import KVSettingsRepository
from .school.service import SettingsService
from .students.kv_student_repository import KVStudentRepository
from .students.service import StudentService
from .users.kv_user_repository import KVUserRepository
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: KeyValueStore

    users_repo: KVUserRepository
    students_repo: KVStudentRepository
    positions_repo: KVPositionRepository
    categories_repo: KVCategoryRepository
    ratings_repo: KVRatingRepository
    attendance_repo: KVAttendanceRepository
    points_repo: KVPointRecordRepository
    settings_repo: KVSettingsRepository

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    position_service: PositionService
    category_service: CategoryService
    rating_service: RatingService
    attendance_service: AttendanceService
    point_service: PointService
    settings_service: SettingsService
    recap_service: RecapService
    analysis_service: AnalysisService


def build_store(*, backend: str, db_config: dict, auto_init_db: bool = False) -> KeyValueStore:
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend != "mysql":
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    if auto_init_db:
        apply_schema(conn)
    return MySQLKeyValueStore(conn)


def build_container(
    *,
    store: KeyValueStore,
    analyzer: Optional[StudentAnalyzer] = None,
    seed_demo_teacher: bool = False,
) -> Container:
    users_repo = KVUserRepository(store)
    students_repo = KVStudentRepository(store)
    positions_repo = KVPositionRepository(store)
    categories_repo = KVCategoryRepository(store)
    ratings_repo = KVRatingRepository(store)
    attendance_repo = KVAttendanceRepository(store)
    points_repo = KVPointRecordRepository(store)
    settings_repo = KVSettingsRepository(store)

    auth_service = AuthService(users_repo, students_repo)
    user_service = UserService(users_repo)
    student_service = StudentService(students_repo, ratings_repo, attendance_repo, points_repo)
    position_service = PositionService(positions_repo, student_service)
    rating_service = RatingService(ratings_repo, categories_repo, attendance_repo, settings_repo, students_repo)
    category_service = CategoryService(categories_repo, rating_service)
    attendance_service = AttendanceService(
        attendance_repo,
        student_service,
        settings_repo,
        rating_service,
        strategy_factory=AttendanceStrategyFactory(),
    )
    point_service = PointService(points_repo, students_repo)
    settings_service = SettingsService(settings_repo)
    recap_service = RecapService(student_service, category_service, rating_service, attendance_service, point_service)
    analysis_service = AnalysisService(
        student_service,
        category_service,
        rating_service,
        attendance_service,
        point_service,
        analyzer=analyzer,
    )

    category_service.ensure_attendance_category()
    if seed_demo_teacher:
        ensure_demo_teacher(user_service)

    return Container(
        store=store,
        users_repo=users_repo,
        students_repo=students_repo,
        positions_repo=positions_repo,
        categories_repo=categories_repo,
        ratings_repo=ratings_repo,
        attendance_repo=attendance_repo,
        points_repo=points_repo,
        settings_repo=settings_repo,
        auth_service=auth_service,
        user_service=user_service,
        student_service=student_service,
        position_service=position_service,
        category_service=category_service,
        rating_service=rating_service,
        attendance_service=attendance_service,
        point_service=point_service,
        settings_service=settings_service,
        recap_service=recap_service,
        analysis_service=analysis_service,
    )
