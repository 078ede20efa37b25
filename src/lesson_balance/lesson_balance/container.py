from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .balance.factory import BalanceStrategyFactory
from .balance.service import BalanceService
from .core.constants import DEFAULT_TIMEZONE
from .reports.service import BalanceReportService
from .revenue.calculator.base import LessonPriceCalculator
from .revenue.calculator.standard_calculator import StandardLessonPriceCalculator
from .revenue.service import RevenueService
from .snapshot.repositories import (
    SnapshotAttendanceRepository,
    SnapshotLessonRepository,
    SnapshotRosterRepository,
    SnapshotSubscriptionRepository,
)
from .snapshot.store import Snapshot


@dataclass(frozen=True)
class Container:
    snapshot: Snapshot

    lessons_repo: SnapshotLessonRepository
    attendance_repo: SnapshotAttendanceRepository
    subscriptions_repo: SnapshotSubscriptionRepository
    roster_repo: SnapshotRosterRepository

    balance_service: BalanceService
    revenue_service: RevenueService
    report_service: BalanceReportService


def build_container(
    *,
    snapshot: Snapshot,
    settings: Optional[ModuleType] = None,
    calculator: Optional[LessonPriceCalculator] = None,
) -> Container:
    timezone = str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE) or DEFAULT_TIMEZONE)

    lessons_repo = SnapshotLessonRepository(snapshot)
    attendance_repo = SnapshotAttendanceRepository(snapshot)
    subscriptions_repo = SnapshotSubscriptionRepository(snapshot)
    roster_repo = SnapshotRosterRepository(snapshot)

    balance_service = BalanceService(
        subscriptions_repo,
        lessons_repo,
        attendance_repo,
        roster_repo,
        strategy_factory=BalanceStrategyFactory(),
        timezone=timezone,
    )
    revenue_service = RevenueService(
        balance_service,
        subscriptions_repo,
        lessons_repo,
        attendance_repo,
        calculator=calculator or StandardLessonPriceCalculator(),
    )
    report_service = BalanceReportService()

    return Container(
        snapshot=snapshot,
        lessons_repo=lessons_repo,
        attendance_repo=attendance_repo,
        subscriptions_repo=subscriptions_repo,
        roster_repo=roster_repo,
        balance_service=balance_service,
        revenue_service=revenue_service,
        report_service=report_service,
    )
