from __future__ import annotations

from dataclasses import dataclass

from .common.clock import Clock, SystemClock
from .core.settings import EngineSettings
from .entries.repository import StatisticsRepository, TimeEntryRepository
from .punctuality.calculator import LatenessOvertimeCalculator
from .punctuality.factory import PunctualityStrategyFactory
from .reports.service import TimesheetService
from .reports.week import WeekSummaryAggregator
from .sync.trigger import RecomputeTrigger
from .sync.view import LiveTimesheetView
from .timeline.segmenter import TimelineSegmenter
from .timing.normalizer import TimeNormalizer
from .worktime.calculator.standard_calculator import StandardWorkedTimeCalculator


@dataclass(frozen=True)
class Container:
    settings: EngineSettings
    clock: Clock

    entries_repo: TimeEntryRepository
    statistics_repo: StatisticsRepository | None

    normalizer: TimeNormalizer
    worked_time_calculator: StandardWorkedTimeCalculator
    punctuality_calculator: LatenessOvertimeCalculator
    segmenter: TimelineSegmenter
    week_aggregator: WeekSummaryAggregator

    timesheet_service: TimesheetService
    trigger: RecomputeTrigger

    def live_view(self, employee_id: str, work_date) -> LiveTimesheetView:
        return LiveTimesheetView(
            self.timesheet_service,
            employee_id,
            work_date,
            trigger=self.trigger,
            clock=self.clock,
        )


def build_container(
    *,
    repository: TimeEntryRepository,
    settings: EngineSettings | None = None,
    statistics: StatisticsRepository | None = None,
    clock: Clock | None = None,
) -> Container:
    settings = settings or EngineSettings()
    clock = clock or SystemClock()

    normalizer = TimeNormalizer(settings.org_timezone)
    worked_time_calculator = StandardWorkedTimeCalculator()
    punctuality_calculator = LatenessOvertimeCalculator(
        strategy_factory=PunctualityStrategyFactory(),
        grace_minutes=settings.late_grace_minutes,
        approval_after_minutes=settings.late_approval_minutes,
    )
    segmenter = TimelineSegmenter()
    week_aggregator = WeekSummaryAggregator()

    timesheet_service = TimesheetService(
        repository,
        normalizer=normalizer,
        calculator=worked_time_calculator,
        punctuality=punctuality_calculator,
        segmenter=segmenter,
        week_aggregator=week_aggregator,
        statistics=statistics,
        clock=clock,
    )
    trigger = RecomputeTrigger(
        poll_interval_seconds=settings.poll_interval_seconds,
        tick_interval_seconds=settings.progressive_tick_seconds,
    )

    return Container(
        settings=settings,
        clock=clock,
        entries_repo=repository,
        statistics_repo=statistics,
        normalizer=normalizer,
        worked_time_calculator=worked_time_calculator,
        punctuality_calculator=punctuality_calculator,
        segmenter=segmenter,
        week_aggregator=week_aggregator,
        timesheet_service=timesheet_service,
        trigger=trigger,
    )
