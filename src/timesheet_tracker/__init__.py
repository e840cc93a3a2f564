"""Timesheet Tracker package.

Attendance time-accounting engine: turns raw clock-in/clock-out records and
breaks into worked minutes, lateness, overtime, weekly totals and timeline
segments. Organized by feature modules (timing, sessions, worktime,
punctuality, timeline, reports, ...) with a thin wiring layer in
``container.py`` / ``main.py``.
"""
