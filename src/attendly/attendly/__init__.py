"""Attendly package.

Personal attendance tracker organized by feature modules (subjects, timetable,
attendance, statistics, ...) with pure reducer functions over an immutable
state, a thin Flask controller layer and pluggable snapshot persistence.
"""
