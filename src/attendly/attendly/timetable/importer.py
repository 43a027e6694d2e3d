from __future__ import annotations

from datetime import time
from typing import Iterable

from ..common.datetime_utils import add_minutes, minutes_between
from ..core.constants import (
    DEFAULT_CLASS_MINUTES,
    MERGE_GAP_MAX_MINUTES,
    MERGE_GAP_MIN_MINUTES,
    MERGED_CLASS_MINUTES,
)
from ..core.enums import DayOfWeek
from .model import ExtractedSlot, RawExtractedSlot


def process_raw_slots(raw_slots: Iterable[RawExtractedSlot]) -> list[ExtractedSlot]:
    """Turn extracted timetable blocks into classes with end times.

    Per day, blocks are walked in start order. Two consecutive blocks of the
    same subject starting 45-65 minutes apart are one double class of 100
    minutes. Any other block ends where the next one starts, or after 50
    minutes when it is the last of the day.
    """

    by_day: dict[DayOfWeek, list[RawExtractedSlot]] = {}
    for slot in raw_slots:
        by_day.setdefault(slot.day, []).append(slot)

    result: list[ExtractedSlot] = []
    for day, blocks in by_day.items():
        blocks = sorted(blocks, key=lambda b: b.start_time)
        i = 0
        while i < len(blocks):
            current = blocks[i]
            following = blocks[i + 1] if i + 1 < len(blocks) else None

            if following and following.subject_name == current.subject_name:
                gap = minutes_between(current.start_time, following.start_time)
                if MERGE_GAP_MIN_MINUTES <= gap <= MERGE_GAP_MAX_MINUTES:
                    result.append(_with_end(current, add_minutes(current.start_time, MERGED_CLASS_MINUTES)))
                    i += 2
                    continue

            if following:
                end = following.start_time
            else:
                end = add_minutes(current.start_time, DEFAULT_CLASS_MINUTES)
            result.append(_with_end(current, end))
            i += 1

    return result


def _with_end(block: RawExtractedSlot, end: time) -> ExtractedSlot:
    return ExtractedSlot(day=block.day, start_time=block.start_time, end_time=end, subject_name=block.subject_name)
