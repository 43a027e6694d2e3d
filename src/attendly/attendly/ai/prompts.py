from __future__ import annotations

from ..statistics.model import ClassInfo, WeeklySummary

TIMETABLE_PROMPT = """You are an AI assistant. Your only task is to look at the attached timetable image and extract EVERY SINGLE block you see, including academic classes and other activities.

For each block, provide:
1. "day": the day of the week, one of "Mon", "Tue", "Wed", "Thu", "Fri", "Sat".
2. "startTime": the start time of that block in 24-hour HH:MM format.
3. "subjectName": the name of the subject or activity in that block (e.g. "Physics 101", "LUNCH", "LIBRARY").

CRITICAL INSTRUCTIONS:
- Extract every block, even if the same subject appears multiple times.
- Include non-academic blocks like "LUNCH", "BREAK", "LIBRARY", "SPORTS".
- Do NOT merge classes and do NOT calculate end times.
- Convert all times to 24-hour HH:MM format, "1:30 PM" becomes "13:30".

Answer with JSON only: {"slots": [{"day": "...", "startTime": "...", "subjectName": "..."}]}"""

QUESTIONS_PROMPT = """You are an expert AI assistant tasked with parsing academic question papers. Analyze the attached document (image or PDF) and extract every single question.

For each question, provide:
1. "questionNumber": the exact identifier of the question (e.g. "1", "2a", "IV.c").
2. "questionText": the complete and unabridged text of the question.
3. "marks": the marks assigned to the question as a number. Look for indicators like "(2m)", "[5 marks]" or "10M".

CRITICAL INSTRUCTIONS:
- Extract ALL questions, including all sub-parts, each part as its own entry ("3a", "3b").
- Do not paraphrase or shorten the question text.
- "marks" must be a number, not a string like "5m".

Answer with JSON only: {"questions": [{"questionNumber": "...", "questionText": "...", "marks": 0}]}"""


def _class_lines(classes: tuple[ClassInfo, ...]) -> str:
    if not classes:
        return "- none"
    return "\n".join(f"- {c.subject_name} on {c.day}" for c in classes)


def weekly_debrief_prompt(summary: WeeklySummary) -> str:
    greeting = f"The user's name is {summary.user_name}. Address them directly.\n" if summary.user_name else ""
    return f"""You are an AI assistant in an attendance tracking app called Attendly. Act as a friendly and motivational coach and write a personalized weekly summary.

{greeting}The week is from {summary.week_start.isoformat()} to {summary.week_end.isoformat()}.
The user's attendance percentage for the week was {summary.attendance_percentage}%.

Attended classes:
{_class_lines(summary.attended_classes)}

Missed classes:
{_class_lines(summary.missed_classes)}

Cancelled classes:
{_class_lines(summary.cancelled_classes)}

Instructions:
1. "headline": a short, encouraging headline. At 100% say "Perfect Week!". At 90% or more use something like "Awesome Work!". At 75% or more use "Solid Week!". Lower than that, use something encouraging like "Let's Bounce Back!".
2. "summary": 2-3 sentences. Congratulate high attendance and point out a positive trend. For low attendance be encouraging, not critical, and suggest a small goal for next week.
3. "attendancePercentage": return exactly {summary.attendance_percentage}. Do not recalculate it.

Answer with JSON only: {{"headline": "...", "summary": "...", "attendancePercentage": 0}}"""
