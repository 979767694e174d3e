"""
Coach report PDF.
"""
from datetime import datetime
from typing import Dict, Optional

from quidz.core.pdf import PdfDocument
from quidz.modules.reports.schemas import PROGRAM_TYPE_LABELS


def _section_text(summary_line: str, notes: Optional[str]) -> list:
    lines = [summary_line] if summary_line else []
    if notes:
        lines.append(notes)
    return lines or ["-"]


def build_report_pdf(report: Dict, participant_name: Optional[str], generated_at: Optional[datetime] = None) -> bytes:
    generated_at = generated_at or datetime.utcnow()
    start = report["period_start"]
    end = report["period_end"]
    program = PROGRAM_TYPE_LABELS.get(report.get("program_type"), report.get("program_type") or "")
    status = "FINAL" if report.get("status") == "final" else "DRAFT"
    doc = PdfDocument(
        "QUIDZ Participant Report",
        f"{participant_name or 'Unknown'}  |  {start:%d.%m.%Y} - {end:%d.%m.%Y}  |  {program}  |  {status}",
    )

    attendance = report.get("attendance_summary") or {}
    tasks = report.get("tasks_summary") or {}
    skills = report.get("skills_summary") or {}
    learning = report.get("learning_summary") or {}

    doc.section("Attendance", _section_text(
        f"Absences in period: {attendance.get('absences_count', 0)}", report.get("attendance_notes")
    ))
    doc.section("Tasks", _section_text(
        f"Tasks: {tasks.get('total', 0)} ({tasks.get('completed', 0)} completed, "
        f"{tasks.get('in_progress', 0)} in progress, {tasks.get('open', 0)} open)",
        report.get("tasks_notes"),
    ))
    doc.section("Skills", _section_text(
        f"Skills: {skills.get('total', 0)} ({skills.get('validated', 0)} validated, "
        f"{skills.get('integration_relevant', 0)} integration relevant)",
        report.get("skills_notes"),
    ))
    mood = learning.get("average_mood")
    doc.section("Learning", _section_text(
        f"Flashcards learned: {learning.get('learned_flashcards_count', 0)}", report.get("learning_notes")
    ))
    doc.section("Behaviour and work attitude", _section_text("", report.get("behavior_notes")))
    doc.section("Mood and stability", _section_text(
        f"Average mood: {mood:.1f} ({learning.get('mood_entries_count', 0)} entries)" if mood is not None else "",
        report.get("mood_summary"),
    ))
    doc.section("Overall assessment", _section_text("", report.get("overall_assessment")))
    doc.section("Outlook and next steps", _section_text("", report.get("outlook")))
    doc.section("", [f"Created {generated_at:%d.%m.%Y %H:%M}"], small=True)
    return doc.render()
