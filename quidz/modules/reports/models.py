# Supabase table: reports
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id) - the participant
- coach_id: uuid (foreign key to profiles.id) - author
- period_start: date (not null)
- period_end: date (not null)
- program_type: text (default: 'arbeitstraining') - values: arbeitstraining, abklaerung, integration, coaching
- attendance_summary: jsonb - {absences_count, absences: [{id, date, reason, approved, status}]}
- tasks_summary: jsonb - {total, completed, in_progress, open}
- skills_summary: jsonb - {total, validated, integration_relevant}
- learning_summary: jsonb - {learned_flashcards_count, average_mood, mood_entries_count}
- attendance_notes, tasks_notes, skills_notes, learning_notes, behavior_notes: text (nullable)
- mood_summary: text (nullable)
- overall_assessment: text (nullable)
- outlook: text (nullable)
- status: text (default: 'draft') - values: draft, final
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Summaries are recomputed on every save of a draft. A final report is frozen.
"""
