# No table of its own
# Progress is derived on read from: tasks, absences, skills, learning_progress, mood_entries, flashcards

"""
Period scoping:
- tasks: due_date inside [period_start, period_end]
- absences: date inside the period
- learning_progress (knew_answer = true), mood_entries: created_at inside the period
- skills: cumulative, never period-scoped
Nothing is cached; every request recomputes.
"""
