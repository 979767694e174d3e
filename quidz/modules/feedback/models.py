# Supabase tables: feedback_questions, feedback_answers, mood_entries
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

feedback_questions:
- id: uuid (primary key)
- question_text: text (not null)
- type: text (not null) - values: text, scale, mood, multiple_choice
- options: jsonb (nullable) - answer choices for multiple_choice
- is_active: boolean (default: true)
- active_from: timestamp (default: now())
- active_until: timestamp (nullable) - open ended when null
- target_user: uuid (foreign key to profiles.id, nullable) - null means every participant
- created_by: uuid (foreign key to profiles.id, not null)
- created_at: timestamp (default: now())

feedback_answers:
- id: uuid (primary key)
- question_id: uuid (foreign key to feedback_questions.id)
- user_id: uuid (foreign key to profiles.id)
- answer_text: text (nullable)
- mood_value: integer (nullable)
- created_at: timestamp (default: now())

mood_entries:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- mood_value: integer (not null, 1..10)
- created_at: timestamp (default: now())
"""
