# Supabase tables: tasks, skill_tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- category: text (nullable)
- due_date: date (nullable)
- status: text (default: 'open') - values: open, in_progress, completed
- priority: text (default: 'medium') - values: low, medium, high
- assigned_to: uuid (foreign key to profiles.id, nullable)
- assign_to_all: boolean (default: false) - row was created by an assign-to-all fan-out
- idempotency_key: text (nullable) - client token shared by every row of one fan-out
- file_url: text (nullable)
- image_url: text (nullable)
- links: text[] (nullable)
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Fan-out creates one row per participant at creation time; later profiles do not receive it.
Participants only change status on their own rows; tasks are never deleted by participants.
"""
