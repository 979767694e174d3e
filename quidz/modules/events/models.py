# Supabase table: events
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (nullable)
- start_time: timestamp (not null)
- end_time: timestamp (not null)
- all_day: boolean (default: false)
- color: text (default: '#3b82f6')
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

The calendar also shows the participant's task due dates as read-only entries; those come from tasks.
"""
