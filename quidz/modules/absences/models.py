# Supabase table: absences
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- date: date (not null)
- reason: text (not null)
- comment: text (nullable)
- approved: boolean (nullable) - null = pending, true = approved, false = rejected
- created_at: timestamp (default: now())

approved is written by staff only and moves from null to true/false exactly once.
"""
