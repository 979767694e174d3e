# Supabase table: chat_messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Live delivery uses the store's realtime channel on this table; the API is only the write path

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- message: text (not null)
- is_edited: boolean (default: false)
- edited_at: timestamp (nullable)
- created_at: timestamp (default: now())
"""
