# Supabase table: badges
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- badge_type: text (not null) - values: first_card, cards_10, cards_50, streak_5, streak_10, perfect_session
- earned_at: timestamp (default: now())

A user holds each badge_type at most once.
"""
