# Supabase tables: profiles, user_roles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users by trigger
- full_name: text (nullable)
- avatar_url: text (nullable)
- onboarding_completed: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

user_roles:
- id: uuid (primary key)
- user_id: uuid (references profiles.id, not null)
- role: app_role enum ('user' | 'admin' | 'coach')
- created_at: timestamp (default: now())
- unique (user_id, role)

Role rows are checked server-side by the has_role(_role, _user_id) SQL function used in RLS policies.
"""
