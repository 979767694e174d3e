# Supabase table: tools
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- web_link: text (not null)
- image_url: text (nullable) - public URL in the 'project-images' bucket
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
