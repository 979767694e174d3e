# Supabase table: documents
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# File content lives in the 'documents' storage bucket

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- category: text (nullable)
- file_url: text (not null) - public URL of the uploaded file
- visibility: text (default: 'public') - values: public, private
- assigned_to: uuid (foreign key to profiles.id, nullable)
- created_by: uuid (foreign key to profiles.id, nullable)
- created_at: timestamp (default: now())
"""
