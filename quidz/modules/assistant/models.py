# Supabase tables: ai_chat_messages, ai_settings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Replies are generated and persisted by the 'ai-chat' serverless function

"""
Expected Supabase table structure:

ai_chat_messages:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- role: text (not null) - values: user, assistant
- content: text (not null)
- created_at: timestamp (default: now())

ai_settings (single row):
- id: uuid (primary key)
- bot_name: text (default: 'QUIDZ Assistant')
- system_prompt: text (nullable)
- updated_at: timestamp (nullable)
"""
