# Supabase tables: categories, tags, flashcards, flashcard_tags, learning_progress, flashcard_feedbacks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

categories:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- created_by: uuid (nullable)
- created_at: timestamp (default: now())

tags:
- id: uuid (primary key)
- name: text (unique, not null)
- created_at: timestamp (default: now())

flashcards:
- id: uuid (primary key)
- front_text: text (not null, max 10000 chars)
- back_text: text (not null, max 10000 chars)
- category_id: uuid (foreign key to categories.id, nullable)
- is_public: boolean (default: false)
- created_by: uuid (foreign key to profiles.id)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

flashcard_tags:
- flashcard_id: uuid (foreign key to flashcards.id)
- tag_id: uuid (foreign key to tags.id)

learning_progress:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- flashcard_id: uuid (foreign key to flashcards.id)
- knew_answer: boolean (not null)
- created_at: timestamp (default: now())

flashcard_feedbacks:
- id: uuid (primary key)
- flashcard_id: uuid (foreign key to flashcards.id)
- user_id: uuid (foreign key to profiles.id)
- is_helpful: boolean (not null)
- created_at: timestamp (default: now())
"""
