# Supabase tables: skills, skill_tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Proof files live in the 'skill-proofs' storage bucket

"""
Expected Supabase table structure:

skills:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (nullable)
- category: skill_category enum ('handwerk' | 'digital' | 'sozial' | 'kreativ' | 'sonstiges')
- proof_text: text (nullable)
- proof_file_url: text (nullable)
- status: skill_status enum ('in_pruefung' | 'integrationsrelevant' | 'validiert' | 'abgelehnt'),
  default 'in_pruefung'
- is_integration_relevant: boolean (default: false)
- coach_comment: text (nullable)
- competence_level: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

skill_tasks:
- id: uuid (primary key)
- skill_id: uuid (foreign key to skills.id)
- task_id: uuid (foreign key to tasks.id)
- created_at: timestamp (default: now())
"""
