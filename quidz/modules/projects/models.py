# Supabase tables: projects, project_likes, project_skills
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

projects:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (nullable)
- category: text (default: 'other') - values: web_development, mobile_app, design,
  data_science, machine_learning, other
- tags: text[] (default: '{}')
- image_url: text (nullable) - public URL in the 'project-images' bucket
- project_url: text (nullable)
- published: boolean (default: false) - visible in the gallery when true
- featured: boolean (default: false) - set by staff
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

project_likes:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id)
- user_id: uuid (foreign key to profiles.id)
- unique (project_id, user_id)

project_skills:
- project_id: uuid (foreign key to projects.id)
- skill_id: uuid (foreign key to skills.id)
"""
