"""
Competence portfolio PDF: the participant's skills grouped by category, then their projects
with linked skills.
"""
from datetime import datetime
from typing import Dict, List, Optional

from quidz.core.pdf import PdfDocument
from quidz.modules.projects.schemas import PROJECT_CATEGORY_LABELS
from quidz.modules.skills.schemas import SKILL_CATEGORY_LABELS, SKILL_STATUS_LABELS


def build_portfolio_pdf(
    profile: Dict,
    skills: List[Dict],
    projects: List[Dict],
    project_skills: Dict[str, List[Dict]],
    generated_at: Optional[datetime] = None,
) -> bytes:
    generated_at = generated_at or datetime.utcnow()
    owner = profile.get("full_name") or profile.get("email") or "Unknown"
    doc = PdfDocument("QUIDZ Competence Portfolio", f"{owner}  |  created {generated_at:%d.%m.%Y}")

    if skills:
        by_category: Dict[str, List[Dict]] = {}
        for skill in skills:
            by_category.setdefault(skill.get("category") or "sonstiges", []).append(skill)
        for category in sorted(by_category):
            lines = []
            for skill in by_category[category]:
                status = SKILL_STATUS_LABELS.get(skill.get("status"), skill.get("status") or "")
                lines.append(f"- {skill.get('title')} [{status}]")
                if skill.get("description"):
                    lines.append(f"  {skill['description']}")
                if skill.get("competence_level"):
                    lines.append(f"  Level: {skill['competence_level']}")
            doc.section(f"Skills: {SKILL_CATEGORY_LABELS.get(category, category)}", lines)
    else:
        doc.section("Skills", ["No skills recorded yet."])

    if projects:
        for project in projects:
            category = PROJECT_CATEGORY_LABELS.get(project.get("category"), project.get("category") or "")
            lines = [f"Category: {category}"]
            if project.get("description"):
                lines.append(project["description"])
            if project.get("tags"):
                lines.append("Tags: " + ", ".join(project["tags"]))
            linked = project_skills.get(project["id"], [])
            if linked:
                lines.append("Skills: " + ", ".join(s["title"] for s in linked))
            if project.get("project_url"):
                lines.append(f"Link: {project['project_url']}")
            doc.section(f"Project: {project.get('title')}", lines, small=True)
    else:
        doc.section("Projects", ["No projects recorded yet."])

    return doc.render()
