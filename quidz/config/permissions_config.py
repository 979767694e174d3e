"""
Roles and Permissions Configuration
Defines the permission matrix for every module and which app role holds which permission.
App roles live in the user_roles table (user | coach | admin); permissions are derived here,
not stored in the database.
"""

# Define modules and their actions
MODULES = {
    "profiles": {
        "resource": "profiles",
        "actions": ["read", "update", "list", "manage_roles"],
        "description": "Participant profiles and role assignment"
    },
    "tasks": {
        "resource": "tasks",
        "actions": ["create", "read", "update", "delete", "update_status"],
        "description": "Task assignment"
    },
    "absences": {
        "resource": "absences",
        "actions": ["create", "read", "approve"],
        "description": "Absence reporting and approval"
    },
    "documents": {
        "resource": "documents",
        "actions": ["create", "read", "delete"],
        "description": "Shared documents"
    },
    "projects": {
        "resource": "projects",
        "actions": ["create", "read", "update", "delete", "feature"],
        "description": "Portfolio projects"
    },
    "skills": {
        "resource": "skills",
        "actions": ["create", "read", "delete", "review"],
        "description": "Skill claims and validation"
    },
    "flashcards": {
        "resource": "flashcards",
        "actions": ["create", "read", "update", "delete", "curate"],
        "description": "Flashcards, categories and tags"
    },
    "badges": {
        "resource": "badges",
        "actions": ["read", "award"],
        "description": "Gamification badges"
    },
    "feedback": {
        "resource": "feedback",
        "actions": ["answer", "read", "manage"],
        "description": "Feedback questions, answers and mood"
    },
    "chat": {
        "resource": "chat",
        "actions": ["read", "write", "moderate"],
        "description": "Group chat"
    },
    "assistant": {
        "resource": "assistant",
        "actions": ["use", "configure"],
        "description": "AI assistant"
    },
    "events": {
        "resource": "events",
        "actions": ["read", "write"],
        "description": "Personal calendar"
    },
    "tools": {
        "resource": "tools",
        "actions": ["read", "create", "delete"],
        "description": "Curated tool links"
    },
    "reports": {
        "resource": "reports",
        "actions": ["create", "read", "update", "finalize"],
        "description": "Coach reports"
    },
    "progress": {
        "resource": "progress",
        "actions": ["read_own", "read_all"],
        "description": "Progress aggregation and dashboards"
    },
}

STAFF_ROLES = ("admin", "coach")

# Participant permissions; everything else is staff-only
PARTICIPANT_PERMISSIONS = [
    "profiles:read",
    "profiles:update",
    "tasks:read",
    "tasks:update_status",
    "absences:create",
    "absences:read",
    "documents:read",
    "projects:create",
    "projects:read",
    "projects:update",
    "projects:delete",
    "skills:create",
    "skills:read",
    "skills:delete",
    "flashcards:create",
    "flashcards:read",
    "flashcards:update",
    "flashcards:delete",
    "badges:read",
    "feedback:answer",
    "chat:read",
    "chat:write",
    "assistant:use",
    "events:read",
    "events:write",
    "tools:read",
    "progress:read_own",
]

# Permissions only admins hold; coaches get every other permission
ADMIN_ONLY_PERMISSIONS = [
    "profiles:manage_roles",
]


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the permissions held by each role
    Format: {
        "permissions": [
            {"name": "tasks:create", "resource": "tasks", "action": "create", "description": "..."},
            ...
        ],
        "roles": {
            "user": ["absences:create", ...],
            "coach": [...],
            "admin": [...]
        }
    }
    """
    permissions = []
    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": f"{action.replace('_', ' ').capitalize()} ({module_config['description']})"
            })

    all_names = [p["name"] for p in permissions]
    roles = {
        "user": sorted(PARTICIPANT_PERMISSIONS),
        "coach": sorted(n for n in all_names if n not in ADMIN_ONLY_PERMISSIONS),
        "admin": sorted(all_names),
    }
    return {
        "permissions": permissions,
        "roles": roles
    }


def permissions_for_roles(roles):
    """Union of permissions for a list of role names; unknown roles grant nothing."""
    granted = set(PERMISSION_MATRIX["roles"]["user"])
    for role in roles:
        granted.update(PERMISSION_MATRIX["roles"].get(role, []))
    return sorted(granted)


# Export the matrix for use by the dependency layer and /auth/me
PERMISSION_MATRIX = get_permission_matrix()
