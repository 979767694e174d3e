"""
Grant or revoke an app role
Bootstraps the first admin (or fixes a role by hand) for a profile looked up by e-mail.
Uses the service-role client, so it bypasses row-level security.

    python -m quidz.scripts.grant_role someone@example.org admin
    python -m quidz.scripts.grant_role someone@example.org coach --revoke
"""

import argparse
import sys
import logging

from quidz.config.permissions_config import STAFF_ROLES
from quidz.database.supabase_client import get_service_supabase, rows
from supabase import Client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def find_profile_id(supabase: Client, email: str):
    result = supabase.table("profiles")\
        .select("id")\
        .eq("email", email.strip().lower())\
        .execute()
    found = rows(result)
    return found[0]["id"] if found else None


def grant(supabase: Client, user_id: str, role: str) -> bool:
    """Returns False when the role was already assigned"""
    existing = supabase.table("user_roles")\
        .select("id")\
        .eq("user_id", user_id)\
        .eq("role", role)\
        .execute()
    if rows(existing):
        return False
    supabase.table("user_roles").insert({"user_id": user_id, "role": role}).execute()
    return True


def revoke(supabase: Client, user_id: str, role: str) -> bool:
    result = supabase.table("user_roles")\
        .delete()\
        .eq("user_id", user_id)\
        .eq("role", role)\
        .execute()
    return len(rows(result)) > 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grant or revoke an app role by e-mail")
    parser.add_argument("email")
    parser.add_argument("role", choices=STAFF_ROLES)
    parser.add_argument("--revoke", action="store_true", help="remove the role instead of granting it")
    args = parser.parse_args(argv)

    try:
        supabase = get_service_supabase()
        user_id = find_profile_id(supabase, args.email)
        if not user_id:
            logger.error(f"No profile with e-mail {args.email}")
            sys.exit(1)

        if args.revoke:
            changed = revoke(supabase, user_id, args.role)
            logger.info(f"Revoked {args.role} from {args.email}" if changed else f"{args.email} did not have {args.role}")
        else:
            changed = grant(supabase, user_id, args.role)
            logger.info(f"Granted {args.role} to {args.email}" if changed else f"{args.email} already has {args.role}")
    except Exception as e:
        logger.error(f"Error changing role: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
