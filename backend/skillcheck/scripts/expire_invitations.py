"""
Expire invitations that were never started within INVITATION_EXPIRY_DAYS.

Usage (from the repo root with DATABASE_URL set):
  python -m skillcheck.scripts.expire_invitations
  python -m skillcheck.scripts.expire_invitations --dry-run

Meant for a daily cron. Candidates who already started are never touched.
"""
from __future__ import annotations

import argparse
import sys

from skillcheck.components.assessments.lifecycle import expire_stale_invitations
from skillcheck.platform.config import settings
from skillcheck.platform.database import SessionLocal
from skillcheck.platform.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Expire stale candidate invitations")
    parser.add_argument("--dry-run", action="store_true", help="List stale invitations without changing them")
    args = parser.parse_args(argv)

    if settings.INVITATION_EXPIRY_DAYS <= 0:
        print("INVITATION_EXPIRY_DAYS is 0; invitation expiry is disabled.")
        return 0

    db = SessionLocal()
    try:
        ids = expire_stale_invitations(db, dry_run=args.dry_run)
    except Exception as exc:
        print(f"Failed to expire invitations: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()

    verb = "Would expire" if args.dry_run else "Expired"
    print(f"{verb} {len(ids)} invitation(s) older than {settings.INVITATION_EXPIRY_DAYS} day(s).")
    if ids:
        print("candidate_assessment ids:", ", ".join(str(i) for i in ids))
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
