"""Seed script to insert a small deterministic IDP dataset.

Creates an appraisal source `seed_source_1`, an IDP `seed_idp_1` with the
nine fallback skills, a default plan per skill and a few completed items,
so the overview and progress endpoints have something to show locally.

Usage:
  python scripts/seed_db.py [--dry-run] [--reset]
"""
import argparse
import sys
from pathlib import Path

# When running the script directly (e.g. `python scripts/seed_db.py`),
# ensure the repository root is on `sys.path` so local package imports
# like `config.settings` resolve correctly without setting `PYTHONPATH`.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlmodel import Session, select

from config.settings import settings
from models.appraisal_source import AppraisalSource
from models.idp import IDP
from models.skill import Skill
from models.skill_development_plan import SkillDevelopmentPlan
from repositories.development_plan_repository import DevelopmentPlanRepository
from repositories.skill_repository import SkillRepository
from tools.skill_extractor import fallback_skills
from utils.database import get_engine, init_db

DEFAULT_SOURCE_ID = "seed_source_1"
DEFAULT_IDP_ID = "seed_idp_1"

SHEET_URL = "https://docs.google.com/spreadsheets/d/1SeedAppraisalSheetExample/edit#gid=0"

# (category, skill position, item_type, item_index)
COMPLETED_ITEMS = [
    ("technical", 0, "udemy", None),
    ("technical", 0, "youtube", None),
    ("technical", 0, "tasks", 0),
    ("behavioral", 1, "reading", None),
]


def perform_reset(db: Session, source_id: str, idp_id: str) -> int:
    """Delete seeded plans, skills, IDP and appraisal source if present."""
    deleted = 0

    skill_ids = list(db.exec(select(Skill.id).where(Skill.idp_id == idp_id)).all())
    if skill_ids:
        res = db.exec(delete(SkillDevelopmentPlan).where(SkillDevelopmentPlan.skill_id.in_(skill_ids)))
        deleted += res.rowcount or 0

    res = db.exec(delete(Skill).where(Skill.idp_id == idp_id))
    deleted += res.rowcount or 0

    res = db.exec(delete(IDP).where(IDP.id == idp_id))
    deleted += res.rowcount or 0

    res = db.exec(delete(AppraisalSource).where(AppraisalSource.id == source_id))
    deleted += res.rowcount or 0

    db.commit()
    return deleted


def seed(dry_run: bool = False, reset_flag: bool = False) -> bool:
    if not settings.DATABASE_URL:
        print("ERROR: DATABASE_URL not set in environment/.env", file=sys.stderr)
        return False

    skills = fallback_skills()

    if dry_run:
        print("DRY RUN: would seed the following:")
        print(f" AppraisalSource: id={DEFAULT_SOURCE_ID}, sheet_url={SHEET_URL}")
        print(f" IDP: id={DEFAULT_IDP_ID}, name=Seed Review")
        print(f" Skills: {sum(len(v) for v in skills.values())} with default plans")
        print(f" Completed items: {len(COMPLETED_ITEMS)}")
        return True

    engine = get_engine()
    # ensure tables exist for local/dev seeding
    init_db(engine)

    try:
        with Session(engine) as db:
            if reset_flag:
                deleted = perform_reset(db, DEFAULT_SOURCE_ID, DEFAULT_IDP_ID)
                print(f"Reset removed {deleted} rows")

            if db.get(IDP, DEFAULT_IDP_ID) is not None:
                print(f"IDP {DEFAULT_IDP_ID} already seeded; use --reset to recreate it")
                return True

            if db.get(AppraisalSource, DEFAULT_SOURCE_ID) is None:
                db.add(AppraisalSource(
                    id=DEFAULT_SOURCE_ID,
                    employee_id="seed_employee_1",
                    manager_id="seed_manager_1",
                    sheet_url=SHEET_URL,
                ))
                db.commit()

            db.add(IDP(
                id=DEFAULT_IDP_ID,
                name="Seed Review",
                appraisal_source_id=DEFAULT_SOURCE_ID,
                status="in_progress",
                created_by="seed_manager_1",
            ))
            db.commit()

            created_skills = SkillRepository(db).create_batch(DEFAULT_IDP_ID, skills)
            plan_repo = DevelopmentPlanRepository(db)
            plans = plan_repo.batch_create(created_skills)

            plans_by_skill = {p.skill_id: p for p in plans}
            for category, position, item_type, item_index in COMPLETED_ITEMS:
                skill = [s for s in created_skills if s.type == category][position]
                plan_repo.mark_item_complete(plans_by_skill[skill.id].id, item_type, item_index)

        print(f"Seeded appraisal_source={DEFAULT_SOURCE_ID}, idp={DEFAULT_IDP_ID}, skills={len(created_skills)}")
        return True
    except Exception as exc:
        print(f"ERROR: seeding failed: {exc}", file=sys.stderr)
        return False


def _cli():
    parser = argparse.ArgumentParser(description="Seed the local database with an example IDP")
    parser.add_argument("--dry-run", action="store_true", help="Print actions without writing to DB")
    parser.add_argument("--reset", action="store_true", help="Remove existing seeded rows before seeding")
    args = parser.parse_args()

    ok = seed(dry_run=args.dry_run, reset_flag=args.reset)
    sys.exit(0 if ok else 2)


if __name__ == '__main__':
    _cli()
