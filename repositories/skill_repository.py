"""
Repository for Skill entities.

Skills are written in a batch per IDP cycle and only ever deleted
while they have no development plan.
"""
from typing import Dict, List

from sqlmodel import Session, select

from models.skill import SKILL_TYPES, Skill
from repositories.base_repository import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    """Repository for persisting and querying Skill records."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Skill)

    def get_by_idp(self, idp_id: str) -> List[Skill]:
        statement = (
            select(Skill)
            .where(Skill.idp_id == idp_id)
            .order_by(Skill.created_at, Skill.name)
        )
        return list(self.db.exec(statement).all())

    def create_batch(self, idp_id: str, skills: Dict[str, List[str]]) -> List[Skill]:
        """
        Insert one Skill row per name.

        Args:
            idp_id: Owning IDP
            skills: {"technical": [...], "functional": [...], "behavioral": [...]};
                unknown categories are ignored

        Returns:
            Created skills in category order, then input order
        """
        rows = [
            Skill(idp_id=idp_id, name=name, type=category)
            for category in SKILL_TYPES
            for name in skills.get(category) or []
        ]
        if not rows:
            return []
        return self.create_many(rows)
