"""
Repository for SkillDevelopmentPlan entities (the plan store).

One plan per skill. Creation is compare-and-create on the unique skill_id
column; mark-as-read is a versioned read-modify-write so concurrent marks
on the same plan are merged rather than overwritten.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from config.settings import settings
from models.plan_info import PlanInfo
from models.skill import Skill
from models.skill_development_plan import PlanProgress, SkillDevelopmentPlan
from repositories.base_repository import BaseRepository
from tools.plan_generator import build_default_plan, find_matching_plan
from tools.progress_calculator import compute_progress, progress_status
from utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ITEM_TYPES = ("udemy", "youtube", "reading", "tasks")

PROGRESS_VALUES = [p.value for p in PlanProgress]


def validate_plan_info(plan_info: Any) -> Dict[str, Any]:
    """
    Validate plan content from an untrusted caller.

    Raises:
        ValidationError: missing resources, empty titles or no tasks
    """
    if not plan_info:
        raise ValidationError("plan_info is required")
    try:
        return PlanInfo.model_validate(plan_info).to_json()
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid plan_info: {e}") from e


def apply_item_completion(
    plan_info: Mapping[str, Any],
    item_type: str,
    item_index: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Return a copy of plan_info with one item marked complete.

    Resources set their ``<type>Read`` flag; tasks append item_index to
    tasksRead unless already present. Marking twice is a no-op.

    Raises:
        ValidationError: unknown item_type, or a missing/out-of-range task index
    """
    if item_type not in ITEM_TYPES:
        raise ValidationError(f"item_type must be one of {', '.join(ITEM_TYPES)}, got '{item_type}'")

    updated = copy.deepcopy(dict(plan_info))

    if item_type != "tasks":
        updated[f"{item_type}Read"] = True
        return updated

    total = len(updated.get("tasks") or [])
    if isinstance(item_index, bool) or not isinstance(item_index, int) or not 0 <= item_index < total:
        raise ValidationError(f"item_index must be a task index in [0, {total}), got {item_index!r}")

    tasks_read = list(updated.get("tasksRead") or [])
    if item_index not in tasks_read:
        tasks_read.append(item_index)
    updated["tasksRead"] = tasks_read
    return updated


class DevelopmentPlanRepository(BaseRepository[SkillDevelopmentPlan]):
    """Repository for persisting and mutating development plans."""

    def __init__(self, db_session: Session, max_retries: Optional[int] = None):
        super().__init__(db_session, SkillDevelopmentPlan)
        self.max_retries = max_retries or settings.PLAN_UPDATE_MAX_RETRIES

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_by_skill(self, skill_id: str) -> Optional[SkillDevelopmentPlan]:
        statement = select(SkillDevelopmentPlan).where(SkillDevelopmentPlan.skill_id == skill_id)
        return self.db.exec(statement).first()

    def list_by_skill_ids(self, skill_ids: List[str]) -> List[SkillDevelopmentPlan]:
        if not skill_ids:
            return []
        statement = select(SkillDevelopmentPlan).where(SkillDevelopmentPlan.skill_id.in_(skill_ids))
        return list(self.db.exec(statement).all())

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def _insert(self, plan: SkillDevelopmentPlan) -> SkillDevelopmentPlan:
        """
        Insert a plan, turning a duplicate skill_id into ConflictError.
        """
        self.db.add(plan)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Plan already exists for skill {plan.skill_id}") from e
        self.db.refresh(plan)
        return plan

    def _insert_or_get_existing(self, plan: SkillDevelopmentPlan) -> SkillDevelopmentPlan:
        try:
            return self._insert(plan)
        except ConflictError:
            existing = self.get_by_skill(plan.skill_id)
            if existing is None:
                raise
            logger.info(f"Plan for skill {plan.skill_id} was created concurrently, returning {existing.id}")
            return existing

    def _get_skill(self, skill_id: str) -> Skill:
        skill = self.db.get(Skill, skill_id)
        if skill is None:
            raise NotFoundError("Skill", skill_id)
        return skill

    def get_or_create(self, skill_id: str) -> SkillDevelopmentPlan:
        """
        Existing plan for a skill, or a newly stored default plan.

        Repeated and concurrent calls observe the same plan id.

        Raises:
            NotFoundError: unknown skill
        """
        existing = self.get_by_skill(skill_id)
        if existing is not None:
            return existing

        skill = self._get_skill(skill_id)
        plan = SkillDevelopmentPlan(
            skill_id=skill.id,
            plan_info=build_default_plan(skill.type, skill.name),
        )
        logger.info(f"Creating default plan for skill {skill.id}")
        return self._insert_or_get_existing(plan)

    def batch_create(
        self,
        skills: List[Skill],
        generated_plans: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> List[SkillDevelopmentPlan]:
        """
        Store one plan per skill from a generator result.

        Plans are looked up by category and skill name with fuzzy matching;
        skills without a usable match get the default plan. Skills that
        already have a plan keep it.

        Args:
            skills: Persisted skills
            generated_plans: {category: {skill name: plan_info}}

        Returns:
            One plan per skill, in the order of ``skills``
        """
        generated_plans = generated_plans or {}
        plans_by_skill = {p.skill_id: p for p in self.list_by_skill_ids([s.id for s in skills])}

        new_plans = []
        for skill in skills:
            if skill.id in plans_by_skill:
                continue
            plan_info = find_matching_plan(generated_plans.get(skill.type), skill.name)
            if plan_info is None:
                plan_info = build_default_plan(skill.type, skill.name)
            plan = SkillDevelopmentPlan(skill_id=skill.id, plan_info=plan_info)
            new_plans.append(plan)
            plans_by_skill[skill.id] = plan

        if new_plans:
            self.db.add_all(new_plans)
            try:
                self.db.commit()
            except IntegrityError:
                # Another writer planned some of these skills; settle them one by one
                self.db.rollback()
                logger.info("Concurrent plan creation during batch save, retrying per skill")
                for plan in new_plans:
                    retry = SkillDevelopmentPlan(skill_id=plan.skill_id, plan_info=plan.plan_info)
                    plans_by_skill[plan.skill_id] = self._insert_or_get_existing(retry)
            else:
                for plan in new_plans:
                    self.db.refresh(plan)
            logger.info(f"Stored {len(new_plans)} development plan(s)")

        return [plans_by_skill[skill.id] for skill in skills]

    def create_plan(
        self,
        skill_id: Optional[str],
        plan_info: Optional[Dict[str, Any]],
        progress: str = PlanProgress.IN_PROGRESS.value,
    ) -> SkillDevelopmentPlan:
        """
        Explicit create from caller-supplied content.

        A skill that already has a plan gets that plan back unchanged.

        Raises:
            ValidationError: missing skill_id/plan_info, bad plan shape or progress
            NotFoundError: unknown skill
        """
        if not skill_id:
            raise ValidationError("skill_id is required")
        plan_info = validate_plan_info(plan_info)
        if progress not in PROGRESS_VALUES:
            raise ValidationError(f"progress must be one of {', '.join(PROGRESS_VALUES)}")

        existing = self.get_by_skill(skill_id)
        if existing is not None:
            return existing

        self._get_skill(skill_id)
        plan = SkillDevelopmentPlan(skill_id=skill_id, plan_info=plan_info, progress=progress)
        return self._insert_or_get_existing(plan)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def update_plan(
        self,
        plan_id: str,
        plan_info: Optional[Dict[str, Any]] = None,
        progress: Optional[str] = None,
    ) -> SkillDevelopmentPlan:
        """
        Partial update: only the supplied fields change.

        Raises:
            NotFoundError: unknown plan id
            ValidationError: bad plan shape or progress value
        """
        plan = self.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError("Plan", plan_id)

        if plan_info is not None:
            plan.plan_info = validate_plan_info(plan_info)
        if progress is not None:
            if progress not in PROGRESS_VALUES:
                raise ValidationError(f"progress must be one of {', '.join(PROGRESS_VALUES)}")
            plan.progress = progress

        if plan_info is None and progress is None:
            return plan

        plan.version = plan.version + 1
        return self.update(plan)

    def _read_state(self, plan_id: str) -> Tuple[int, Dict[str, Any], str]:
        """Fresh (version, plan_info, progress) snapshot from the database."""
        statement = (
            select(SkillDevelopmentPlan)
            .where(SkillDevelopmentPlan.id == plan_id)
            .execution_options(populate_existing=True)
        )
        plan = self.db.exec(statement).first()
        if plan is None:
            raise NotFoundError("Plan", plan_id)
        return plan.version, copy.deepcopy(plan.plan_info or {}), plan.progress

    def mark_item_complete(
        self,
        plan_id: str,
        item_type: str,
        item_index: Optional[int] = None,
    ) -> SkillDevelopmentPlan:
        """
        Mark one resource or task complete and refresh the cached progress.

        The write only succeeds against the version it read; on a lost race
        the plan is re-read and the single mutation re-applied.

        Raises:
            NotFoundError: unknown plan id
            ValidationError: unknown item_type or bad task index
            ConflictError: still losing races after max_retries attempts
        """
        for attempt in range(1, self.max_retries + 1):
            version, plan_info, cached_progress = self._read_state(plan_id)

            updated_info = apply_item_completion(plan_info, item_type, item_index)
            progress = progress_status(compute_progress(updated_info))

            if updated_info == plan_info and progress == cached_progress:
                return self.get_by_id(plan_id)

            statement = (
                update(SkillDevelopmentPlan)
                .where(SkillDevelopmentPlan.id == plan_id)
                .where(SkillDevelopmentPlan.version == version)
                .values(
                    plan_info=updated_info,
                    progress=progress,
                    version=version + 1,
                    updated_at=datetime.utcnow(),
                )
            )
            result = self.db.exec(statement)
            if result.rowcount == 1:
                self.db.commit()
                logger.info(f"Marked {item_type} complete on plan {plan_id} (progress: {progress})")
                return self.get_by_id(plan_id)

            self.db.rollback()
            logger.info(f"Plan {plan_id} changed concurrently, retrying mark ({attempt}/{self.max_retries})")

        raise ConflictError(f"Could not update plan {plan_id} after {self.max_retries} attempts")
