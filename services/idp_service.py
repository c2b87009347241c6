"""
IDP service: the skill-development plan lifecycle.

Orchestrates appraisal import, skill extraction, plan generation,
plan persistence and progress rollups on top of the repositories.
Routes call this service; they never touch repositories directly.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlmodel import Session

from agents.idp_planning import create_idp_planning_graph
from models.appraisal_source import AppraisalSource
from models.idp import IDP, IDPStatus
from models.skill import SKILL_TYPES, Skill
from models.skill_development_plan import PlanProgress, SkillDevelopmentPlan
from repositories.appraisal_source_repository import AppraisalSourceRepository
from repositories.development_plan_repository import DevelopmentPlanRepository, apply_item_completion
from repositories.idp_repository import IDPRepository
from repositories.skill_repository import SkillRepository
from tools import progress_calculator
from tools.plan_generator import PlanGenerator, build_default_plan
from tools.skill_extractor import SkillExtractor
from utils.exceptions import NotFoundError, ValidationError
from utils.sheet_fetcher import SheetFetcher

logger = logging.getLogger(__name__)


def validate_skill_set(skills: Any) -> Dict[str, List[str]]:
    """
    Normalize a caller-supplied {category: [names]} mapping.

    Raises:
        ValidationError: unknown category, non-text or empty names, or no skills at all
    """
    if not isinstance(skills, dict):
        raise ValidationError("skills must be an object keyed by category")

    unknown = set(skills) - set(SKILL_TYPES)
    if unknown:
        raise ValidationError(f"Unknown skill categories: {', '.join(sorted(unknown))}")

    normalized = {}
    for category in SKILL_TYPES:
        names = skills.get(category) or []
        if not isinstance(names, list) or not all(isinstance(n, str) and n.strip() for n in names):
            raise ValidationError(f"'{category}' must be a list of non-empty skill names")
        normalized[category] = [n.strip() for n in names]

    if not any(normalized.values()):
        raise ValidationError("At least one skill is required")

    return normalized


class IDPService:
    """
    Public IDP service.

    The extractor and generator are created on first use so plan tracking
    works without a configured text-generation provider.
    """

    def __init__(
        self,
        db: Session,
        skill_extractor: Optional[SkillExtractor] = None,
        plan_generator: Optional[PlanGenerator] = None,
        sheet_fetcher: Optional[SheetFetcher] = None,
    ):
        self.db = db
        self.appraisal_repo = AppraisalSourceRepository(db)
        self.idp_repo = IDPRepository(db)
        self.skill_repo = SkillRepository(db)
        self.plan_repo = DevelopmentPlanRepository(db)

        self._skill_extractor = skill_extractor
        self._plan_generator = plan_generator
        self._sheet_fetcher = sheet_fetcher

    @property
    def skill_extractor(self) -> SkillExtractor:
        if self._skill_extractor is None:
            self._skill_extractor = SkillExtractor()
        return self._skill_extractor

    @property
    def plan_generator(self) -> PlanGenerator:
        if self._plan_generator is None:
            self._plan_generator = PlanGenerator()
        return self._plan_generator

    @property
    def sheet_fetcher(self) -> SheetFetcher:
        if self._sheet_fetcher is None:
            self._sheet_fetcher = SheetFetcher()
        return self._sheet_fetcher

    # -------------------------
    # Lookups
    # -------------------------

    def _get_idp(self, idp_id: str) -> IDP:
        idp = self.idp_repo.get_by_id(idp_id)
        if idp is None:
            raise NotFoundError("IDP", idp_id)
        return idp

    def _get_skill(self, skill_id: str) -> Skill:
        skill = self.skill_repo.get_by_id(skill_id)
        if skill is None:
            raise NotFoundError("Skill", skill_id)
        return skill

    def _get_appraisal_source(self, source_id: str) -> AppraisalSource:
        source = self.appraisal_repo.get_by_id(source_id)
        if source is None:
            raise NotFoundError("Appraisal source", source_id)
        return source

    # -------------------------
    # Appraisal sources
    # -------------------------

    def import_appraisal_source(self, employee_id: str, manager_id: str, sheet_url: str) -> AppraisalSource:
        for field, value in (("employee_id", employee_id), ("manager_id", manager_id), ("sheet_url", sheet_url)):
            if not value or not value.strip():
                raise ValidationError(f"{field} is required")

        source = self.appraisal_repo.create(AppraisalSource(
            employee_id=employee_id.strip(),
            manager_id=manager_id.strip(),
            sheet_url=sheet_url.strip(),
        ))
        logger.info(f"Imported appraisal source {source.id} for employee {source.employee_id}")
        return source

    def list_appraisal_sources(
        self,
        employee_id: Optional[str] = None,
        manager_id: Optional[str] = None,
    ) -> List[AppraisalSource]:
        return self.appraisal_repo.list_sources(employee_id=employee_id, manager_id=manager_id)

    def analyze_appraisal_source(self, source_id: str) -> Dict[str, Any]:
        """
        Download an appraisal sheet and extract skills from it.

        An unreachable sheet still yields skills (the fallback set).

        Returns:
            {"appraisal_source_id": str, "skills": {category: [names]}}
        """
        source = self._get_appraisal_source(source_id)
        appraisal_text = self.sheet_fetcher.fetch_text(source.sheet_url)
        return {
            "appraisal_source_id": source.id,
            "skills": self.extract_skills(appraisal_text),
        }

    # -------------------------
    # Generation (no persistence)
    # -------------------------

    def extract_skills(self, appraisal_text: str) -> Dict[str, List[str]]:
        return self.skill_extractor.extract_skills(appraisal_text)

    def generate_plans(self, categorized_skills: Dict[str, List[str]]) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return self.plan_generator.generate_plans(validate_skill_set(categorized_skills))

    def plan_from_appraisal_text(self, appraisal_text: str) -> Dict[str, Any]:
        """
        Extract skills and generate their plans in one graph run.

        Returns:
            {"skills": {category: [names]}, "plans": {category: {name: plan_info}}}
        """
        graph = create_idp_planning_graph(self.skill_extractor, self.plan_generator)
        result = graph.invoke({"appraisal_text": appraisal_text or ""})
        return {"skills": result["skills"], "plans": result["plans"]}

    # -------------------------
    # IDPs
    # -------------------------

    def create_idp(
        self,
        appraisal_source_id: str,
        name: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> IDP:
        """New IDP in status "initial", named after the current month by default."""
        self._get_appraisal_source(appraisal_source_id)
        idp = self.idp_repo.create(IDP(
            name=(name or "").strip() or datetime.utcnow().strftime("%B %Y"),
            appraisal_source_id=appraisal_source_id,
            status=IDPStatus.INITIAL.value,
            created_by=created_by,
            updated_by=created_by,
        ))
        logger.info(f"Created IDP {idp.id} ({idp.name})")
        return idp

    def list_idps(self, appraisal_source_id: Optional[str] = None) -> List[IDP]:
        return self.idp_repo.list_idps(appraisal_source_id=appraisal_source_id)

    def save_skills_and_plans(
        self,
        idp_id: str,
        skills: Dict[str, List[str]],
        plans: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None,
    ) -> Dict[str, Any]:
        """
        Persist a skill batch for an IDP together with one plan per skill.

        Args:
            idp_id: Owning IDP
            skills: {category: [names]}
            plans: Previously generated plans; generated now when omitted

        Returns:
            {"idp": IDP, "skills": [Skill], "plans": [SkillDevelopmentPlan]}
        """
        idp = self._get_idp(idp_id)
        skills = validate_skill_set(skills)

        if plans is None:
            plans = self.plan_generator.generate_plans(skills)

        created_skills = self.skill_repo.create_batch(idp.id, skills)
        created_plans = self.plan_repo.batch_create(created_skills, plans)
        logger.info(f"Saved {len(created_skills)} skills with plans for IDP {idp.id}")

        idp = self._refresh_idp_status(idp)
        return {"idp": idp, "skills": created_skills, "plans": created_plans}

    def _refresh_idp_status(self, idp: IDP) -> IDP:
        """in_progress once plans exist; completed when every skill is at 100%."""
        skills = self.skill_repo.get_by_idp(idp.id)
        if not skills:
            return idp

        plan_infos = self._plan_infos_by_skill_id(self.plan_repo.list_by_skill_ids([s.id for s in skills]))
        all_done = all(progress_calculator.compute_progress(plan_infos.get(s.id)) == 100 for s in skills)
        status = IDPStatus.COMPLETED.value if all_done else IDPStatus.IN_PROGRESS.value

        if status != idp.status:
            logger.info(f"IDP {idp.id} status {idp.status} -> {status}")
        return self.idp_repo.update_status(idp, status)

    def get_idp_overview(self, idp_id: str) -> Dict[str, Any]:
        """
        IDP with its skills grouped by category and progress rolled up.

        Skills without a plan are listed with plan None and count as 0.

        Returns:
            {
                "idp": IDP,
                "progress": int,
                "categories": {
                    "technical": {"progress": int, "skills": [{"skill", "plan", "progress"}]},
                    ...
                }
            }
        """
        idp = self._get_idp(idp_id)
        skills = self.skill_repo.get_by_idp(idp.id)
        plans = {p.skill_id: p for p in self.plan_repo.list_by_skill_ids([s.id for s in skills])}
        rollup = progress_calculator.compute_idp_progress(skills, self._plan_infos_by_skill_id(plans.values()))

        categories = {}
        for category in SKILL_TYPES:
            categories[category] = {
                "progress": rollup["categories"][category],
                "skills": [
                    {"skill": s, "plan": plans.get(s.id), "progress": rollup["skills"][s.id]}
                    for s in skills if s.type == category
                ],
            }

        return {"idp": idp, "progress": rollup["overall"], "categories": categories}

    # -------------------------
    # Plans
    # -------------------------

    def get_or_create_plan(self, skill_id: str) -> SkillDevelopmentPlan:
        return self.plan_repo.get_or_create(skill_id)

    def get_or_create_plans_for_idp(self, idp_id: str) -> List[SkillDevelopmentPlan]:
        """One plan per skill of the IDP, creating default plans for unplanned skills."""
        idp = self._get_idp(idp_id)
        skills = self.skill_repo.get_by_idp(idp.id)
        existing = {p.skill_id: p for p in self.plan_repo.list_by_skill_ids([s.id for s in skills])}
        return [existing.get(s.id) or self.plan_repo.get_or_create(s.id) for s in skills]

    def create_plan(
        self,
        skill_id: Optional[str],
        plan_info: Optional[Dict[str, Any]],
        progress: str = PlanProgress.IN_PROGRESS.value,
    ) -> SkillDevelopmentPlan:
        return self.plan_repo.create_plan(skill_id, plan_info, progress)

    def update_plan(
        self,
        plan_id: str,
        plan_info: Optional[Dict[str, Any]] = None,
        progress: Optional[str] = None,
    ) -> SkillDevelopmentPlan:
        return self.plan_repo.update_plan(plan_id, plan_info=plan_info, progress=progress)

    def mark_item_complete(
        self,
        skill_id: str,
        item_type: str,
        item_index: Optional[int] = None,
    ) -> SkillDevelopmentPlan:
        """
        Mark one resource or task of a skill's plan complete.

        Creates the default plan first if the skill has none, then refreshes
        the owning IDP's status.
        """
        skill = self._get_skill(skill_id)
        plan = self.plan_repo.get_by_skill(skill.id)
        if plan is None:
            # Reject a bad mark before a default plan is created for it
            apply_item_completion(build_default_plan(skill.type, skill.name), item_type, item_index)
            plan = self.plan_repo.get_or_create(skill.id)
        plan = self.plan_repo.mark_item_complete(plan.id, item_type, item_index)

        idp = self.idp_repo.get_by_id(skill.idp_id)
        if idp is not None:
            self._refresh_idp_status(idp)
        return plan

    # -------------------------
    # Progress
    # -------------------------

    @staticmethod
    def _plan_infos_by_skill_id(plans: Iterable[SkillDevelopmentPlan]) -> Dict[str, Dict[str, Any]]:
        return {p.skill_id: p.plan_info for p in plans}

    def compute_progress(self, plan: Optional[SkillDevelopmentPlan]) -> int:
        return progress_calculator.compute_progress(plan.plan_info if plan is not None else None)

    def compute_category_progress(
        self,
        skills: List[Skill],
        plans: Iterable[SkillDevelopmentPlan],
    ) -> int:
        return progress_calculator.compute_category_progress(skills, self._plan_infos_by_skill_id(plans))

    # -------------------------
    # Skills
    # -------------------------

    def delete_skill(self, skill_id: str) -> None:
        """
        Delete a skill that has no development plan yet.

        Raises:
            NotFoundError: unknown skill
            ValidationError: the skill already has a plan
        """
        skill = self._get_skill(skill_id)
        if self.plan_repo.get_by_skill(skill.id) is not None:
            raise ValidationError(f"Skill {skill.id} already has a development plan and cannot be deleted")
        self.skill_repo.delete(skill)
        logger.info(f"Deleted skill {skill_id}")
