from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

PlanInfoDict = Dict[str, Any]
CategorizedPlans = Dict[str, Dict[str, PlanInfoDict]]


class CategorizedSkills(BaseModel):
    """Skill names grouped by category"""
    model_config = ConfigDict(extra="forbid")

    technical: List[str] = Field(default_factory=list)
    functional: List[str] = Field(default_factory=list)
    behavioral: List[str] = Field(default_factory=list)


SKILLS_EXAMPLE = {
    "technical": [
        "Deep understanding on Data Analysis",
        "Basic Programming in Python programming",
        "Use machine learning for image recognition",
    ],
    "functional": [
        "Lead cross-functional teams with effective Project Management",
        "Develop comprehensive Strategic Planning for long-term goals",
        "Build strong relationships through Stakeholder Management",
    ],
    "behavioral": [
        "Inspire and motivate teams through effective Leadership",
        "Communicate clearly and persuasively across all audiences",
        "Foster collaborative environment for Team Collaboration",
    ],
}

PLAN_INFO_EXAMPLE = {
    "udemy": {"title": "Python for Data Analysis", "duration": "12 hours", "link": "https://udemy.com"},
    "youtube": {"title": "Pandas Tutorial for Beginners", "link": "https://youtube.com"},
    "reading": {"title": "Effective Pandas", "link": "https://docs.example.com"},
    "tasks": [
        "Clean and analyze last quarter's sales export",
        "Build a weekly KPI notebook for the team",
        "Present one data-driven recommendation",
    ],
}


class ExtractSkillsRequest(BaseModel):
    """Schema for extracting skills from raw appraisal content"""
    appraisal_text: str = Field(default="", description="Appraisal sheet content (CSV or free text)")

    class Config:
        json_schema_extra = {
            "example": {
                "appraisal_text": "Competency,Rating,Feedback\nData analysis,2,Needs stronger SQL and pandas skills"
            }
        }


class ExtractSkillsResponse(BaseModel):
    """Three skills per category"""
    skills: CategorizedSkills

    class Config:
        json_schema_extra = {"example": {"skills": SKILLS_EXAMPLE}}


class GeneratePlansRequest(BaseModel):
    """Schema for generating plans for a skill set"""
    skills: CategorizedSkills

    class Config:
        json_schema_extra = {"example": {"skills": SKILLS_EXAMPLE}}


class GeneratePlansResponse(BaseModel):
    """One plan per requested skill, keyed by category and skill name"""
    plans: CategorizedPlans

    class Config:
        json_schema_extra = {
            "example": {
                "plans": {"technical": {"Deep understanding on Data Analysis": PLAN_INFO_EXAMPLE}}
            }
        }


class PlanningRunRequest(BaseModel):
    """Schema for extracting skills and generating plans in one run"""
    appraisal_text: str = Field(default="", description="Appraisal sheet content (CSV or free text)")


class PlanningRunResponse(BaseModel):
    skills: CategorizedSkills
    plans: CategorizedPlans
