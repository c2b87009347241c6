"""
Graph nodes for the IDP planning workflow.

Nodes are plain functions over the state; their tools are passed in by the
graph builder.
"""

from agents.idp_planning.nodes.extract_skills import extract_skills_node
from agents.idp_planning.nodes.generate_plans import generate_plans_node

__all__ = ["extract_skills_node", "generate_plans_node"]
