"""
Agents module containing the IDP planning graph.
"""

from .idp_planning import create_idp_planning_graph

__all__ = ["create_idp_planning_graph"]
