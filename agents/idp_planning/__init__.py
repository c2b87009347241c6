from agents.idp_planning.graph import create_idp_planning_graph
from agents.idp_planning.state import IDPPlanningState

__all__ = ["create_idp_planning_graph", "IDPPlanningState"]
