"""
Services module - Business Logic Layer.

Sits between the API layer (routes) and the data layer (repositories):
- Business rule validation
- Orchestrating multiple repository operations
- Coordinating with the text-generation collaborator (via tools and agents)

Usage:
    from services import IDPService

    service = IDPService(db_session)
    plan = service.mark_item_complete(skill_id, "tasks", 0)
"""

from services.idp_service import IDPService

__all__ = ["IDPService"]
