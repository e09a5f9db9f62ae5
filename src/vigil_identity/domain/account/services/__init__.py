from vigil_identity.domain.account.services.role_resolver import RoleResolver

__all__ = ["RoleResolver"]
