"""
Access Resolver
===============

Computes which CRM users can view a record, mirroring the CRM's own
record-level visibility rules without calling its permission API.

Decision flow for one (module, record) pair:
1. Locate the record by local id, then by CRM id
2. Derive the record's owner and organization
3. Read the organization's sharing rule for the module
4. public / public_read_only: every active user whose profile enables
   the module
5. private: the owner plus every user at the owner's role level or above
   whose profile enables the module

The resolver holds no state between calls; every decision is a function of
the directory snapshot it reads.
"""

from typing import Dict, Iterable, List, Optional

from crm_access.core.enums import ModuleName, ShareType
from crm_access.core.exceptions import (
    OrganizationUndeterminedError,
    RecordNotFoundError,
    SharingRuleNotFoundError,
    UnsupportedModuleError,
    UnsupportedShareTypeError,
)
from crm_access.core.logging import LogContext, get_logger, log_execution_time
from crm_access.directory.store import DirectoryStore
from crm_access.records import CrmRecord, extract_ownership
from crm_access.schemas.permissions import (
    HierarchyNode,
    PermissionSummary,
    ProfileAccessSummary,
    ResolutionResult,
)
from crm_access.services.permission_evaluator import has_module_access, profile_grants_module
from crm_access.services.role_hierarchy import build_role_hierarchy, roles_at_or_above

logger = get_logger(__name__)

HierarchyCache = Dict[str, Dict[str, HierarchyNode]]


class AccessResolver:
    """
    Record visibility resolver.

    Usage:
        resolver = AccessResolver(SqlDirectoryStore(db))
        result = resolver.resolve("Contacts", record_id)
    """

    def __init__(self, store: DirectoryStore):
        """
        Initialize the resolver.

        Args:
            store: Directory store to read from
        """
        self.store = store

    # =====================================
    # Public API
    # =====================================

    @log_execution_time(logger, "resolve_access")
    def resolve(self, module_name: str, record_id: str) -> ResolutionResult:
        """
        Resolve who can view a record.

        Args:
            module_name: CRM module API name, e.g. "Contacts"
            record_id: Local record id or CRM record id

        Returns:
            ResolutionResult with the permitted CRM user ids

        Raises:
            UnsupportedModuleError: If the module has no record variant
            RecordNotFoundError: If the record exists in neither id space
            OrganizationUndeterminedError: If the record's organization is unknown
            SharingRuleNotFoundError: If the organization has no rule for the module
            UnsupportedShareTypeError: If the rule's share type is not recognized
        """
        return self._resolve(module_name, record_id, hierarchy_cache={})

    def resolve_many(self, module_name: str, record_ids: Iterable[str]) -> Dict[str, ResolutionResult]:
        """
        Resolve several records of one module.

        Each organization's role hierarchy is built once and reused for
        every record of that organization in the batch.

        Returns:
            Mapping of requested record id to its result, in request order
        """
        hierarchy_cache: HierarchyCache = {}
        results: Dict[str, ResolutionResult] = {}
        for record_id in record_ids:
            if record_id in results:
                continue
            results[record_id] = self._resolve(module_name, record_id, hierarchy_cache)
        return results

    def permission_summary(self, organization_id: str, module_name: str) -> PermissionSummary:
        """
        Collect the inputs of a module's access decisions for one organization.

        Unlike `resolve`, a missing sharing rule is reported as `None`
        rather than raised, since the summary is used to diagnose setup.
        """
        profiles = [
            ProfileAccessSummary(
                id=profile.id,
                display_label=profile.display_label,
                permissions=[p for p in profile.permissions if p.module == module_name],
            )
            for profile in self.store.list_profiles(organization_id)
            if profile_grants_module(profile, module_name)
        ]

        hierarchy = build_role_hierarchy(self.store.list_roles(organization_id))

        return PermissionSummary(
            organization_id=organization_id,
            module_name=module_name,
            sharing_rule=self.store.get_sharing_rule(organization_id, module_name),
            profiles_with_module_access=profiles,
            role_hierarchy=list(hierarchy.values()),
        )

    # =====================================
    # Resolution Steps
    # =====================================

    def _resolve(self, module_name: str, record_id: str, hierarchy_cache: HierarchyCache) -> ResolutionResult:
        module = self._module(module_name)
        record = self._find_record(module, record_id)
        ownership = extract_ownership(record, self.store)

        logger.info(
            "checking_permissions",
            module=module.value,
            record_id=record_id,
            owner_id=ownership.owner_external_id,
        )

        if not ownership.organization_id:
            raise OrganizationUndeterminedError(module.value, record_id)

        with LogContext(organization_id=ownership.organization_id):
            rule = self.store.get_sharing_rule(ownership.organization_id, module.value)
            if rule is None:
                raise SharingRuleNotFoundError(module.value, ownership.organization_id)

            logger.info("sharing_rule_loaded", module=module.value, share_type=rule.share_type)

            if rule.share_type in (ShareType.PUBLIC.value, ShareType.PUBLIC_READ_ONLY.value):
                return self._public_access(ownership.organization_id, module.value, ShareType(rule.share_type))
            if rule.share_type == ShareType.PRIVATE.value:
                return self._private_access(
                    ownership.organization_id,
                    module.value,
                    ownership.owner_external_id,
                    hierarchy_cache,
                )
            raise UnsupportedShareTypeError(rule.share_type, module.value)

    def _module(self, module_name: str) -> ModuleName:
        try:
            return ModuleName(module_name)
        except ValueError:
            raise UnsupportedModuleError(module_name) from None

    def _find_record(self, module: ModuleName, record_id: str) -> CrmRecord:
        record = self.store.find_record_by_primary_id(module, record_id)
        if record is None:
            record = self.store.find_record_by_external_id(module, record_id)
        if record is None:
            raise RecordNotFoundError(module.value, record_id)
        return record

    def _public_access(self, organization_id: str, module_name: str, share_type: ShareType) -> ResolutionResult:
        user_ids = [
            user.external_id
            for user in self.store.list_active_users(organization_id)
            if user.external_id and has_module_access(user, module_name, self.store)
        ]
        return ResolutionResult(user_ids=user_ids, access_type=share_type, hierarchy_used=False)

    def _private_access(
        self,
        organization_id: str,
        module_name: str,
        owner_external_id: Optional[str],
        hierarchy_cache: HierarchyCache,
    ) -> ResolutionResult:
        denied = ResolutionResult(user_ids=[], access_type=ShareType.PRIVATE, hierarchy_used=False)

        if not owner_external_id:
            logger.warning("private_record_without_owner", module=module_name)
            return denied

        owner = self.store.find_user_by_external_id(owner_external_id)
        if owner is None:
            logger.warning("owner_not_found", owner_id=owner_external_id)
            return denied

        # The owner's own access caps everyone else's.
        if not has_module_access(owner, module_name, self.store):
            logger.warning("owner_lacks_module_access", owner_id=owner_external_id, module=module_name)
            return denied

        if not owner.role_id:
            logger.info("owner_without_role", owner_id=owner_external_id)
            return ResolutionResult(
                user_ids=[owner_external_id],
                access_type=ShareType.PRIVATE,
                hierarchy_used=False,
            )

        hierarchy = hierarchy_cache.get(organization_id)
        if hierarchy is None:
            hierarchy = build_role_hierarchy(self.store.list_roles(organization_id))
            hierarchy_cache[organization_id] = hierarchy

        user_ids: List[str] = [owner_external_id]
        for role_id in roles_at_or_above(hierarchy, owner.role_id):
            for user in self.store.list_users_in_role(organization_id, role_id):
                if user.external_id and has_module_access(user, module_name, self.store):
                    user_ids.append(user.external_id)

        return ResolutionResult(
            user_ids=user_ids,
            access_type=ShareType.PRIVATE,
            hierarchy_used=True,
        )
