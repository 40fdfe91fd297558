"""Resource registry service."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from access_core.models.resource import Resource
from access_core.schemas.resource import ResourceCreate, ResourceUpdate
from access_core.services.search import contains_pattern


class ResourceServiceError(Exception):
    """Base class for resource service errors."""


class ResourceNotFoundError(ResourceServiceError):
    """Raised when a resource cannot be found."""


class ResourceConflictError(ResourceServiceError):
    """Raised when a resource name or slug is already taken."""


class ResourceService:
    """CRUD over the catalog of protected entity types."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._logger = logging.getLogger("access_core.services.resources")

    def list_resources(self, *, search: Optional[str] = None) -> List[Resource]:
        stmt = select(Resource)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    Resource.name.ilike(pattern, escape="\\"),
                    Resource.slug.ilike(pattern, escape="\\"),
                    Resource.description.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(Resource.created_at.desc())
        return list(self._session.scalars(stmt))

    def create_resource(self, payload: ResourceCreate) -> Resource:
        resource = Resource(name=payload.name, slug=payload.slug, description=payload.description)
        self._session.add(resource)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise ResourceConflictError(
                f"Resource with name '{payload.name}' or slug '{payload.slug}' already exists"
            ) from exc

        self._logger.info("resource_created", extra={"resource_id": str(resource.id), "slug": resource.slug})
        return resource

    def get_resource(self, resource_id: UUID) -> Resource:
        resource = self._session.get(Resource, resource_id)
        if not resource:
            raise ResourceNotFoundError(f"Resource {resource_id} not found")
        return resource

    def update_resource(self, resource_id: UUID, payload: ResourceUpdate) -> Resource:
        resource = self.get_resource(resource_id)
        updates = payload.model_dump(exclude_unset=True)
        for field in ("name", "slug", "description"):
            if field in updates:
                setattr(resource, field, updates[field])

        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise ResourceConflictError("Resource name or slug already exists") from exc

        self._logger.info(
            "resource_updated",
            extra={"resource_id": str(resource.id), "fields": sorted(updates)},
        )
        return resource

    def delete_resource(self, resource_id: UUID) -> Resource:
        """Hard-delete a resource. Grants that reference it are left dangling."""

        resource = self.get_resource(resource_id)
        self._session.delete(resource)
        self._session.flush()

        self._logger.info("resource_deleted", extra={"resource_id": str(resource_id), "slug": resource.slug})
        return resource

    def ensure_baseline_resources(self, slugs: Iterable[str]) -> None:
        """Idempotently register the given resource slugs."""

        slugs = list(dict.fromkeys(slugs))
        if not slugs:
            return

        existing = self._session.execute(select(Resource.slug, Resource.name)).all()
        taken_slugs = {slug for slug, _ in existing}
        taken_names = {name for _, name in existing}
        for slug in slugs:
            if slug in taken_slugs:
                continue
            name = slug.replace("-", " ").replace("_", " ").title()
            if name in taken_names:
                self._logger.warning("baseline_resource_name_taken", extra={"slug": slug, "resource_name": name})
                continue
            self._session.add(Resource(name=name, slug=slug, description=f"Access to {name.lower()} records"))
            taken_names.add(name)
            self._logger.info("baseline_resource_registered", extra={"slug": slug})
        self._session.flush()
