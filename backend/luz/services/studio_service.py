# backend/luz/services/studio_service.py
"""Studio and slot management for operators."""

from typing import List

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException, ValidationException
from ..models.slot import Slot
from ..models.studio import Studio
from ..models.user import StudioRole, User
from ..repositories.factory import RepositoryFactory
from ..schemas.studio import SlotCreate, StudioCreate
from .base import BaseService
from .permission_service import PermissionService


class StudioService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.studio_repository = RepositoryFactory.create_studio_repository(db)
        self.slot_repository = RepositoryFactory.create_slot_repository(db)
        self.permissions = PermissionService(db)

    @BaseService.measure_operation("create_studio")
    def create_studio(self, actor: User, data: StudioCreate) -> Studio:
        """Create a studio and make the creator its owner."""
        with self.transaction():
            if self.studio_repository.slug_exists(data.slug):
                raise ConflictException(
                    "Studio with this slug already exists",
                    code="STUDIO_SLUG_TAKEN",
                    details={"slug": data.slug},
                )
            studio = self.studio_repository.create(
                slug=data.slug,
                name=data.name,
                timezone=data.timezone,
                currency=data.currency,
            )
            self.studio_repository.add_member(studio.id, actor.id, StudioRole.OWNER)

        self.log_operation("create_studio", studio_id=studio.id, user_id=actor.id)
        return studio

    @BaseService.measure_operation("list_studios")
    def list_studios(self, actor: User) -> List[Studio]:
        if actor.is_admin:
            return self.studio_repository.list_all()
        return self.studio_repository.list_for_user(actor.id)

    def get_studio(self, studio_id: str) -> Studio:
        studio = self.studio_repository.get_by_id(studio_id)
        if studio is None:
            raise NotFoundException("Studio not found", code="STUDIO_NOT_FOUND")
        return studio

    @BaseService.measure_operation("create_slot")
    def create_slot(self, actor: User, studio_id: str, data: SlotCreate) -> Slot:
        """
        Create an active slot.

        Checks run as: studio exists (404), participant bounds (400), then
        studio access (403).
        """
        with self.transaction():
            studio = self.get_studio(studio_id)
            if data.min_participants > data.max_participants:
                raise ValidationException(
                    "minParticipants cannot be greater than maxParticipants",
                    code="INVALID_PARTICIPANT_BOUNDS",
                )
            self.permissions.ensure_studio_access(actor, studio.id)

            slot = self.slot_repository.create(
                studio_id=studio.id,
                title=data.title,
                starts_at=data.starts_at,
                duration_min=data.duration_min,
                recurrence_rule=data.recurrence_rule,
                price=data.price,
                min_participants=data.min_participants,
                max_participants=data.max_participants,
                for_children=data.for_children,
                active=True,
            )

        self.log_operation("create_slot", slot_id=slot.id, studio_id=studio_id)
        return slot

    @BaseService.measure_operation("list_slots")
    def list_slots(self, actor: User, studio_id: str) -> List[Slot]:
        studio = self.get_studio(studio_id)
        self.permissions.ensure_studio_access(actor, studio.id)
        return self.slot_repository.list_for_studio(studio.id)

    @BaseService.measure_operation("set_slot_active")
    def set_slot_active(self, actor: User, slot_id: str, active: bool) -> Slot:
        """Deactivate or reactivate a slot; inactive slots take no new bookings."""
        with self.transaction():
            slot = self.slot_repository.get_by_id(slot_id)
            if slot is None:
                raise NotFoundException("Slot not found", code="SLOT_NOT_FOUND")
            self.permissions.ensure_studio_access(actor, slot.studio_id)
            self.slot_repository.update(slot, active=active)

        self.log_operation("set_slot_active", slot_id=slot_id, active=active)
        return slot
