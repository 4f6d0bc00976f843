"""Default schema catalog built from the declared ORM models."""

from __future__ import annotations

from sqlalchemy import Table

from tenancy.application.catalog import SchemaCatalog
from tenancy.domain.value_objects import EntityName
from tenancy.infrastructure import models

ENTITY_TABLES: dict[EntityName, Table] = {
    EntityName.PROPERTY: models.PropertyModel.__table__,
    EntityName.USER: models.UserModel.__table__,
    EntityName.RESERVATION: models.ReservationModel.__table__,
    EntityName.ROOM_TYPE: models.RoomTypeModel.__table__,
    EntityName.ROOM: models.RoomModel.__table__,
    EntityName.DAILY_RATE: models.DailyRateModel.__table__,
    EntityName.INVENTORY_BLOCK: models.InventoryBlockModel.__table__,
    EntityName.GUEST_PROFILE: models.GuestProfileModel.__table__,
    EntityName.CAMPAIGN: models.CampaignModel.__table__,
    EntityName.CONVERSATION: models.ConversationModel.__table__,
    EntityName.MESSAGE: models.MessageModel.__table__,
    EntityName.MESSAGE_TEMPLATE: models.MessageTemplateModel.__table__,
    EntityName.EMAIL_TEMPLATE: models.EmailTemplateModel.__table__,
    EntityName.REVIEW: models.ReviewModel.__table__,
    EntityName.GUEST_FOLIO: models.GuestFolioModel.__table__,
    EntityName.BILL: models.BillModel.__table__,
    EntityName.PROPERTY_DETAILS: models.PropertyDetailsModel.__table__,
    EntityName.EMAIL_INTEGRATION: models.EmailIntegrationModel.__table__,
    EntityName.TAX_RULE: models.TaxRuleModel.__table__,
    EntityName.SERVICE_FEE: models.ServiceFeeModel.__table__,
    EntityName.AI_SETTINGS: models.AISettingsModel.__table__,
    EntityName.REPORT_SNAPSHOT: models.ReportSnapshotModel.__table__,
    EntityName.PROMOTION: models.PromotionModel.__table__,
    EntityName.MAINTENANCE_LOG: models.MaintenanceLogModel.__table__,
    EntityName.HOUSEKEEPING_MESSAGE: models.HousekeepingMessageModel.__table__,
}


def build_default_catalog() -> SchemaCatalog:
    """Catalog holding the table of every entity a property database has."""
    return SchemaCatalog(ENTITY_TABLES)
