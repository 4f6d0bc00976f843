"""SQLAlchemy ORM models for a property database.

Every property database receives the same set of tables. The declarations
here are engine-agnostic; ``PostgresTenantStore.bind_model`` copies each
table into a per-database MetaData.
"""

from tenancy.infrastructure.models.billing import (
    BillModel,
    GuestFolioModel,
    ServiceFeeModel,
    TaxRuleModel,
)
from tenancy.infrastructure.models.foundation import (
    DailyRateModel,
    InventoryBlockModel,
    ReservationModel,
    RoomModel,
    RoomTypeModel,
)
from tenancy.infrastructure.models.guests import (
    CampaignModel,
    ConversationModel,
    EmailTemplateModel,
    GuestProfileModel,
    MessageModel,
    MessageTemplateModel,
    ReviewModel,
)
from tenancy.infrastructure.models.operations import (
    HousekeepingMessageModel,
    MaintenanceLogModel,
    PromotionModel,
    ReportSnapshotModel,
)
from tenancy.infrastructure.models.property import PropertyModel
from tenancy.infrastructure.models.settings import (
    AISettingsModel,
    EmailIntegrationModel,
    PropertyDetailsModel,
)
from tenancy.infrastructure.models.users import UserModel

__all__ = [
    "AISettingsModel",
    "BillModel",
    "CampaignModel",
    "ConversationModel",
    "DailyRateModel",
    "EmailIntegrationModel",
    "EmailTemplateModel",
    "GuestFolioModel",
    "GuestProfileModel",
    "HousekeepingMessageModel",
    "InventoryBlockModel",
    "MaintenanceLogModel",
    "MessageModel",
    "MessageTemplateModel",
    "PromotionModel",
    "PropertyDetailsModel",
    "PropertyModel",
    "ReportSnapshotModel",
    "ReservationModel",
    "ReviewModel",
    "RoomModel",
    "RoomTypeModel",
    "ServiceFeeModel",
    "TaxRuleModel",
    "UserModel",
]
