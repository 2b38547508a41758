from workbooster.models.users import User
from workbooster.models.pipeline import LeadStage, LeadStatus
from workbooster.models.masters import (
    Industry,
    LeadSource,
    City,
    Country,
    DepartmentMaster,
    Product,
    IndustryLineOfBusiness,
    UseCaseMaster,
)
from workbooster.models.accounts import (
    Account,
    AccountContact,
    AccountLineOfBusiness,
    AccountDepartment,
    AccountUseCase,
    DepartmentPainPoint,
)
from workbooster.models.leads import Lead
from workbooster.models.call_logs import LeadCallLog
from workbooster.models.meetings import AccountMeeting, MEETING_STATUSES
