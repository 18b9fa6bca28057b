from fastapi import APIRouter

from hr_portal.api.availability import availability_router
from hr_portal.api.holidays import holidays_router
from hr_portal.api.notifications import notifications_router
from hr_portal.api.reports import reports_router
from hr_portal.api.vacations import vacations_router

api_router = APIRouter()
api_router.include_router(availability_router)
api_router.include_router(vacations_router)
api_router.include_router(holidays_router)
api_router.include_router(notifications_router)
api_router.include_router(reports_router)
