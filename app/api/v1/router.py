"""
API v1 router setup
Organized into: owner (salon management) and public (customer booking) routes
"""
from fastapi import APIRouter

from app.api.v1.owner import availability as owner_availability, bookings as owner_bookings, schedule
from app.api.v1.public import bookings as public_bookings

api_v1_router = APIRouter()

# ============================================================================
# OWNER ROUTES (salon id in the path; authentication sits in front of the API)
# ============================================================================
api_v1_router.include_router(
    owner_availability.router,
    tags=["Owner - Availability"]
)

api_v1_router.include_router(
    owner_bookings.router,
    tags=["Owner - Bookings"]
)

api_v1_router.include_router(
    schedule.router,
    tags=["Owner - Schedule"]
)

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    public_bookings.router,
    tags=["Public"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """API information and route groups"""
    return {
        "version": "1.0",
        "groups": {
            "owner": "/api/v1/owner/salons/{salon_id}/...",
            "public": "/api/v1/public/salons/{salon_id}/..."
        }
    }
